"""Base class for doc item parsers."""

from abc import ABC, abstractmethod

from mooncats.domain.items import ItemBody
from mooncats.errors import DocItemError
from mooncats.schema import Definition, DefineType, Extends


class BaseParser(ABC):
    """Parses one kind of primary definition into an item body."""

    define_type: DefineType

    @abstractmethod
    def parse(self, definition: Definition) -> ItemBody:
        """Build the item body for ``definition``.

        Raises:
            DocItemError: If the definition does not carry the data its
                kind requires.
        """

    def _ensure_define_type(self, definition: Definition) -> None:
        actual = definition.head.define_type
        if actual is not self.define_type:
            raise DocItemError(
                f"Expected {self.define_type.value} for '{definition.name}', got {actual.value}"
            )

    @staticmethod
    def _first_extends(definition: Definition) -> Extends:
        extends = definition.head.extends
        if not extends:
            raise DocItemError(
                f"Expected extends for {definition.head.define_type.value} '{definition.name}'"
            )
        return extends[0]
