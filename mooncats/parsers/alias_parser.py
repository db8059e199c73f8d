"""Parser for ``---@alias`` definitions."""

from mooncats.domain.items import TypeAlias
from mooncats.errors import DocItemError
from mooncats.parsers.base_parser import BaseParser
from mooncats.schema import Definition, DefineType, ExtendsType


class AliasParser(BaseParser):
    """Builds a TypeAlias from the single doc type an alias extends."""

    define_type = DefineType.DOC_ALIAS

    def parse(self, definition: Definition) -> TypeAlias:
        self._ensure_define_type(definition)

        extends = definition.head.extends
        if len(extends) != 1:
            raise DocItemError(
                f"Expected one extends for alias '{definition.name}', got {len(extends)}"
            )
        if extends[0].extends_type is not ExtendsType.DOC_TYPE:
            raise DocItemError(
                f"Alias '{definition.name}' extends {extends[0].extends_type.value}, "
                f"expected doc.type"
            )

        return TypeAlias(aliased_type=extends[0].view)
