"""Parser registry for primary define kinds."""

from mooncats.domain.items import DocItem
from mooncats.parsers.base_parser import BaseParser
from mooncats.schema import Definition, DefineType


class ParserRegistry:
    """Registry mapping primary define kinds to item parsers."""

    def __init__(self):
        self._parsers: dict[DefineType, BaseParser] = {}
        self._register_default_parsers()

    def _register_default_parsers(self) -> None:
        from mooncats.parsers.alias_parser import AliasParser
        from mooncats.parsers.class_parser import ClassParser
        from mooncats.parsers.enum_parser import EnumParser
        from mooncats.parsers.global_parser import GlobalParser

        for parser in (AliasParser(), ClassParser(), EnumParser(), GlobalParser()):
            self.register_parser(parser.define_type, parser)

    def get_parser(self, define_type: DefineType) -> BaseParser | None:
        return self._parsers.get(define_type)

    def register_parser(self, define_type: DefineType, parser: BaseParser) -> None:
        self._parsers[define_type] = parser

    def get_supported_types(self) -> list[DefineType]:
        return list(self._parsers.keys())

    def parse_item(self, definition: Definition) -> DocItem | None:
        """Parse a definition into a DocItem.

        Returns None when the head define is not a primary kind; those
        definitions are consumed by the field-attachment passes.
        """
        parser = self.get_parser(definition.head.define_type)
        if parser is None:
            return None

        return DocItem(
            name=definition.name,
            description=definition.rawdesc,
            range=definition.head.location.range,
            inner=parser.parse(definition),
        )
