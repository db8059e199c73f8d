"""Parser for ``setglobal`` definitions.

A global assignment becomes a Table when a table is assigned (its members
are attached by the set-field pass), otherwise a Global holding either a
primitive type or a function.
"""

from mooncats.domain.items import GlobalFunction, GlobalPrimitive, ItemBody, Table
from mooncats.errors import DocItemError
from mooncats.parsers.base_parser import BaseParser
from mooncats.parsers.function_parser import parse_function
from mooncats.schema import Definition, DefineType, ExtendsType


class GlobalParser(BaseParser):

    define_type = DefineType.SET_GLOBAL

    def parse(self, definition: Definition) -> ItemBody:
        self._ensure_define_type(definition)
        extends = self._first_extends(definition)

        if extends.extends_type is ExtendsType.TABLE:
            return Table(view=extends.view)
        if extends.extends_type.is_primitive:
            return GlobalPrimitive(lua_type=extends.view)
        if extends.extends_type is ExtendsType.FUNCTION:
            return GlobalFunction(function=parse_function(extends))

        raise DocItemError(
            f"Global '{definition.name}' cannot declare {extends.extends_type.value}"
        )
