"""Parser for ``---@enum`` definitions.

Enum values are separate ``tablefield`` records; they are attached later
by the table-field pass.
"""

from mooncats.domain.items import LuaEnum
from mooncats.parsers.base_parser import BaseParser
from mooncats.schema import Definition, DefineType


class EnumParser(BaseParser):

    define_type = DefineType.DOC_ENUM

    def parse(self, definition: Definition) -> LuaEnum:
        self._ensure_define_type(definition)
        return LuaEnum()
