"""Parser for ``---@class`` definitions.

A class definition carries its members in its own ``fields`` list, so the
class is complete after this parser runs. Function-typed members become
methods; everything else becomes a field. Members repeated under the same
name (for example a ``---@field`` later assigned in code) keep the first
declaration.
"""

import logging

from mooncats.domain.items import Class, Field, NamedFunction
from mooncats.errors import DocItemError
from mooncats.parsers.base_parser import BaseParser
from mooncats.parsers.function_parser import parse_function
from mooncats.schema import Definition, DefineType, ExtendsType, FieldType
from mooncats.schema import Field as SchemaField

logger = logging.getLogger(__name__)


class ClassParser(BaseParser):
    """Builds a Class with its fields and methods."""

    define_type = DefineType.DOC_CLASS

    def parse(self, definition: Definition) -> Class:
        self._ensure_define_type(definition)

        fields: dict[str, Field] = {}
        methods: dict[str, NamedFunction] = {}

        for member in definition.fields:
            if self._is_method(member):
                methods.setdefault(member.name, NamedFunction(
                    name=member.name,
                    function=parse_function(member.extends),
                ))
            else:
                fields.setdefault(member.name, Field(
                    name=member.name,
                    description=member.rawdesc,
                    lua_type=member.extends.view,
                ))

        logger.debug(
            "Parsed class %s: %d fields, %d methods",
            definition.name, len(fields), len(methods),
        )
        return Class(fields=list(fields.values()), methods=list(methods.values()))

    @staticmethod
    def _is_method(member: SchemaField) -> bool:
        is_function = member.extends.extends_type is ExtendsType.FUNCTION
        if member.field_type is FieldType.SET_METHOD:
            if not is_function:
                raise DocItemError(
                    f"Method '{member.name}' extends {member.extends.extends_type.value}, "
                    f"expected function"
                )
            return True
        return is_function
