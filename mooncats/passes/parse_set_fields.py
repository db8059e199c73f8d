"""Attach ``setfield`` / ``setindex`` assignments to their owning table.

Runs after ``parse_items``. Owners that are missing from the file are
skipped: they are declared in another module or later in the workspace.
Class owners are skipped too, since a class already has all its members
from its own ``fields`` list.
"""

import logging

from mooncats.domain.items import Class, Field, MetaFile, NamedFunction, Table
from mooncats.errors import DocItemError
from mooncats.kind_detector import DefineRole, KindDetector
from mooncats.parsers.function_parser import parse_function
from mooncats.passes.names import split_member
from mooncats.schema import ExtendsType
from mooncats.workspace import SourceFile

logger = logging.getLogger(__name__)


def parse_set_fields(meta_file: MetaFile, source_file: SourceFile) -> None:
    detector = KindDetector()

    for definition in source_file.definitions:
        if detector.detect(definition).role is not DefineRole.SET_FIELD:
            continue

        define = definition.head
        table_name, field_name = split_member(definition.name)

        owner = meta_file.items.get(table_name)
        if owner is None:
            logger.debug("Skipping missing table reference %s", definition.name)
            continue

        if isinstance(owner.inner, Class):
            continue
        if not isinstance(owner.inner, Table):
            raise DocItemError(f"Setting field {field_name} for non-table {owner.name}")

        if not define.extends:
            raise DocItemError(
                f"Expected an extends for setfield {definition.name} at {define.location.range}"
            )
        extends = define.extends[0]
        table = owner.inner

        if extends.extends_type.is_primitive or extends.extends_type is ExtendsType.TABLE:
            logger.debug("Adding table field %s.%s", table_name, field_name)
            table.add_field(Field(
                name=field_name,
                description=definition.rawdesc,
                lua_type=extends.view,
            ))
        elif extends.extends_type is ExtendsType.FUNCTION:
            logger.debug("Adding table function %s.%s", table_name, field_name)
            table.add_function(NamedFunction(
                name=field_name,
                function=parse_function(extends),
            ))
        else:
            raise DocItemError(
                f"Unexpected setfield type {extends.extends_type.value} for {definition.name}"
            )
