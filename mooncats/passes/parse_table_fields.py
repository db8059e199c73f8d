"""Attach ``tablefield`` records to their enum."""

import logging

from mooncats.domain.items import Field, LuaEnum, MetaFile
from mooncats.errors import DocItemError
from mooncats.kind_detector import DefineRole, KindDetector
from mooncats.passes.names import split_member
from mooncats.workspace import SourceFile

logger = logging.getLogger(__name__)


def parse_table_fields(meta_file: MetaFile, source_file: SourceFile) -> None:
    detector = KindDetector()

    for definition in source_file.definitions:
        if detector.detect(definition).role is not DefineRole.TABLE_FIELD:
            continue

        enum_name, field_name = split_member(definition.name)

        owner = meta_file.items.get(enum_name)
        if owner is None:
            logger.debug("Skipping missing enum reference %s", definition.name)
            continue

        if not isinstance(owner.inner, LuaEnum):
            raise DocItemError(f"Setting field {field_name} for non enum {owner.name}")

        logger.debug("Setting enum %s field %s", enum_name, field_name)
        # doc.json carries no types for enum values
        owner.inner.add_field(Field(
            name=field_name,
            description=definition.rawdesc,
            lua_type='',
        ))
