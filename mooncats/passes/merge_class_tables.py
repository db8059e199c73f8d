"""Drop tables that are the initialization of a documented class.

``---@class foo`` followed by ``foo = {}`` yields both a Class and a Table
whose view is ``foo``. The class holds the members, so the table goes.
"""

import logging

from mooncats.domain.items import Class, MetaFile, Table
from mooncats.workspace import SourceFile

logger = logging.getLogger(__name__)


def merge_class_tables(meta_file: MetaFile, source_file: SourceFile) -> None:
    class_names = {
        item.name for item in meta_file.items.values() if isinstance(item.inner, Class)
    }

    removals = [
        item.name
        for item in meta_file.items.values()
        if isinstance(item.inner, Table) and item.inner.view in class_names
    ]

    for name in removals:
        logger.debug("Merging table %s with class %s", name, meta_file.items[name].inner.view)
        del meta_file.items[name]
