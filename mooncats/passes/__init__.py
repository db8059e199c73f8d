"""Doc tree passes, applied to each source file in order.

Each pass takes the file's MetaFile and SourceFile and mutates the
MetaFile in place.
"""

from mooncats.passes.merge_class_tables import merge_class_tables
from mooncats.passes.parse_items import parse_items
from mooncats.passes.parse_set_fields import parse_set_fields
from mooncats.passes.parse_table_fields import parse_table_fields

PASSES = (
    parse_items,
    parse_set_fields,
    parse_table_fields,
    merge_class_tables,
)

__all__ = [
    'PASSES', 'parse_items', 'parse_set_fields', 'parse_table_fields',
    'merge_class_tables',
]
