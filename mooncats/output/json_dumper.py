"""JSON output generation.

Writes the doc tree and build errors to a JSON directory.
"""

import json
import os
from dataclasses import asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from mooncats.domain.items import DocItem, GlobalFunction, GlobalPrimitive, MetaFile
from mooncats.location import Range


def serialize_range(range_: Range) -> dict[str, Any]:
    return {
        'start': {'line': range_.start.line, 'character': range_.start.character},
        'end': {'line': range_.end.line, 'character': range_.end.character},
    }


def serialize_item(item: DocItem) -> dict[str, Any]:
    """Convert a DocItem into plain JSON data."""
    inner = item.inner
    if isinstance(inner, GlobalPrimitive):
        body = {'primitive': inner.lua_type}
    elif isinstance(inner, GlobalFunction):
        body = {'function': asdict(inner.function)}
    else:
        body = asdict(inner)

    return {
        'name': item.name,
        'kind': item.kind.value,
        'description': item.description,
        'range': serialize_range(item.range),
        **body,
    }


def serialize_meta_file(meta_file: MetaFile) -> dict[str, Any]:
    """Convert a MetaFile and its children into nested JSON data."""
    partitions = {
        'classes': meta_file.classes,
        'tables': meta_file.tables,
        'type_aliases': meta_file.type_aliases,
        'enums': meta_file.enums,
        'globals': meta_file.globals,
    }
    return {
        'name': meta_file.name,
        'uri': str(meta_file.uri),
        'items': {
            key: [serialize_item(item) for item in sorted(items, key=lambda i: i.name)]
            for key, items in partitions.items()
        },
        'children': [serialize_meta_file(child) for child in meta_file.children],
    }


class JSONDumper:
    """Writes the doc tree to a JSON directory.

    Output structure:
        output_dir/
        ├── doc_tree.json
        └── errors.json (only if errors)

    Args:
        output_dir: Root directory for output files.
        pretty: Whether to pretty-print JSON (default True).
    """

    def __init__(self, output_dir: str, pretty: bool = True) -> None:
        self._output_dir = output_dir
        self._indent = 2 if pretty else None

    def write_tree(self, tree: list[MetaFile]) -> str:
        """Write the doc tree and return the file path."""
        os.makedirs(self._output_dir, exist_ok=True)
        data = {
            '_metadata': {
                'generated_at': datetime.now(timezone.utc).isoformat(),
                'root_files': len(tree),
                'total_files': sum(1 for root in tree for _ in root.walk()),
            },
            'files': [serialize_meta_file(meta_file) for meta_file in tree],
        }
        path = os.path.join(self._output_dir, 'doc_tree.json')
        self._write_json(path, data)
        return path

    def write_errors(self, errors: list[str]) -> None:
        """Write build errors (only if any exist)."""
        if not errors:
            return
        os.makedirs(self._output_dir, exist_ok=True)
        self._write_json(os.path.join(self._output_dir, 'errors.json'), errors)

    def _write_json(self, path: str, data: Any) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=self._indent, ensure_ascii=False, default=_json_default)


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return str(value)
