"""Pass 1: turn primary definitions into doc items."""

from mooncats.domain.items import MetaFile
from mooncats.kind_detector import KindDetector
from mooncats.parser_registry import ParserRegistry
from mooncats.workspace import SourceFile


def parse_items(meta_file: MetaFile, source_file: SourceFile) -> None:
    """Add an item for every primary definition in the file.

    Later items replace earlier ones of the same name.
    """
    registry = ParserRegistry()
    detector = KindDetector()

    for definition in source_file.definitions:
        if not detector.detect(definition).is_primary:
            continue

        item = registry.parse_item(definition)
        if item is not None:
            meta_file.add_item(item)
