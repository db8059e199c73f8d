"""An mdbook preprocessor that appends LuaCATS API chapters to a book.

mdbook sends ``[context, book]`` as JSON on stdin and expects the
processed book as JSON on stdout. Books are handled as plain dicts in
mdbook's serialization format.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, TextIO

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

from mooncats.doctree import document_folder
from mooncats.domain.items import MetaFile
from mooncats.domain.models import PreprocessorConfig
from mooncats.location import FileUri
from mooncats.luals import generate_json_docs
from mooncats.output.markdown import MarkdownRenderer, chapter_path

logger = logging.getLogger(__name__)

SUPPORTED_RENDERERS = ('html', 'epub')

# mdbook release whose book JSON this preprocessor reads and writes
MDBOOK_VERSION = '0.4.40'


class MoonCats:
    """mdbook preprocessor generating one chapter per documented Lua file."""

    name = 'mooncats'

    def __init__(self, renderer: MarkdownRenderer | None = None, generate=generate_json_docs):
        self._renderer = renderer or MarkdownRenderer()
        self._generate = generate

    def supports_renderer(self, renderer: str) -> bool:
        return renderer in SUPPORTED_RENDERERS

    def config_for(self, context: dict[str, Any]) -> PreprocessorConfig:
        preprocessors = context.get('config', {}).get('preprocessor', {})
        return PreprocessorConfig.from_table(preprocessors.get(self.name))

    def run(self, context: dict[str, Any], book: dict[str, Any]) -> dict[str, Any]:
        """Append a part title and the API chapters to ``book``."""
        config = self.config_for(context)

        root = Path(context.get('root', '.'))
        if not root.is_absolute():
            root = Path.cwd() / root
        definitions_path = Path(config.definitions_path)
        if not definitions_path.is_absolute():
            definitions_path = root / definitions_path
        definitions_path = Path(os.path.normpath(definitions_path))
        logger.debug("Using definitions path: %s", definitions_path)

        definitions = self._generate(str(definitions_path), config.luals_command)
        tree = document_folder(FileUri.from_path(definitions_path), definitions)

        sections = book.setdefault('sections', [])
        sections.append({'PartTitle': config.part_title})
        for index, meta_file in enumerate(tree):
            chapter = self.build_chapter(meta_file, str(definitions_path), index, None)
            sections.append({'Chapter': chapter})

        return book

    def build_chapter(
        self,
        meta_file: MetaFile,
        base_dir: str,
        index: int,
        parent: dict[str, Any] | None,
    ) -> dict[str, Any]:
        """Build a chapter and its sub-chapters for ``meta_file``.

        Section numbers continue the parent's number; the first child of
        chapter ``2`` is ``2.1``.
        """
        if parent is None:
            number = [index + 1]
            parent_names: list[str] = []
        else:
            number = [*(parent['number'] or []), index + 1]
            parent_names = [*parent['parent_names'], parent['name']]

        chapter = {
            'name': meta_file.name,
            'content': self._renderer.render_meta(meta_file),
            'number': number,
            'sub_items': [],
            'path': chapter_path(meta_file, base_dir),
            'source_path': None,
            'parent_names': parent_names,
        }
        chapter['sub_items'] = [
            {'Chapter': self.build_chapter(child, base_dir, sub_index, chapter)}
            for sub_index, child in enumerate(meta_file.children)
        ]
        return chapter


def handle_preprocessing(preprocessor: MoonCats, stdin: TextIO, stdout: TextIO) -> None:
    """Read ``[context, book]`` from stdin and write the processed book."""
    context, book = json.load(stdin)

    book_version = context.get('mdbook_version', '')
    if not is_compatible_version(book_version):
        logger.warning(
            "The %s plugin was built against version %s of mdbook, "
            "but we're being called from version %s",
            preprocessor.name, MDBOOK_VERSION, book_version,
        )

    processed = preprocessor.run(context, book)
    json.dump(processed, stdout)


def is_compatible_version(version: str) -> bool:
    """True if ``version`` is a release compatible with ``MDBOOK_VERSION``."""
    try:
        return Version(version) in SpecifierSet(f'~={MDBOOK_VERSION}')
    except InvalidVersion:
        return False
