"""Markdown rendering of MetaFiles with Jinja2 templates."""

import os
from dataclasses import dataclass

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from mooncats.domain.items import DocItem, GlobalFunction, MetaFile

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'templates')
META_FILE_TEMPLATE = 'meta_file.md.j2'


@dataclass
class TemplateData:
    """Template context for one MetaFile, items partitioned by kind."""

    name: str
    classes: list[DocItem]
    tables: list[DocItem]
    type_aliases: list[DocItem]
    enums: list[DocItem]
    globals: list[DocItem]

    @classmethod
    def from_meta_file(cls, meta_file: MetaFile) -> 'TemplateData':
        def by_name(items: list[DocItem]) -> list[DocItem]:
            return sorted(items, key=lambda item: item.name)

        return cls(
            name=meta_file.name,
            classes=by_name(meta_file.classes),
            tables=by_name(meta_file.tables),
            type_aliases=by_name(meta_file.type_aliases),
            enums=by_name(meta_file.enums),
            globals=by_name(meta_file.globals),
        )


class MarkdownRenderer:
    """Renders one markdown page per MetaFile.

    Args:
        templates_dir: Folder holding ``meta_file.md.j2``.
    """

    def __init__(self, templates_dir: str = TEMPLATES_DIR) -> None:
        self._env = Environment(
            loader=FileSystemLoader(templates_dir),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.tests['function_global'] = lambda inner: isinstance(inner, GlobalFunction)

    def render_meta(self, meta_file: MetaFile) -> str:
        data = TemplateData.from_meta_file(meta_file)
        template = self._env.get_template(META_FILE_TEMPLATE)
        return template.render(**vars(data))

    def write_all(self, tree: list[MetaFile], base_dir: str, output_dir: str) -> list[str]:
        """Write a page for every MetaFile in ``tree``.

        Pages mirror the source layout below ``base_dir`` with an ``.md``
        extension.

        Returns:
            Paths of the written pages.
        """
        written: list[str] = []
        for root in tree:
            for meta_file in root.walk():
                rel_path = chapter_path(meta_file, base_dir)
                path = os.path.join(output_dir, rel_path)
                os.makedirs(os.path.dirname(path), exist_ok=True)
                with open(path, 'w', encoding='utf-8') as f:
                    f.write(self.render_meta(meta_file))
                written.append(path)
        return written


def chapter_path(meta_file: MetaFile, base_dir: str) -> str:
    """Path of a MetaFile's page relative to ``base_dir``, as ``.md``."""
    rel_path = os.path.relpath(meta_file.uri.to_path(), base_dir)
    return os.path.splitext(rel_path)[0] + '.md'
