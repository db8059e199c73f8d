"""Tests for markdown rendering."""

import os

import pytest

from mooncats.doctree import document_folder
from mooncats.domain.items import DocItem, Field, MetaFile, Table, TypeAlias
from mooncats.location import FileUri, Position, Range
from mooncats.output.markdown import MarkdownRenderer, TemplateData, chapter_path
from mooncats.schema import load_definitions


@pytest.fixture
def tree(root_uri, library_doc_json):
    return document_folder(root_uri, load_definitions(library_doc_json))


def by_name(tree, name):
    return next(node for root in tree for node in root.walk() if node.name == name)


def item(name, inner, description=None):
    return DocItem(name, description, Range(Position(0, 0), Position(0, 1)), inner)


class TestTemplateData:

    def test_items_partitioned_and_sorted(self):
        meta_file = MetaFile(FileUri('file:///lib/x.lua'))
        meta_file.add_item(item('Zed', TypeAlias('string')))
        meta_file.add_item(item('alpha', Table('alpha')))
        meta_file.add_item(item('Beta', TypeAlias('number')))

        data = TemplateData.from_meta_file(meta_file)

        assert data.name == 'x'
        assert [i.name for i in data.type_aliases] == ['Beta', 'Zed']
        assert [i.name for i in data.tables] == ['alpha']
        assert data.classes == data.enums == data.globals == []


class TestMarkdownRenderer:
    """Tests for rendering MetaFile pages."""

    def setup_method(self):
        self.renderer = MarkdownRenderer()

    def test_globals_page(self, tree):
        page = self.renderer.render_meta(by_name(tree, 'hello'))

        assert page.startswith('# hello\n')
        assert 'HELLO_VERSION: string' in page
        assert 'The current app version.' in page
        assert 'function greet(name: string)\n  -> string' in page
        assert '- `name`: `string` - The name to use in the greeting' in page
        assert '- `string` - The greeting' in page

    def test_class_page_hides_self_argument(self, tree):
        page = self.renderer.render_meta(by_name(tree, 'application'))

        assert '## Class `renoise.Application`' in page
        assert '- `log_filename`: `string` - The path to the log file used by Renoise.' in page
        assert '### `renoise.Application:show_message`' in page
        assert '- `message`: `string` - an informative message' in page
        assert '`self`' not in page

    def test_enum_fields_have_no_type(self, tree):
        page = self.renderer.render_meta(by_name(tree, 'colors'))

        assert '## Enum `colors`' in page
        assert '- `black`\n' in page
        assert '- `red`\n' in page

    def test_table_and_alias_sections(self):
        meta_file = MetaFile(FileUri('file:///lib/bit.lua'))
        table = Table('bitlib')
        meta_file.add_item(item('bit', table, 'Bitwise operations.'))
        meta_file.add_item(item('Mask', TypeAlias('integer')))
        table.add_field(Field('width', None, 'integer'))

        page = self.renderer.render_meta(meta_file)

        assert '## `bit`' in page
        assert 'Bitwise operations.' in page
        assert '- `width`: `integer`' in page
        assert '## Alias `Mask`' in page
        assert '`integer`' in page

    def test_write_all_mirrors_source_layout(self, tree, library, tmp_path):
        out = tmp_path / 'book'
        written = self.renderer.write_all(tree, str(library), str(out))

        rel = sorted(os.path.relpath(p, out) for p in written)
        assert rel == sorted([
            'colors.md', 'hello.md', 'renoise.md', os.path.join('renoise', 'application.md'),
        ])
        assert (out / 'renoise' / 'application.md').read_text(encoding='utf-8').startswith(
            '# application\n'
        )


class TestChapterPath:

    def test_relative_markdown_path(self, tmp_path):
        meta_file = MetaFile(FileUri.from_path(tmp_path / 'lib' / 'renoise' / 'song.lua'))
        assert chapter_path(meta_file, str(tmp_path / 'lib')) == os.path.join('renoise', 'song.md')
