"""Options and results shared by the CLI and the mdbook preprocessor."""

from dataclasses import dataclass
from typing import Any

DEFAULT_DEFINITIONS_PATH = 'library'
DEFAULT_PART_TITLE = 'API Reference'
DEFAULT_LUALS_COMMAND = 'lua-language-server'


@dataclass
class BuildOptions:
    """Options controlling the ``build`` command output."""

    doc_json: str | None = None
    luals_command: str = DEFAULT_LUALS_COMMAND
    markdown: bool = False
    pretty: bool = True


@dataclass
class BuildResult:
    """Result summary of a build."""

    definitions: int
    files_loaded: int
    root_files: int
    output_dir: str


@dataclass
class PreprocessorConfig:
    """The ``[preprocessor.mooncats]`` table of a book.toml."""

    definitions_path: str = DEFAULT_DEFINITIONS_PATH
    part_title: str = DEFAULT_PART_TITLE
    luals_command: str = DEFAULT_LUALS_COMMAND

    @classmethod
    def from_table(cls, table: dict[str, Any] | None) -> 'PreprocessorConfig':
        config = cls()
        if not table:
            return config

        if isinstance(table.get('definitions-path'), str):
            config.definitions_path = table['definitions-path']
        if isinstance(table.get('part-title'), str):
            config.part_title = table['part-title']
        if isinstance(table.get('luals-command'), str):
            config.luals_command = table['luals-command']
        return config
