"""The definitions of a folder of LuaCATS files, grouped by source file."""

import dataclasses
import logging
from typing import Iterable, Iterator

from mooncats.errors import WorkspaceError
from mooncats.location import FileUri, Range, read_range
from mooncats.schema import Definition

logger = logging.getLogger(__name__)


class SourceFile:
    """A Lua file containing only LuaCATS meta.

    Args:
        uri: Absolute URI of the file.
        text: The file contents.
    """

    def __init__(self, uri: FileUri, text: str) -> None:
        self.uri = uri
        self.text = text
        self.definitions: list[Definition] = []

    @classmethod
    def open(cls, uri: FileUri) -> 'SourceFile':
        """Read the file behind ``uri``."""
        try:
            text = uri.to_path().read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise WorkspaceError(f"Failed to read {uri}: {e}") from e
        return cls(uri, text)

    def add_definition(self, definition: Definition) -> None:
        """Attach a copy of ``definition`` holding only this file's defines."""
        defines = tuple(d for d in definition.defines if d.location.file == self.uri)
        if not defines:
            raise WorkspaceError(
                f"No defines of '{definition.name}' belong to {self.uri}"
            )
        self.definitions.append(dataclasses.replace(definition, defines=defines))

    def read(self, range_: Range) -> str:
        """Return the source text covered by ``range_``."""
        return read_range(self.text, range_)

    def __repr__(self) -> str:
        return f"SourceFile({self.uri!r}, {len(self.definitions)} definitions)"


class Workspace:
    """A root folder of LuaCATS definition files.

    Iterating a workspace yields its files ordered by depth below the root,
    then by file name.

    Args:
        root: URI of the root folder.
    """

    def __init__(self, root: FileUri) -> None:
        self.root = root
        self.files: dict[FileUri, SourceFile] = {}

    def load(self, definitions: Iterable[Definition]) -> None:
        """Distribute definitions to the source files they are declared in.

        Declarations outside the root are skipped; they are expected when a
        project extends a library type.

        Raises:
            WorkspaceError: If a file cannot be read.
        """
        for definition in definitions:
            for uri in definition.files:
                if not uri.starts_with(self.root):
                    logger.debug(
                        "Skipping declaration outside of workspace: %s (%s)",
                        definition.name, uri,
                    )
                    continue

                source_file = self.files.get(uri)
                if source_file is None:
                    source_file = SourceFile.open(uri)
                    self.files[uri] = source_file

                source_file.add_definition(definition)

    def file_depth(self, source_file: SourceFile) -> int:
        return source_file.uri.depth_from(self.root)

    def __iter__(self) -> Iterator[SourceFile]:
        return iter(sorted(
            self.files.values(),
            key=lambda f: (self.file_depth(f), f.uri.name),
        ))

    def __len__(self) -> int:
        return len(self.files)
