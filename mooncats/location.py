"""Locations within source files as line and character offsets.

Positions follow the lua-language-server convention: zero-based lines and
characters, characters counted in UTF-16 code units. On the wire a position
is packed into a single integer (``line * 10000 + character``).
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote, urlsplit
from urllib.request import url2pathname

_PACK_FACTOR = 10_000


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based (line, character) position in a document."""

    line: int
    character: int

    def __post_init__(self) -> None:
        if self.line < 0 or self.character < 0:
            raise ValueError(f"Negative position ({self.line}, {self.character})")

    @classmethod
    def unpack(cls, value: int) -> Position:
        """Unpack a single integer using the LuaLS encoding."""
        return cls(line=value // _PACK_FACTOR, character=value % _PACK_FACTOR)

    def pack(self) -> int:
        """Pack into a single integer, capping the character at 9999."""
        return self.line * _PACK_FACTOR + min(self.character, _PACK_FACTOR - 1)


@dataclass(frozen=True, order=True)
class Range:
    """A range of characters between two positions (``start <= end``)."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Range start {self.start} is after end {self.end}")

    @classmethod
    def unpack(cls, start: int, end: int) -> Range:
        return cls(Position.unpack(start), Position.unpack(end))

    def join(self, other: Range) -> Range:
        """Extend this range to the end of ``other``.

        Only applies when ``other`` starts at or after this range's end;
        an overlapping ``other`` leaves this range unchanged.
        """
        if other.start < self.end:
            return self
        return Range(self.start, other.end)

    @property
    def bounds(self) -> tuple[Position, Position]:
        return self.start, self.end


class FileUri:
    """An absolute ``file:`` URI identifying one source file.

    Trailing slashes are not significant: ``file:///a/b`` and
    ``file:///a/b/`` name the same location.

    Args:
        uri: The URI string.

    Raises:
        ValueError: If the scheme is not ``file``, the path is empty, or the
            path ends in a parent-directory marker.
    """

    def __init__(self, uri: str) -> None:
        parts = urlsplit(uri)
        if parts.scheme != 'file':
            raise ValueError(f"Expected a file URI, got '{uri}'")

        path = unquote(parts.path)
        segments = tuple(s for s in path.split('/') if s)
        if not segments:
            raise ValueError(f"File URI '{uri}' has an empty path")
        if segments[-1] == '..':
            raise ValueError(f"File URI '{uri}' ends in a parent directory")

        self._segments = segments
        self._host = parts.netloc
        self._uri = f"file://{self._host}/" + quote('/'.join(segments), safe='/:')

    @classmethod
    def from_path(cls, path: str | Path) -> FileUri:
        """Build a URI from an absolute filesystem path."""
        path = Path(path)
        if not path.is_absolute():
            raise ValueError(f"Path '{path}' is not absolute")
        return cls(path.as_uri())

    # ── Path queries ─────────────────────────────────────────────────────

    @property
    def segments(self) -> tuple[str, ...]:
        return self._segments

    @property
    def name(self) -> str:
        """The last path segment (the file name)."""
        return self._segments[-1]

    @property
    def stem(self) -> str:
        return _split_name(self.name)[0]

    @property
    def extension(self) -> str | None:
        return _split_name(self.name)[1]

    @property
    def parent_name(self) -> str | None:
        """Name of the directory containing this file, if any."""
        if len(self._segments) < 2:
            return None
        return self._segments[-2]

    @property
    def depth(self) -> int:
        """Number of path segments, not counting the file name."""
        return len(self._segments) - 1

    def depth_from(self, root: FileUri) -> int:
        """Depth relative to ``root``; a file directly inside root is 1."""
        return self.depth - root.depth

    def starts_with(self, other: FileUri) -> bool:
        """True if ``other``'s path is a segment-wise prefix of this path."""
        if self._host != other._host:
            return False
        return self._segments[:len(other._segments)] == other._segments

    def to_path(self) -> Path:
        return Path(url2pathname(posixpath.join('/', *self._segments)))

    # ── Dunder ───────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileUri):
            return NotImplemented
        return self._uri == other._uri

    def __hash__(self) -> int:
        return hash(self._uri)

    def __str__(self) -> str:
        return self._uri

    def __repr__(self) -> str:
        return f"FileUri('{self._uri}')"


@dataclass(frozen=True)
class Location:
    """A source file and a range of characters within it."""

    file: FileUri
    range: Range


def _split_name(name: str) -> tuple[str, str | None]:
    head, dot, tail = name.rpartition('.')
    if not dot or not head:
        return name, None
    return head, tail


def read_range(text: str, range_: Range) -> str:
    """Read the text covered by ``range_``.

    Character offsets are UTF-16 code units, so each line is sliced in its
    UTF-16 encoding. Line breaks between lines are not kept.
    """
    start, end = range_.bounds
    pieces: list[str] = []

    for i, line in enumerate(text.splitlines()):
        if i < start.line or i > end.line:
            continue
        units = line.encode('utf-16-le')
        lo = start.character * 2 if i == start.line else 0
        hi = end.character * 2 if i == end.line else len(units)
        pieces.append(units[lo:hi].decode('utf-16-le', errors='replace'))

    return ''.join(pieces)
