"""Documentation items produced by the doc tree passes.

A ``MetaFile`` owns the items declared in one source file, keyed by name.
Items are built by the item parsers and then extended in place by the
field-attachment passes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from mooncats.location import FileUri, Range


class DocItemKind(Enum):
    CLASS = 'class'
    TABLE = 'table'
    TYPE_ALIAS = 'type_alias'
    ENUM = 'enum'
    GLOBAL = 'global'


class ArgumentKind(Enum):
    DOC_TYPE = 'doc_type'
    LOCAL = 'local'
    SELF = 'self'
    VARARG = 'vararg'


# ── Members ──────────────────────────────────────────────────────────────

@dataclass
class Field:
    name: str
    description: str | None
    lua_type: str


@dataclass
class Argument:
    """A function argument.

    ``lua_type`` is the rendered type, or the ``self`` / ``...`` marker.
    """
    name: str | None
    description: str | None
    kind: ArgumentKind
    lua_type: str


@dataclass
class Return:
    name: str | None
    lua_type: str
    description: str | None = None


@dataclass
class Function:
    description: str | None
    view: str
    arguments: list[Argument] = field(default_factory=list)
    returns: list[Return] = field(default_factory=list)
    is_async: bool = False
    deprecated: bool = False


@dataclass
class NamedFunction:
    name: str
    function: Function


# ── Item bodies ──────────────────────────────────────────────────────────

@dataclass
class Class:
    fields: list[Field] = field(default_factory=list)
    methods: list[NamedFunction] = field(default_factory=list)


@dataclass
class Table:
    """A global table; ``view`` is the type the language server inferred."""
    view: str
    fields: dict[str, Field] = field(default_factory=dict)
    functions: dict[str, NamedFunction] = field(default_factory=dict)

    def add_field(self, item: Field) -> None:
        self.fields[item.name] = item

    def add_function(self, item: NamedFunction) -> None:
        self.functions[item.name] = item


@dataclass
class TypeAlias:
    aliased_type: str


@dataclass
class LuaEnum:
    fields: dict[str, Field] = field(default_factory=dict)

    def add_field(self, item: Field) -> None:
        self.fields[item.name] = item


class Global:
    """A global variable: either a primitive value or a function."""


@dataclass
class GlobalPrimitive(Global):
    lua_type: str


@dataclass
class GlobalFunction(Global):
    function: Function


ItemBody = Union[Class, Table, TypeAlias, LuaEnum, Global]

_KIND_BY_BODY = {
    Class: DocItemKind.CLASS,
    Table: DocItemKind.TABLE,
    TypeAlias: DocItemKind.TYPE_ALIAS,
    LuaEnum: DocItemKind.ENUM,
}


@dataclass
class DocItem:
    """A named top-level symbol of a source file."""

    name: str
    description: str | None
    range: Range
    inner: ItemBody

    @property
    def kind(self) -> DocItemKind:
        if isinstance(self.inner, Global):
            return DocItemKind.GLOBAL
        return _KIND_BY_BODY[type(self.inner)]


# ── Files ────────────────────────────────────────────────────────────────

@dataclass
class MetaFile:
    """The documentation of one source file and the files nested under it."""

    uri: FileUri
    items: dict[str, DocItem] = field(default_factory=dict)
    children: list[MetaFile] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.uri.stem

    def add_item(self, item: DocItem) -> None:
        """Add an item, replacing any earlier item of the same name."""
        self.items[item.name] = item

    def items_of(self, kind: DocItemKind) -> list[DocItem]:
        return [item for item in self.items.values() if item.kind is kind]

    @property
    def classes(self) -> list[DocItem]:
        return self.items_of(DocItemKind.CLASS)

    @property
    def tables(self) -> list[DocItem]:
        return self.items_of(DocItemKind.TABLE)

    @property
    def type_aliases(self) -> list[DocItem]:
        return self.items_of(DocItemKind.TYPE_ALIAS)

    @property
    def enums(self) -> list[DocItem]:
        return self.items_of(DocItemKind.ENUM)

    @property
    def globals(self) -> list[DocItem]:
        return self.items_of(DocItemKind.GLOBAL)

    def walk(self):
        """Yield this file and all its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()
