"""Typed records for the lua-language-server ``doc.json`` export.

See https://luals.github.io/wiki/export-docs/ for the format. This module
only maps the JSON structure onto dataclasses; interpreting the records is
left to the doc tree passes.

Two wire quirks are handled here so no other module sees them:
  - positions arrive packed into a single integer (see ``location``)
  - a define's ``extends`` may be missing, null, one object, or an array
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from mooncats.errors import SchemaError
from mooncats.location import FileUri, Location, Range


class DefinitionType(Enum):
    """Top-level flavor of a definition."""
    TYPE = 'type'
    VARIABLE = 'variable'


class DefineType(Enum):
    """What a single define site declares."""
    DOC_ALIAS = 'doc.alias'
    DOC_CLASS = 'doc.class'
    DOC_ENUM = 'doc.enum'
    DOC_FIELD = 'doc.field'
    DOC_TYPE = 'doc.type'
    TABLE_FIELD = 'tablefield'
    SET_GLOBAL = 'setglobal'
    SET_FIELD = 'setfield'
    SET_METHOD = 'setmethod'
    SET_INDEX = 'setindex'

    @property
    def is_type_define(self) -> bool:
        """True for kinds only a ``type`` definition may declare."""
        return self in _TYPE_DEFINE_TYPES


_TYPE_DEFINE_TYPES = frozenset({
    DefineType.DOC_ALIAS,
    DefineType.DOC_CLASS,
    DefineType.DOC_ENUM,
    DefineType.DOC_FIELD,
    DefineType.DOC_TYPE,
    DefineType.TABLE_FIELD,
})


class ExtendsType(Enum):
    """The kind of value a define assigns."""
    DOC_TYPE = 'doc.type'
    DOC_EXTENDS_NAME = 'doc.extends.name'
    BINARY = 'binary'
    FUNCTION = 'function'
    INTEGER = 'integer'
    NIL = 'nil'
    NUMBER = 'number'
    STRING = 'string'
    TABLE = 'table'

    @property
    def is_primitive(self) -> bool:
        return self in _PRIMITIVE_TYPES

    @property
    def is_doc(self) -> bool:
        return self in (ExtendsType.DOC_TYPE, ExtendsType.DOC_EXTENDS_NAME)


_PRIMITIVE_TYPES = frozenset({
    ExtendsType.BINARY,
    ExtendsType.INTEGER,
    ExtendsType.NIL,
    ExtendsType.NUMBER,
    ExtendsType.STRING,
})


class FieldType(Enum):
    DOC_FIELD = 'doc.field'
    SET_FIELD = 'setfield'
    SET_METHOD = 'setmethod'


class Visibility(Enum):
    PUBLIC = 'public'
    PROTECTED = 'protected'
    PRIVATE = 'private'
    PACKAGE = 'package'


class ArgType(Enum):
    DOC_TYPE = 'doc.type'
    BINARY = 'binary'
    FUNCTION = 'function'
    INTEGER = 'integer'
    LOCAL = 'local'
    NIL = 'nil'
    NUMBER = 'number'
    SELF = 'self'
    STRING = 'string'
    TABLE = 'table'
    VARARG = '...'


class ReturnType(Enum):
    DOC_TYPE = 'doc.type'
    BINARY = 'binary'
    FUNCTION = 'function'
    FUNCTION_RETURN = 'function.return'
    LOCAL = 'local'
    NIL = 'nil'
    NUMBER = 'number'
    STRING = 'string'
    TABLE = 'table'


# ── Records ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FuncArg:
    """A function argument. The name is missing for varargs."""

    name: str | None
    arg_type: ArgType
    view: str
    range: Range | None = None
    desc: str | None = None
    rawdesc: str | None = None


@dataclass(frozen=True)
class FuncReturn:
    name: str | None
    return_type: ReturnType
    view: str
    desc: str | None = None
    rawdesc: str | None = None


@dataclass(frozen=True)
class Extends:
    """The value assigned by a define. Only functions carry args/returns."""

    range: Range
    extends_type: ExtendsType
    view: str
    desc: str | None = None
    rawdesc: str | None = None
    is_async: bool | None = None
    deprecated: bool | None = None
    args: tuple[FuncArg, ...] = ()
    returns: tuple[FuncReturn, ...] = ()


@dataclass(frozen=True)
class Define:
    define_type: DefineType
    location: Location
    extends: tuple[Extends, ...] = ()


@dataclass(frozen=True)
class Field:
    """A member declared on a type definition."""

    name: str
    field_type: FieldType
    location: Location
    extends: Extends
    desc: str | None = None
    rawdesc: str | None = None
    visible: Visibility | None = None
    is_async: bool | None = None
    deprecated: bool | None = None


@dataclass(frozen=True)
class Definition:
    """One named symbol, possibly defined at several locations.

    Only the first (head) define drives classification of the symbol.
    """

    definition_type: DefinitionType
    name: str
    defines: tuple[Define, ...]
    desc: str | None = None
    rawdesc: str | None = None
    fields: tuple[Field, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.defines:
            raise SchemaError(f"Definition '{self.name}' has no defines")

        is_type = self.definition_type is DefinitionType.TYPE
        for define in self.defines:
            if define.define_type.is_type_define != is_type:
                raise SchemaError(
                    f"Definition '{self.name}' is a {self.definition_type.value} "
                    f"but declares {define.define_type.value}"
                )

    @property
    def head(self) -> Define:
        return self.defines[0]

    @property
    def files(self) -> list[FileUri]:
        """Distinct files among the defines, in first-seen order."""
        return list(dict.fromkeys(d.location.file for d in self.defines))


# ── Loading ──────────────────────────────────────────────────────────────

def load_definitions(source: str | bytes | Iterable[dict[str, Any]]) -> list[Definition]:
    """Parse a doc.json array into Definitions.

    Args:
        source: Raw JSON text, or an already decoded list of objects.

    Returns:
        Definitions in input order.

    Raises:
        SchemaError: If the JSON is malformed or a record does not match
            the schema.
    """
    if isinstance(source, (str, bytes)):
        try:
            source = json.loads(source)
        except json.JSONDecodeError as e:
            raise SchemaError(f"Invalid doc.json: {e}") from e

    if not isinstance(source, list):
        raise SchemaError("Expected a JSON array of definitions")

    return [parse_definition(raw) for raw in source]


def parse_definition(raw: dict[str, Any]) -> Definition:
    """Parse one definition object, naming it in any error."""
    name = raw.get('name', '<unnamed>') if isinstance(raw, dict) else '<invalid>'
    try:
        definition_type = DefinitionType(raw['type'])
        defines = tuple(_parse_define(d) for d in raw['defines'])
        fields = ()
        if definition_type is DefinitionType.TYPE:
            fields = tuple(_parse_field(f) for f in raw.get('fields') or ())
        return Definition(
            definition_type=definition_type,
            name=raw['name'],
            defines=defines,
            desc=raw.get('desc'),
            rawdesc=raw.get('rawdesc'),
            fields=fields,
        )
    except SchemaError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise SchemaError(f"Invalid definition '{name}': {_describe(e)}") from e


def normalize_extends(value: Any) -> list[dict[str, Any]]:
    """Normalize the four wire shapes of ``extends`` into a list."""
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        return value
    raise SchemaError(f"Expected array, object or null for extends, got {type(value).__name__}")


def _parse_define(raw: dict[str, Any]) -> Define:
    return Define(
        define_type=DefineType(raw['type']),
        location=_parse_location(raw),
        extends=tuple(_parse_extends(e) for e in normalize_extends(raw.get('extends'))),
    )


def _parse_extends(raw: dict[str, Any]) -> Extends:
    return Extends(
        range=_parse_range(raw),
        extends_type=ExtendsType(raw['type']),
        view=raw['view'],
        desc=raw.get('desc'),
        rawdesc=raw.get('rawdesc'),
        is_async=raw.get('async'),
        deprecated=raw.get('deprecated'),
        args=tuple(_parse_arg(a) for a in raw.get('args') or ()),
        returns=tuple(_parse_return(r) for r in raw.get('returns') or ()),
    )


def _parse_field(raw: dict[str, Any]) -> Field:
    visible = raw.get('visible')
    return Field(
        name=raw['name'],
        field_type=FieldType(raw['type']),
        location=_parse_location(raw),
        extends=_parse_extends(raw['extends']),
        desc=raw.get('desc'),
        rawdesc=raw.get('rawdesc'),
        visible=Visibility(visible) if visible else None,
        is_async=raw.get('async'),
        deprecated=raw.get('deprecated'),
    )


def _parse_arg(raw: dict[str, Any]) -> FuncArg:
    return FuncArg(
        name=raw.get('name'),
        arg_type=ArgType(raw['type']),
        view=raw['view'],
        range=_parse_range(raw) if 'start' in raw else None,
        desc=raw.get('desc'),
        rawdesc=raw.get('rawdesc'),
    )


def _parse_return(raw: dict[str, Any]) -> FuncReturn:
    return FuncReturn(
        name=raw.get('name'),
        return_type=ReturnType(raw['type']),
        view=raw['view'],
        desc=raw.get('desc'),
        rawdesc=raw.get('rawdesc'),
    )


def _parse_location(raw: dict[str, Any]) -> Location:
    return Location(file=FileUri(raw['file']), range=_parse_range(raw))


def _parse_range(raw: dict[str, Any]) -> Range:
    end = raw['finish'] if 'finish' in raw else raw['end']
    return Range.unpack(raw['start'], end)


def _describe(error: Exception) -> str:
    if isinstance(error, KeyError):
        return f"missing key {error}"
    return str(error)
