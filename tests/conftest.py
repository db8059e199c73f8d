"""Shared test fixtures."""

import json

import pytest

from mooncats.location import FileUri
from mooncats.schema import parse_definition


# ── Sample Lua Content ───────────────────────────────────────────────────

HELLO_LUA = """\
---@meta

---The current app version.
HELLO_VERSION = "0.0.1"

---Greet the person with the given name.
---@param name string The name to use in the greeting
---@return string # The greeting
function greet(name) end
"""

RENOISE_LUA = """\
---@meta

---@class renoise
renoise = {}

---@type number
renoise.API_VERSION = 6.1
"""

APPLICATION_LUA = """\
---@meta

---The Renoise application.
---@class renoise.Application
---@field log_filename string The path to the log file used by Renoise.
renoise.Application = {}

---Shows an info message dialog to the user.
---@param message string an informative message
function renoise.Application:show_message(message) end
"""

COLORS_LUA = """\
---@meta colors

---@enum colors
local COLORS = {
	black = 0,
	red = 2,
}
"""


# ── Raw doc.json builders ────────────────────────────────────────────────

def pos(line: int, character: int = 0) -> int:
    """Pack a position the way lua-language-server does."""
    return line * 10000 + character


def extends(type_: str, view: str, **extra) -> dict:
    data = {'type': type_, 'view': view, 'start': pos(0), 'finish': pos(0, 10)}
    data.update(extra)
    return data


def func_extends(view: str, args=(), returns=(), **extra) -> dict:
    return extends('function', view, args=list(args), returns=list(returns), **extra)


def arg(name, type_: str, view: str, rawdesc: str | None = None) -> dict:
    return {
        'name': name, 'type': type_, 'view': view, 'rawdesc': rawdesc,
        'start': pos(0), 'finish': pos(0, 5),
    }


def ret(type_: str, view: str, name: str | None = None, rawdesc: str | None = None) -> dict:
    return {'name': name, 'type': type_, 'view': view, 'rawdesc': rawdesc}


def define(type_: str, file: str, extends_=None, line: int = 0) -> dict:
    data = {'type': type_, 'file': file, 'start': pos(line), 'finish': pos(line, 20)}
    if extends_ is not None:
        data['extends'] = extends_
    return data


def field(name: str, type_: str, file: str, extends_: dict, rawdesc: str | None = None) -> dict:
    return {
        'name': name, 'type': type_, 'file': file, 'rawdesc': rawdesc,
        'start': pos(1), 'finish': pos(1, 20), 'extends': extends_,
    }


TYPE_DEFINE_KINDS = {'doc.alias', 'doc.class', 'doc.enum', 'doc.field', 'doc.type', 'tablefield'}


def raw_definition(name: str, defines: list, kind: str | None = None, fields=None, rawdesc=None) -> dict:
    """Build a raw definition; ``kind`` defaults to the flavor of the first define."""
    if kind is None:
        kind = 'type' if defines and defines[0]['type'] in TYPE_DEFINE_KINDS else 'variable'
    data = {'type': kind, 'name': name, 'defines': defines, 'rawdesc': rawdesc}
    if fields is not None:
        data['fields'] = fields
    return data


def definition(*args, **kwargs):
    """Build a parsed Definition from the raw builder arguments."""
    return parse_definition(raw_definition(*args, **kwargs))


# ── Fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def library(tmp_path):
    """A definitions folder with a nested module.

    Layout:
        library/hello.lua
        library/colors.lua
        library/renoise.lua
        library/renoise/application.lua
    """
    root = tmp_path / 'library'
    (root / 'renoise').mkdir(parents=True)
    (root / 'hello.lua').write_text(HELLO_LUA, encoding='utf-8')
    (root / 'colors.lua').write_text(COLORS_LUA, encoding='utf-8')
    (root / 'renoise.lua').write_text(RENOISE_LUA, encoding='utf-8')
    (root / 'renoise' / 'application.lua').write_text(APPLICATION_LUA, encoding='utf-8')
    return root


@pytest.fixture
def uri_of(library):
    """Return the file URI string of a path below the library folder."""
    def _uri(rel_path: str) -> str:
        return (library / rel_path).as_uri()
    return _uri


@pytest.fixture
def root_uri(library):
    return FileUri.from_path(library)


@pytest.fixture
def library_doc_json(uri_of):
    """A doc.json export of the library fixture."""
    hello = uri_of('hello.lua')
    colors = uri_of('colors.lua')
    renoise = uri_of('renoise.lua')
    application = uri_of('renoise/application.lua')

    return [
        raw_definition('HELLO_VERSION', [
            define('setglobal', hello, extends('string', 'string'), line=3),
        ], rawdesc='The current app version.'),
        raw_definition('greet', [
            define('setglobal', hello, func_extends(
                'function greet(name: string)\n  -> string',
                args=[arg('name', 'doc.type', 'string', 'The name to use in the greeting')],
                returns=[ret('doc.type', 'string', rawdesc='The greeting')],
                rawdesc='Greet the person with the given name.',
            ), line=8),
        ], rawdesc='Greet the person with the given name.'),
        raw_definition('colors', [define('doc.enum', colors, line=2)], kind='type', fields=[]),
        raw_definition('colors.black', [define('tablefield', colors, line=4)]),
        raw_definition('colors.red', [define('tablefield', colors, line=5)]),
        raw_definition('renoise', [
            define('setglobal', renoise, extends('table', 'renoise'), line=3),
        ]),
        raw_definition('renoise', [define('doc.class', renoise, line=2)], kind='type', fields=[
            field('API_VERSION', 'setfield', renoise, extends('number', 'number')),
        ]),
        raw_definition('renoise.API_VERSION', [
            define('setfield', renoise, extends('number', 'number'), line=6),
        ]),
        raw_definition('renoise.Application', [
            define('doc.class', application, line=3),
        ], kind='type', rawdesc='The Renoise application.', fields=[
            field('log_filename', 'doc.field', application,
                  extends('doc.type', 'string'), 'The path to the log file used by Renoise.'),
            field('show_message', 'setmethod', application, func_extends(
                '(method) renoise.Application:show_message(message: string)',
                args=[
                    arg('self', 'self', 'renoise.Application'),
                    arg('message', 'doc.type', 'string', 'an informative message'),
                ],
            )),
        ]),
        raw_definition('renoise.Application', [
            define('setfield', application, extends('table', 'renoise.Application'), line=5),
        ]),
    ]


@pytest.fixture
def library_doc_json_file(tmp_path, library_doc_json):
    path = tmp_path / 'doc.json'
    path.write_text(json.dumps(library_doc_json), encoding='utf-8')
    return str(path)
