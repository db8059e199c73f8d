"""Tests for doc.json schema loading."""

import json

import pytest

from mooncats.errors import SchemaError
from mooncats.location import Position
from mooncats.schema import (
    ArgType,
    DefinitionType,
    DefineType,
    ExtendsType,
    FieldType,
    Visibility,
    load_definitions,
    normalize_extends,
)
from tests.conftest import arg, define, extends, field, func_extends, raw_definition, ret

FILE = 'file:///lib/hello.lua'


class TestNormalizeExtends:
    """The four wire shapes of ``extends`` all become lists."""

    def test_absent_or_null(self):
        assert normalize_extends(None) == []

    def test_single_object(self):
        assert normalize_extends({'type': 'table'}) == [{'type': 'table'}]

    def test_array(self):
        items = [{'type': 'table'}, {'type': 'string'}]
        assert normalize_extends(items) == items

    def test_other_value_rejected(self):
        with pytest.raises(SchemaError):
            normalize_extends('table')

    @pytest.mark.parametrize('wire,expected', [
        ('absent', 0), (None, 0), ('object', 1), ('array', 2),
    ])
    def test_define_extends_shapes(self, wire, expected):
        define_data = define('setglobal', FILE)
        if wire == 'object':
            define_data['extends'] = extends('table', 'x')
        elif wire == 'array':
            define_data['extends'] = [extends('table', 'x'), extends('nil', 'nil')]
        elif wire is None:
            define_data['extends'] = None

        [definition] = load_definitions([raw_definition('x', [define_data])])
        assert len(definition.head.extends) == expected


class TestLoadDefinitions:
    """Tests for parsing whole definitions."""

    def test_loads_json_text(self):
        text = json.dumps([raw_definition('x', [define('setglobal', FILE, extends('string', 'string'))])])
        [definition] = load_definitions(text)
        assert definition.name == 'x'
        assert definition.definition_type is DefinitionType.VARIABLE
        assert definition.head.define_type is DefineType.SET_GLOBAL
        assert definition.head.extends[0].extends_type is ExtendsType.STRING

    def test_decodes_packed_positions(self):
        data = define('setglobal', FILE, extends('string', 'string'))
        data['start'], data['finish'] = 30004, 30012
        [definition] = load_definitions([raw_definition('x', [data])])
        assert definition.head.location.range.start == Position(3, 4)
        assert definition.head.location.range.end == Position(3, 12)
        assert str(definition.head.location.file) == FILE

    def test_accepts_end_instead_of_finish(self):
        data = define('setglobal', FILE, extends('string', 'string'))
        data['end'] = data.pop('finish')
        [definition] = load_definitions([raw_definition('x', [data])])
        assert definition.head.location.range.end == Position(0, 20)

    def test_type_definition_fields(self):
        raw = raw_definition('Foo', [define('doc.class', FILE)], kind='type', fields=[
            field('bar', 'doc.field', FILE, extends('doc.type', 'string'), 'A bar'),
        ])
        raw['fields'][0]['visible'] = 'private'
        [definition] = load_definitions([raw])
        [member] = definition.fields
        assert member.field_type is FieldType.DOC_FIELD
        assert member.visible is Visibility.PRIVATE
        assert member.rawdesc == 'A bar'
        assert member.extends.view == 'string'

    def test_function_args_and_returns(self):
        raw = raw_definition('f', [define('setglobal', FILE, func_extends(
            'function f(...)',
            args=[arg('self', 'self', 'Foo'), arg(None, '...', 'any')],
            returns=[ret('doc.type', 'string', name='s')],
        ))])
        [definition] = load_definitions([raw])
        ext = definition.head.extends[0]
        assert [a.arg_type for a in ext.args] == [ArgType.SELF, ArgType.VARARG]
        assert ext.args[1].name is None
        assert ext.returns[0].name == 's'

    def test_unknown_define_type_names_definition(self):
        raw = raw_definition('broken', [define('doc.unknown', FILE)])
        with pytest.raises(SchemaError, match='broken'):
            load_definitions([raw])

    def test_missing_key_rejected(self):
        raw = raw_definition('broken', [define('setglobal', FILE)])
        del raw['defines'][0]['file']
        with pytest.raises(SchemaError, match='file'):
            load_definitions([raw])

    def test_empty_defines_rejected(self):
        with pytest.raises(SchemaError):
            load_definitions([raw_definition('empty', [])])

    def test_invalid_range_rejected(self):
        data = define('setglobal', FILE)
        data['start'], data['finish'] = 20000, 10000
        with pytest.raises(SchemaError):
            load_definitions([raw_definition('x', [data])])

    def test_invalid_json(self):
        with pytest.raises(SchemaError):
            load_definitions('not json')

    def test_non_array_rejected(self):
        with pytest.raises(SchemaError):
            load_definitions('{}')

    def test_files_are_distinct_in_order(self):
        other = 'file:///lib/other.lua'
        raw = raw_definition('x', [
            define('setglobal', FILE), define('setglobal', other), define('setglobal', FILE),
        ])
        [definition] = load_definitions([raw])
        assert [str(f) for f in definition.files] == [FILE, other]


class TestDefineFlavor:
    """Define kinds must match the flavor of their definition."""

    @pytest.mark.parametrize('define_type,kind', [
        ('doc.enum', 'variable'),
        ('doc.alias', 'variable'),
        ('tablefield', 'variable'),
        ('setglobal', 'type'),
        ('setfield', 'type'),
    ])
    def test_mismatch_names_definition(self, define_type, kind):
        raw = raw_definition('colors', [define(define_type, FILE)], kind=kind)
        with pytest.raises(SchemaError, match="'colors'"):
            load_definitions([raw])

    def test_every_define_is_checked(self):
        raw = raw_definition('x', [
            define('setglobal', FILE, extends('table', 'x')),
            define('doc.class', FILE),
        ], kind='variable')
        with pytest.raises(SchemaError, match='doc.class'):
            load_definitions([raw])

    @pytest.mark.parametrize('define_type,kind', [
        ('doc.enum', 'type'),
        ('tablefield', 'type'),
        ('setmethod', 'variable'),
        ('setindex', 'variable'),
    ])
    def test_matching_flavor_accepted(self, define_type, kind):
        [definition] = load_definitions([raw_definition('x', [define(define_type, FILE)], kind=kind)])
        assert definition.head.define_type is DefineType(define_type)
        assert definition.definition_type is DefinitionType(kind)
