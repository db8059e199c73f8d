"""Doc item parsers."""

from mooncats.parsers.base_parser import BaseParser
from mooncats.parsers.alias_parser import AliasParser
from mooncats.parsers.class_parser import ClassParser
from mooncats.parsers.enum_parser import EnumParser
from mooncats.parsers.global_parser import GlobalParser

__all__ = [
    'BaseParser', 'AliasParser', 'ClassParser', 'EnumParser', 'GlobalParser',
]
