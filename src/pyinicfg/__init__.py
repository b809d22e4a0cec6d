# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:16:53
# @Author : Kariko Lin

from .converters import (
    TypeStringConverter,
    register_type_string_converter,
    registry,
)
from .errors import (
    ConfigError,
    ConverterNotFoundError,
    InvalidBinaryRecord,
    ParserError,
    SettingShapeError,
    SettingValueCastError,
)
from .formats import ConfigBinaryParser, ConfigYamlParser, IniParser
from .model import Configuration, Section, Setting
from .value import SettingValue

__all__ = [
    'Configuration', 'Section', 'Setting', 'SettingValue',
    'IniParser', 'ConfigBinaryParser', 'ConfigYamlParser',
    'TypeStringConverter', 'register_type_string_converter', 'registry',
    'ConfigError', 'ParserError', 'InvalidBinaryRecord',
    'SettingShapeError', 'SettingValueCastError', 'ConverterNotFoundError'
]
