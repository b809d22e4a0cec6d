# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/15 21:58:10
# @Author : Kariko Lin
from .ini import IniParser
from .binary import ConfigBinaryParser
from .yml import ConfigYamlParser

__all__ = ['IniParser', 'ConfigBinaryParser', 'ConfigYamlParser']
