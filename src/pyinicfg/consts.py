# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/12 21:40:18
# @Author : Kariko Lin

from enum import Enum

COMMENT_CHARS = ('#', ';')
QUOTE = '"'
ESCAPE = '\\'

ARRAY_BEGIN = '{'
ARRAY_END = '}'
ARRAY_SEPARATOR = ','

# settings that precede any `[Section]` line.
HEADER_SECTION = ''

BINARY_VERSION = 1


class BinMark(str, Enum):
    IS_CFG = ' GFC'
    IS_SEC = ' CES'
    IS_SET = ' TES'
