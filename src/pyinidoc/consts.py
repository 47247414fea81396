# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/22 21:03:17

from enum import Enum

INI_SUFFIX = '.ini'
BOM = '\ufeff'
COMMENT_PREFIXES = (';', '#')


class IniErrorKind(str, Enum):
    INVALID_FORMAT = 'invalid ini file format'
    NO_GLOBAL_DATA = 'global data is not supported'
    EMPTY_SECTION_NAME = "section name can't be empty"
    EMPTY_KEY = "key can't be empty"
    DUPLICATE_SECTION = 'section name must be unique'
    DUPLICATE_KEY = 'key must be unique within a section'
    INVALID_FILE_EXTENSION = 'invalid file extension'


class LineKind(str, Enum):
    KEY = 'key'
    COMMENT = 'comment'
    BLANK = 'blank'
