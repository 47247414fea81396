# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/22 21:01:30

import logging

from .consts import IniErrorKind, LineKind
from .errors import (
    IniError,
    InvalidIniRecord,
    InvalidFileExtension,
    is_not_found
)
from .options import ParseOptions
from .model import IniDocument, IniSection, LineRecord
from .classifier import LineClassifier, ParseState
from .parser import IniParser
from .export import IniJsonParser, IniYamlParser

__all__ = [
    'IniDocument', 'IniSection', 'LineRecord', 'LineKind',
    'LineClassifier', 'ParseState', 'ParseOptions',
    'IniParser', 'IniJsonParser', 'IniYamlParser',
    'IniError', 'IniErrorKind', 'InvalidIniRecord', 'InvalidFileExtension',
    'is_not_found'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
