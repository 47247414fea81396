# -*- encoding: utf-8 -*-
# @File   : classifier.py
# @Time   : 2024/10/22 22:15:36

"""The line-by-line state machine behind `IniDocument.load_*()`.

Each line tells what it is by itself, so one pass without lookahead
is enough:

    - blank or comment: formatting only;
    - `[name]`: a new section, which becomes the active one;
    - `key = value`: a pair of the active section.

Comments before the first section are kept as the document preamble,
but key-value pairs there are refused since INI has no global data.
"""

from enum import Enum, auto
from io import TextIOBase
from typing import TYPE_CHECKING
from warnings import warn

from .consts import BOM, IniErrorKind
from .errors import InvalidIniRecord
from .options import DEFAULT_OPTIONS, ParseOptions

if TYPE_CHECKING:
    from .model import IniDocument, IniSection


class ParseState(Enum):
    EXPECT_SECTION = auto()
    IN_SECTION = auto()


class LineClassifier:
    def __init__(
        self, doc: 'IniDocument', options: ParseOptions | None = None
    ) -> None:
        self._doc = doc
        self._opts = options or DEFAULT_OPTIONS
        self._active: 'IniSection | None' = None
        self._lineno = 0
        # leading blank lines are dropped until something meaningful shows up.
        self._started = False

    @property
    def state(self) -> ParseState:
        return (ParseState.EXPECT_SECTION if self._active is None
                else ParseState.IN_SECTION)

    @property
    def lineno(self) -> int:
        return self._lineno

    def feed(self, buf: TextIOBase) -> None:
        while i := buf.readline():
            self.feed_line(i)

    def feed_line(self, raw: str) -> None:
        """Classify one raw line and apply it to the document.

        Raises:
            InvalidIniRecord: annotated with the stripped line and its
            1-based number.
        """
        self._lineno += 1
        if self._lineno == 1:
            raw = raw.lstrip(BOM)
        line = raw.strip()
        if not line or self._opts.is_comment(line):
            self.__formatting(line)
        elif line.startswith('['):
            self.__header(line)
        elif self._active is None:
            raise InvalidIniRecord(
                IniErrorKind.NO_GLOBAL_DATA, line, self._lineno)
        else:
            self._active.add_line(line, self._opts, lineno=self._lineno)

    def __formatting(self, line: str) -> None:
        if self._active is not None:
            self._active.add_line(line, self._opts, lineno=self._lineno)
            return
        if line:
            self._started = True
        if self._started:
            self._doc._add_preamble(line)

    def __header(self, line: str) -> None:
        if not line.endswith(']') or len(line) < 2:
            raise InvalidIniRecord(
                IniErrorKind.INVALID_FORMAT, line, self._lineno)
        name = line[1:-1].strip()
        if not name:
            raise InvalidIniRecord(
                IniErrorKind.EMPTY_SECTION_NAME, line, self._lineno)

        self._started = True
        if name not in self._doc:
            self._active = self._doc._new_section(name)
            return
        if self._opts.strict_sections:
            raise InvalidIniRecord(
                IniErrorKind.DUPLICATE_SECTION, line, self._lineno)
        warn(
            f'[{name}] is declared again at line {self._lineno}, '
            'its pairs get merged into the earlier one.')
        self._active = self._doc._get_section(name)
