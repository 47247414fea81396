# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/22 21:40:11

"""
Basically INI Structure, keeping comments and blank lines for round trips.

Reading and writing files is not done here, just see `pyinidoc.parser`.
"""

import logging
from collections.abc import Mapping, MutableMapping
from io import StringIO, TextIOBase
from os import PathLike
from types import MappingProxyType
from typing import Iterator, NamedTuple
from warnings import warn

from .classifier import LineClassifier
from .consts import COMMENT_PREFIXES, IniErrorKind, LineKind
from .errors import IniError, InvalidIniRecord
from .options import DEFAULT_OPTIONS, ParseOptions

UNSAFE_KEY_PREFIXES = (*COMMENT_PREFIXES, '[')


class LineRecord(NamedTuple):
    """One line of a section as it will be written back.

    For `LineKind.KEY` the text is the key name and the current value gets
    looked up when serializing; otherwise the text is emitted as is.
    """
    kind: LineKind
    text: str


class IniSection(MutableMapping[str, str]):
    """INI section dict.

    Besides the key-value pairs, a section remembers the order of its
    lines (keys, comments and blanks) so `serialize()` could reproduce
    what has been read. Keys added later are placed at the end.
    """
    def __init__(self, name: str = '') -> None:
        self._name = name
        self._lines: list[LineRecord] = []
        self._data: dict[str, str] = {}

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str:
        return self._data[key.strip()]

    def __setitem__(self, key: str, value: str) -> None:
        self.set_value(key, value)

    def __delitem__(self, key: str) -> None:
        key = key.strip()
        del self._data[key]
        self._lines.remove(LineRecord(LineKind.KEY, key))

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            key = key.strip()
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return f"[{self._name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))

    @property
    def ends_with_blank(self) -> bool:
        return bool(self._lines) and self._lines[-1].kind is LineKind.BLANK

    def add_line(
        self, raw: str,
        options: ParseOptions | None = None, *,
        lineno: int | None = None
    ) -> None:
        """Consume one line of the section body.

        Blank lines and comments are only kept for formatting. Anything
        else has to be `key = value`, split on the first `=`.

        Raises:
            InvalidIniRecord: the line is malformed, or the key is empty or
            repeated while `options` forbids it.
        """
        opts = options or DEFAULT_OPTIONS
        line = raw.strip()
        if not line:
            self._lines.append(LineRecord(LineKind.BLANK, ''))
            return
        if opts.is_comment(line):
            self._lines.append(LineRecord(LineKind.COMMENT, line))
            return
        if '=' not in line:
            raise InvalidIniRecord(IniErrorKind.INVALID_FORMAT, line, lineno)

        key, val = line.split('=', 1)
        key, val = key.strip(), val.strip()
        if not key and not opts.allow_empty_key:
            raise InvalidIniRecord(IniErrorKind.EMPTY_KEY, line, lineno)
        if key in self._data:
            if opts.strict_keys:
                raise InvalidIniRecord(
                    IniErrorKind.DUPLICATE_KEY, line, lineno)
            warn(
                f'{self} already has "{key}" = "{self._data[key]}", '
                'the old value gets overwritten.')
        self.set_value(key, val)

    def get_value(self, key: str) -> tuple[str, bool]:
        """Returns `(value, True)`, or `('', False)` if `key` is missing."""
        if key not in self._data:
            return '', False
        return self._data[key], True

    def set_value(self, key: str, value: str) -> None:
        """Set (or update) a pair, both sides stripped.

        Any key is accepted, but one containing `=` or starting with a
        comment marker or `[` won't read back as the same pair once
        serialized, so a `UserWarning` is given for it.
        """
        key, value = key.strip(), value.strip()
        if '=' in key or key.startswith(UNSAFE_KEY_PREFIXES):
            warn(f'Key "{key}" of {self} will not be read back as is.')
        if key not in self._data:
            self._lines.append(LineRecord(LineKind.KEY, key))
        self._data[key] = value

    def _add_blank(self) -> None:
        self._lines.append(LineRecord(LineKind.BLANK, ''))

    def serialize(self) -> list[str]:
        ret = []
        for i in self._lines:
            if i.kind is LineKind.KEY:
                ret.append(f'{i.text} = {self._data[i.text]}')
            else:
                ret.append(i.text)
        return ret

    def to_dict(self) -> dict[str, str]:
        return self._data.copy()

    def view(self) -> Mapping[str, str]:
        """A read-only, live view of the pairs."""
        return MappingProxyType(self._data)


class IniDocument(MutableMapping[str, Mapping[str, str]]):
    """INI document representation, within the following forms:

        ```ini
        ; comments before the first section are kept as preamble.

        [section]
        key = value
        # another comment
        url = http://x?a=1  ; value is everything after the first '='
        ```

    Indexing returns a read-only view of a section. Mutate through
    `set_value()`, `remove_key()`, or by assigning a whole mapping which
    gets copied in.
    """
    def __init__(self) -> None:
        self.__sections: dict[str, IniSection] = {}
        self.__preamble: list[LineRecord] = []

    def __getitem__(self, key: str) -> Mapping[str, str]:
        return self.__sections[key].view()

    def __setitem__(self, key: str, value: Mapping[str, str]) -> None:
        name = key.strip()
        if not name:
            raise IniError(IniErrorKind.EMPTY_SECTION_NAME)
        sect = IniSection(name)
        for k, v in value.items():
            sect.set_value(k, v)
        if name not in self.__sections:
            self.__separate_last()
        self.__sections[name] = sect

    def __delitem__(self, key: str) -> None:
        del self.__sections[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__sections

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__sections)

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f'<IniDocument sections={self.section_names()}>'

    def __separate_last(self) -> None:
        # a blank line between the last section and a newly appended one.
        if not self.__sections:
            return
        last = self.__sections[next(reversed(self.__sections))]
        if not last.ends_with_blank:
            last._add_blank()

    # protected ones below are for LineClassifier.
    def _new_section(self, name: str) -> IniSection:
        ret = self.__sections[name] = IniSection(name)
        return ret

    def _get_section(self, name: str) -> IniSection:
        return self.__sections[name]

    def _add_preamble(self, text: str) -> None:
        self.__preamble.append(
            LineRecord(LineKind.COMMENT if text else LineKind.BLANK, text))

    def clear(self) -> None:
        self.__sections.clear()
        self.__preamble.clear()

    def load_stream(
        self, buf: TextIOBase, options: ParseOptions | None = None
    ) -> None:
        """Replace the content with what `buf` holds.

        On any parse error the document is left empty and the error is
        re-raised; a half loaded document is never kept.
        """
        self.clear()
        try:
            LineClassifier(self, options).feed(buf)
        except (IniError, UnicodeDecodeError):
            self.clear()
            raise
        logging.debug(f'Loaded INI document with {len(self)} section(s).')

    def load_text(
        self, text: str, options: ParseOptions | None = None
    ) -> None:
        self.load_stream(StringIO(text), options)

    def load_file(
        self, path: str | PathLike[str],
        encoding: str | None = None,
        options: ParseOptions | None = None
    ) -> None:
        """Load a `.ini` file, see `IniParser.read()` for decoding rules."""
        from .parser import IniParser
        IniParser(path, encoding, options).readinto(self)

    def save_file(
        self, path: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        from .parser import IniParser
        IniParser(path, encoding).write(self)

    def section_names(self) -> list[str]:
        """Section names in the order they were declared."""
        return list(self.__sections)

    def sections(self) -> dict[str, dict[str, str]]:
        """A snapshot of all pairs. Changing it won't touch the document."""
        return {k: v.to_dict() for k, v in self.__sections.items()}

    def get_value(self, section: str, key: str) -> tuple[str, bool]:
        if section not in self.__sections:
            return '', False
        return self.__sections[section].get_value(key)

    def set_value(self, section: str, key: str, value: str) -> None:
        """Set (or update) a value, creating the section if necessary.

        New sections are appended after the existing ones.

        Raises:
            IniError: `section` is empty after stripping.
        """
        section = section.strip()
        if not section:
            raise IniError(IniErrorKind.EMPTY_SECTION_NAME)
        if section not in self.__sections:
            self.__separate_last()
            self._new_section(section)
        self.__sections[section].set_value(key, value)

    def remove_key(self, section: str, key: str) -> bool:
        """Returns whether there was such a key to remove."""
        if section not in self.__sections:
            return False
        if key not in self.__sections[section]:
            return False
        del self.__sections[section][key]
        return True

    def serialize(self) -> str:
        ret = [i.text for i in self.__preamble]
        for name, sect in self.__sections.items():
            ret.append(f'[{name}]')
            ret.extend(sect.serialize())
        return ''.join(f'{i}\n' for i in ret)
