# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/22 21:10:42

from .consts import IniErrorKind


class IniError(Exception):
    """Base of every error raised by `pyinidoc`.

    `kind` tells what went wrong; `line` and `lineno` (1-based) point at the
    offending text when the error comes from parsing.
    """
    def __init__(
        self, kind: IniErrorKind,
        line: str | None = None,
        lineno: int | None = None
    ) -> None:
        self.kind = kind
        self.line = line
        self.lineno = lineno
        super().__init__(self.__describe())

    def __describe(self) -> str:
        if self.line is None:
            return self.kind.value
        if self.lineno is None:
            return f'{self.kind.value}: at line {self.line!r}'
        return f'{self.kind.value}: at line {self.lineno} {self.line!r}'


class InvalidIniRecord(IniError):
    """To record errors when reading INI text."""
    pass


class InvalidFileExtension(IniError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(IniErrorKind.INVALID_FILE_EXTENSION)
        self.args = (f'{self.kind.value}: {path}',)


def is_not_found(exc: BaseException) -> bool:
    """Whether `exc` means the file to load does not exist."""
    return isinstance(exc, FileNotFoundError)
