# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/22 22:58:40

"""`.ini` file reading and writing.

All of the parsing is done by `IniDocument` and `LineClassifier`;
what is left here is the file business:

1. only paths ending with `.ini` are accepted, for reading or writing;
2. when the given (or default) encoding fails to decode the file,
   `chardet` guesses another one.
"""

import logging
from io import StringIO, TextIOBase
from os import PathLike
from os.path import splitext

import chardet

from .abstract import FileHandler
from .consts import INI_SUFFIX
from .errors import InvalidFileExtension
from .model import IniDocument
from .options import ParseOptions


class IniParser(FileHandler[IniDocument]):
    def __init__(
        self, filename: str | PathLike[str],
        encoding: str | None = None,
        options: ParseOptions | None = None
    ) -> None:
        super().__init__(filename)
        if splitext(self._fn)[1] != INI_SUFFIX:
            raise InvalidFileExtension(self._fn)
        self._codec = encoding
        self._opts = options

    @staticmethod
    def readstream(
        buf: TextIOBase,
        ins: IniDocument | None = None,
        options: ParseOptions | None = None
    ) -> IniDocument:
        """Read an already decoded text stream.

        If `ins` is given, its content gets replaced.
        """
        if ins is None:
            ins = IniDocument()
        ins.load_stream(buf, options)
        return ins

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if (codec is None or codec['encoding'] is None
                or codec['confidence'] < 0.8):
            codec = {'encoding': 'utf-8'}
        logging.debug(f'Decoding {filename} as {codec["encoding"]}.')

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            buf = raw.decode('latin-1')
        return StringIO(buf)

    def readinto(self, ins: IniDocument) -> IniDocument:
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.readstream(fp, ins, self._opts)
        except UnicodeDecodeError:
            return self.readstream(self._decode_file(self._fn), ins, self._opts)
        except OSError as e:
            logging.warning(f"Unable to read {self._fn}:\n  {e}")
            raise

    def read(self) -> IniDocument:
        """Read the file this `IniParser` was made for.

        Raises:
            InvalidIniRecord: the file is not well-formed.
            OSError: as is, e.g. `FileNotFoundError`.
        """
        return self.readinto(IniDocument())

    def write(self, instance: IniDocument) -> None:
        """Save to the `.ini` file, overwriting it if it exists."""
        try:
            with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
                fp.write(instance.serialize())
        except OSError as e:
            logging.warning(f"Unable to write {self._fn}:\n  {e}")
            raise
        logging.debug(f'Saved {len(instance)} section(s) to {self._fn}.')

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"
