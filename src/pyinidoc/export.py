# -*- encoding: utf-8 -*-
# @File   : export.py
# @Time   : 2024/10/23 00:12:58

"""Dump the pairs of an `IniDocument` to JSON or YAML, and back.

Both formats carry data only, in the shape of `IniDocument.sections()`:

    ```yaml
    server:
      host: localhost
      port: '8080'
    ```

Comments and blank lines are lost on the way.
"""

import json
from collections.abc import Mapping
from os import PathLike
from typing import Any

import yaml

from .abstract import FileHandler
from .model import IniDocument


class IniDataParser(FileHandler[IniDocument]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def _to_document(src: Mapping[str, Any] | None) -> IniDocument:
        ret = IniDocument()
        for sect, pairs in (src or {}).items():
            if not isinstance(pairs, Mapping):
                raise ValueError(
                    f'section "{sect}" should be a mapping, got {pairs!r}.')
            if not pairs:
                ret[str(sect)] = {}
            for k, v in pairs.items():
                # may there be some pure digits considered as int
                ret.set_value(str(sect), str(k), '' if v is None else str(v))
        return ret


class IniJsonParser(IniDataParser):
    def read(self) -> IniDocument:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return self._to_document(json.load(fp))

    def write(self, instance: IniDocument, indent: int = 2) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            json.dump(instance.sections(), fp, ensure_ascii=False, indent=indent)


class IniYamlParser(IniDataParser):
    def read(self) -> IniDocument:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return self._to_document(yaml.safe_load(fp))

    def write(self, instance: IniDocument, indent: int = 2) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(
                instance.sections(), fp,
                allow_unicode=True, sort_keys=False, indent=indent)
