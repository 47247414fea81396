# -*- encoding: utf-8 -*-
# @File   : options.py
# @Time   : 2024/10/22 21:24:05

from dataclasses import dataclass

from .consts import COMMENT_PREFIXES


@dataclass(frozen=True, kw_only=True)
class ParseOptions:
    """How picky `LineClassifier` is.

    The defaults fail fast on duplicated sections, duplicated keys and
    empty keys. `ParseOptions.lenient()` reproduces the older permissive
    behaviour instead: re-declared sections are merged, repeated keys
    overwrite the earlier value, and empty keys are kept.
    """
    strict_sections: bool = True
    strict_keys: bool = True
    allow_empty_key: bool = False
    comment_prefixes: tuple[str, ...] = COMMENT_PREFIXES

    @classmethod
    def lenient(cls) -> 'ParseOptions':
        return cls(
            strict_sections=False,
            strict_keys=False,
            allow_empty_key=True)

    def is_comment(self, line: str) -> bool:
        return line.startswith(self.comment_prefixes)


DEFAULT_OPTIONS = ParseOptions()
