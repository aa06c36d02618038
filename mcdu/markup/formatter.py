"""Formatter vocabulary of the MCDU markup language.

A field such as ``{green}V1{end}`` opens a scope with ``{name}`` and closes
the innermost one with ``{end}``. ``{sp}`` is a literal space and never opens
a scope (the parser replaces it before scanning).
"""
from __future__ import annotations

import logging
from enum import Enum

from mcdu.utils.exceptions import UnknownTagError

logger = logging.getLogger(__name__)


class FormatterTag(Enum):
    LEFT = "left"
    RIGHT = "right"
    AMBER = "amber"
    CYAN = "cyan"
    GREEN = "green"
    INOP = "inop"
    MAGENTA = "magenta"
    RED = "red"
    WHITE = "white"
    YELLOW = "yellow"
    BIG = "big"
    SMALL = "small"
    SPACE = "sp"
    CLOSE = "end"

    @classmethod
    def from_token(cls, token: str, strict: bool = True) -> FormatterTag:
        """Decode a tag literal (the text between the braces).

        Unknown literals raise UnknownTagError. With ``strict=False`` they
        decode to CLOSE instead, which is what older producers relied on;
        that path is logged because it shifts scope depth silently.
        """
        try:
            return cls(token)
        except ValueError:
            if strict:
                raise UnknownTagError(token) from None
            logger.warning("markup: unknown tag {%s} treated as {end}", token)
            return cls.CLOSE

    @property
    def is_alignment(self) -> bool:
        return self in _ALIGNMENTS

    @property
    def is_color(self) -> bool:
        return self in _COLORS

    @property
    def is_font(self) -> bool:
        return self in _FONTS

    @property
    def opens_scope(self) -> bool:
        return self not in (FormatterTag.CLOSE, FormatterTag.SPACE)


_ALIGNMENTS = frozenset({FormatterTag.LEFT, FormatterTag.RIGHT})
_COLORS = frozenset({
    FormatterTag.AMBER, FormatterTag.CYAN, FormatterTag.GREEN, FormatterTag.INOP,
    FormatterTag.MAGENTA, FormatterTag.RED, FormatterTag.WHITE, FormatterTag.YELLOW,
})
_FONTS = frozenset({FormatterTag.BIG, FormatterTag.SMALL})

SPACE_MARKER = "{sp}"

__all__ = ["FormatterTag", "SPACE_MARKER"]
