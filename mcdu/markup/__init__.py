from .formatter import SPACE_MARKER, FormatterTag
from .parser import ParsedText, TextRun, parse_markup

__all__ = [
    'FormatterTag',
    'ParsedText',
    'SPACE_MARKER',
    'TextRun',
    'parse_markup',
]
