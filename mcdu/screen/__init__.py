from .decoder import decode_message, decode_state, load_message_file, parse_message, swap_columns
from .model import DEFAULT_SIDE, Arrows, ScreenMessage, ScreenState, ScreenUpdate

__all__ = [
    'Arrows',
    'DEFAULT_SIDE',
    'ScreenMessage',
    'ScreenState',
    'ScreenUpdate',
    'decode_message',
    'decode_state',
    'load_message_file',
    'parse_message',
    'swap_columns',
]
