from .frames import UPDATE_COMMAND, Frame, handle_frame, parse_frame
from .queue import OverflowPolicy, UpdateQueue
from .server import RelayServer, create_app

__all__ = [
    'Frame',
    'OverflowPolicy',
    'RelayServer',
    'UPDATE_COMMAND',
    'UpdateQueue',
    'create_app',
    'handle_frame',
    'parse_frame',
]
