from .terminal import ScreenConsumer, print_update, render_update, run_terminal, to_rich_text

__all__ = [
    'ScreenConsumer',
    'print_update',
    'render_update',
    'run_terminal',
    'to_rich_text',
]
