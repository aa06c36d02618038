"""MCDU exception hierarchy.

A small exception tree for categorizing failures. Everything raised below the
relay boundary derives from MCDUError so the relay can recover per frame or
per connection without masking programming errors.
"""
from __future__ import annotations


class MCDUError(Exception):
    """Base class for all MCDU exceptions."""


class ConfigError(MCDUError):
    """Configuration-related issues (invalid env values, unknown policies)."""


class MarkupError(MCDUError):
    """A text field could not be parsed into styled runs."""


class UnknownTagError(MarkupError):
    """A `{name}` tag whose name is not part of the formatter vocabulary."""

    def __init__(self, token: str):
        super().__init__(f"unknown markup tag {{{token}}}")
        self.token = token


class UnbalancedMarkupError(MarkupError):
    """An `{end}` tag with no open scope to close."""


class DecodeError(MCDUError):
    """A wire message could not be turned into a screen update."""


class RelayError(MCDUError):
    """Transport relay failures."""


class RelayBindError(RelayError):
    """The relay listener could not bind its host:port."""


class RelayQueueFull(RelayError):
    """The relay queue is at capacity and its policy rejects new items."""


__all__ = [
    "MCDUError",
    "ConfigError",
    "MarkupError",
    "UnknownTagError",
    "UnbalancedMarkupError",
    "DecodeError",
    "RelayError",
    "RelayBindError",
    "RelayQueueFull",
]
