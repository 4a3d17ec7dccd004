# pegcore/errors.py
"""Error kinds raised by pegcore."""

from __future__ import annotations


class PegError(Exception):
    """Base class for pegcore errors."""


class NoMatch(PegError):
    """A rule did not match the input. Carries no position by design."""

    def __init__(self, msg: str = "no match"):
        super().__init__(msg)


class ConfigurationError(PegError, ValueError):
    """A rule or grammar was built with invalid static arguments,
    or an alias was evaluated outside of any grammar."""
