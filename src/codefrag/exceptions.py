"""Custom exceptions for codefrag rendering."""

from __future__ import annotations

from typing import Any


class CodeFragError(Exception):
    """Base class for codefrag errors."""


class UnknownCharsetError(CodeFragError, LookupError):
    """Raised when the configured charset is not a known text codec."""

    def __init__(self, charset: str) -> None:
        self.charset = charset
        super().__init__(f"Unknown charset: {charset!r}")


class InvalidArgumentsError(CodeFragError, ValueError):
    """Raised when loose argument data is not made of (kind, value) pairs."""

    def __init__(self, raw: Any, reason: str) -> None:
        self.raw = raw
        raw_repr = repr(raw)
        if len(raw_repr) > 80:
            raw_repr = f"{raw_repr[:77]}..."
        super().__init__(f"Invalid argument description {raw_repr}: {reason}")
