from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when scraper input is missing or invalid."""


class PageAccessError(RuntimeError):
    """Raised when the page itself can no longer be read (crashed, closed, detached)."""


class SinkError(RuntimeError):
    """Raised when a record cannot be appended to the output dataset."""
