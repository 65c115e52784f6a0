"""Core service errors."""

from __future__ import annotations


class LogoError(Exception):
    pass


class FetchError(LogoError):
    """Remote logo description unreachable or malformed."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class StoreError(LogoError):
    pass
