"""Custom exception hierarchy for pyusage."""

from __future__ import annotations


class UsageError(Exception):
    """Base exception for all pyusage errors."""


class UsageConfigError(UsageError):
    """Invalid or missing configuration."""


class UsageStorageError(UsageError):
    """Property store could not be written.

    Never surfaced to callers: the store logs it and keeps the
    in-memory mapping as the source of truth.
    """

    def __init__(self, message: str, *, location: str = "") -> None:
        self.location = location
        super().__init__(message)


class UsageTransportError(UsageError):
    """HTTP-level failure while delivering a hit (network, DNS, offline).

    Post handlers raise this internally and swallow it before returning.
    """

    def __init__(self, message: str, *, url: str = "") -> None:
        self.url = url
        super().__init__(message)
