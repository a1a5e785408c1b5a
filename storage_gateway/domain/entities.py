"""
Domain entities.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedUser:
    """The user a request's session resolved to."""

    username: str
    name: str


@dataclass(frozen=True)
class FileInfo:
    """A stored object as presented to callers (namespace prefix removed)."""

    name: str
    size: int
    last_modified: str
