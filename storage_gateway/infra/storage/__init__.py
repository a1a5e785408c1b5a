"""Object storage infrastructure package."""

from .client import r2_client_factory
from .object_storage import ObjectStorage

__all__ = ["ObjectStorage", "r2_client_factory"]
