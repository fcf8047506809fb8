"""Remote client boundary."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class RemoteClient(ABC):
    """Calls against a remote resource-management API.

    Implementations raise ``RemoteNotFound`` when the object is missing,
    ``ConflictError`` for rejected mutations, and ``TransientError`` for
    network or throttling failures. A ``None`` response means the call
    succeeded without a payload.
    """

    @abstractmethod
    def create(self, request: Mapping[str, Any], token: str) -> Mapping[str, Any] | None:
        """Create an object; ``token`` makes retries of the same request idempotent."""

    @abstractmethod
    def get(self, identifier: str) -> Mapping[str, Any] | None:
        """Fetch an object by identifier."""

    @abstractmethod
    def update(self, identifier: str, changes: Mapping[str, Any]) -> Mapping[str, Any] | None:
        """Apply a partial update."""

    @abstractmethod
    def delete(self, identifier: str) -> Mapping[str, Any] | None:
        """Delete an object."""

    @abstractmethod
    def list_tags(self, identifier: str) -> Mapping[str, str]:
        """Return the tags attached to an object."""
