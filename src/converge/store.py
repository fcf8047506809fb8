"""Desired-state store boundary and an in-memory implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)


class StateStore(ABC):
    """Holds the declared configuration and the last observed state of one instance."""

    @abstractmethod
    def get(self, field: str) -> Any:
        """Return the desired value of a field, falling back to the observed value."""

    @abstractmethod
    def set(self, field: str, value: Any) -> None:
        """Record an observed value."""

    @abstractmethod
    def has_change(self, field: str) -> bool:
        """Desired value differs from the last observed value."""

    @abstractmethod
    def set_identifier(self, identifier: str, *, newly_created: bool = False) -> None: ...

    @abstractmethod
    def get_identifier(self) -> str | None: ...

    @abstractmethod
    def is_newly_created(self) -> bool:
        """Instance was created during the current operation."""

    @abstractmethod
    def observed(self) -> dict[str, Any]:
        """Return a copy of the observed state."""

    @abstractmethod
    def replace_observed(self, state: Mapping[str, Any]) -> None:
        """Replace the observed state wholesale."""

    @abstractmethod
    def clear(self) -> None:
        """Forget the identifier and observed state."""

    def desired(self, fields: list[str]) -> dict[str, Any]:
        """Collect the desired values for the given fields, skipping unset ones."""
        values = {}
        for name in fields:
            value = self.get(name)
            if value is not None:
                values[name] = value
        return values


class MemoryStore(StateStore):
    """Store backed by plain dicts."""

    def __init__(self, desired: Mapping[str, Any] | None = None) -> None:
        self._desired: dict[str, Any] = dict(desired or {})
        self._observed: dict[str, Any] = {}
        self._identifier: str | None = None
        self._newly_created = False

    def configure(self, **values: Any) -> None:
        """Change desired values, as a new configuration would."""
        self._desired.update(values)

    def get(self, field: str) -> Any:
        if field in self._desired:
            return self._desired[field]
        return self._observed.get(field)

    def set(self, field: str, value: Any) -> None:
        self._observed[field] = value

    def has_change(self, field: str) -> bool:
        if field not in self._desired:
            return False
        return self._desired[field] != self._observed.get(field)

    def set_identifier(self, identifier: str, *, newly_created: bool = False) -> None:
        self._identifier = identifier
        self._newly_created = newly_created

    def get_identifier(self) -> str | None:
        return self._identifier

    def is_newly_created(self) -> bool:
        return self._newly_created

    def observed(self) -> dict[str, Any]:
        return dict(self._observed)

    def replace_observed(self, state: Mapping[str, Any]) -> None:
        self._observed = dict(state)

    def clear(self) -> None:
        logger.debug("Clearing state for '%s'", self._identifier)
        self._identifier = None
        self._newly_created = False
        self._observed = {}

    def __repr__(self) -> str:
        return f"MemoryStore(identifier={self._identifier!r}, fields={len(self._observed)})"
