"""Status probes — derive a lifecycle status from a lookup."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, NamedTuple

from .errors import NotFoundError
from .finder import Finder

logger = logging.getLogger(__name__)

ABSENT = ""
"""Status reported when the remote object does not exist."""

# Pseudo-statuses for APIs that expose no status field.
PENDING = "Pending"
DELETING = "Deleting"
NORMAL = "Normal"
UPDATED = "Updated"


class StatusSource(ABC):
    """Where a probe gets its status label from."""

    @abstractmethod
    def status(self, observed: Mapping[str, Any]) -> str: ...


class ApiField(StatusSource):
    """Read the status from a field of the remote object."""

    def __init__(self, name: str = "status") -> None:
        self.name = name

    def status(self, observed: Mapping[str, Any]) -> str:
        value = observed.get(self.name)
        return "" if value is None else str(value)

    def __repr__(self) -> str:
        return f"ApiField({self.name!r})"


class SyntheticAfterCall(StatusSource):
    """Report a fixed label whenever the object is found.

    Used when the API has no status field and a successful mutating call is
    the only signal of progress.
    """

    def __init__(self, label: str = NORMAL) -> None:
        self.label = label

    def status(self, observed: Mapping[str, Any]) -> str:
        return self.label

    def __repr__(self) -> str:
        return f"SyntheticAfterCall({self.label!r})"


class ProbeResult(NamedTuple):
    observed: Mapping[str, Any] | None
    status: str


class StatusProbe:
    """Look up an object and label its status."""

    def __init__(self, finder: Finder, source: StatusSource | None = None) -> None:
        self.finder = finder
        self.source = source or ApiField()

    def probe(self, identifier: str) -> ProbeResult:
        """Return the object and its status; a missing object yields ABSENT."""
        try:
            observed = self.finder.find(identifier)
        except NotFoundError:
            return ProbeResult(None, ABSENT)

        status = self.source.status(observed)
        logger.debug("Probe of '%s' reports '%s'", identifier, status)
        return ProbeResult(observed, status)

    __call__ = probe
