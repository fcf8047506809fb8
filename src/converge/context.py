"""Runtime execution context for the reconcile chain."""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

from .config import EngineConfig


C = TypeVar("C")


class Context(Generic[C]):
    """Runtime state passed through the reconcile chain."""

    def __init__(
        self,
        client: C,
        *,
        config: EngineConfig | None = None,
        dry_run: bool = False,
        cancel: threading.Event | None = None,
    ) -> None:
        self.client = client
        self.config = config or EngineConfig()
        self.dry_run = dry_run
        self.cancel = cancel or threading.Event()

    @property
    def canceled(self) -> bool:
        return self.cancel.is_set()
