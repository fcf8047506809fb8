"""SpecOp strategies — decide which lifecycle call a reconciler needs."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .reconciler import Reconciler

logger = logging.getLogger(__name__)


class SpecOp(ABC):
    """Wraps a Reconciler with conditional execution logic."""

    def __init__(self, reconciler: Reconciler) -> None:
        self.reconciler = reconciler

    @property
    def dry_run(self) -> bool:
        return self.reconciler.ctx.dry_run

    @abstractmethod
    def __call__(self) -> None: ...


class Present(SpecOp):
    """Create only if the resource doesn't exist."""

    def __call__(self) -> None:
        name = self.reconciler.name
        if self.reconciler.exists():
            logger.debug("Skipping %s; already exists", name)
        elif self.dry_run:
            logger.info("[DRY RUN] Would create %s", name)
        else:
            self.reconciler.create()


class Ensure(SpecOp):
    """Create or update until the resource matches its configuration."""

    def __call__(self) -> None:
        name = self.reconciler.name
        if not self.reconciler.exists():
            if self.dry_run:
                logger.info("[DRY RUN] Would create %s", name)
            else:
                self.reconciler.create()
        elif not self.reconciler.has_changes():
            logger.debug("Skipping %s; up to date", name)
        elif self.dry_run:
            logger.info("[DRY RUN] Would update %s", name)
        else:
            self.reconciler.update()


class Absent(SpecOp):
    """Delete if the resource exists."""

    def __call__(self) -> None:
        name = self.reconciler.name
        if self.reconciler.exists():
            if self.dry_run:
                logger.info("[DRY RUN] Would delete %s", name)
            else:
                self.reconciler.delete()
        else:
            logger.debug("Skipping removal of %s; not present", name)
