"""Blueprint model — a named, ordered collection of spec operations."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from pydantic import BaseModel, Field

from .specop import SpecOp

logger = logging.getLogger(__name__)


class Blueprint(BaseModel):
    """A named collection of spec operations, run one at a time."""

    model_config = {"arbitrary_types_allowed": True}

    name: str
    ops: list[SpecOp] = Field(default_factory=list)

    def __iter__(self) -> Iterator[SpecOp]:
        return iter(self.ops)

    def build(self) -> None:
        """Execute all operations in this blueprint, stopping at the first failure."""
        logger.debug("Building blueprint '%s' (%d op(s))", self.name, len(self.ops))
        for op in self.ops:
            op()
