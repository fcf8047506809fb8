"""Waiter — poll a status probe until the remote object converges."""

from __future__ import annotations

import logging
import random
import threading
import time
from collections.abc import Callable, Collection, Mapping
from typing import Any

from .config import Backoff
from .errors import NotFoundError, UnexpectedStateError, WaitCanceledError, WaitTimeoutError
from .status import ABSENT, ProbeResult

logger = logging.getLogger(__name__)


class Waiter:
    """Repeatedly probe an object until its status reaches a target set.

    An empty target set means "wait for the object to disappear". The wait is
    bounded by a hard deadline and wakes promptly when ``cancel`` is set.
    """

    def __init__(
        self,
        probe: Callable[[str], ProbeResult],
        *,
        backoff: Backoff | None = None,
        cancel: threading.Event | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.probe = probe
        self.backoff = backoff or Backoff()
        self.cancel = cancel or threading.Event()
        self.clock = clock

    def _interval(self, attempt: int) -> float:
        """Return the pause before the next probe."""
        if self.backoff.poll_interval is not None:
            return self.backoff.poll_interval
        interval = min(self.backoff.min_interval * (2**attempt), self.backoff.max_interval)
        if self.backoff.jitter:
            interval *= 1 - random.uniform(0, self.backoff.jitter)
        return interval

    def _sleep(self, seconds: float, last_status: str) -> None:
        if self.cancel.wait(max(seconds, 0.0)):
            raise WaitCanceledError(last_status)

    def wait(
        self,
        identifier: str,
        *,
        pending: Collection[str],
        target: Collection[str],
        timeout: float,
        continuous_target_occurence: int = 1,
        not_found_checks: int = 20,
    ) -> Mapping[str, Any] | None:
        """Block until the object reaches ``target`` and return its last observed state.

        Returns None when waiting for absence. Raises WaitTimeoutError when the
        deadline passes, UnexpectedStateError for a status in neither set,
        NotFoundError when the object stays missing for more than
        ``not_found_checks`` probes of a non-empty target, and
        WaitCanceledError on cancellation. Probe errors propagate unchanged.
        """
        pending = set(pending)
        target = set(target)
        deadline = self.clock() + timeout
        last_status = ABSENT
        target_hits = 0
        not_found_hits = 0
        attempt = 0

        logger.debug(
            "Waiting for '%s' to reach %s (pending %s, timeout %.1fs)",
            identifier,
            sorted(target) or "absence",
            sorted(pending),
            timeout,
        )

        if self.backoff.delay:
            self._sleep(min(self.backoff.delay, timeout), last_status)

        while True:
            if self.cancel.is_set():
                raise WaitCanceledError(last_status)

            observed, status = self.probe(identifier)

            if observed is None:
                last_status = ABSENT
                target_hits = 0
                not_found_hits += 1
                if not target:
                    if not_found_hits >= max(not_found_checks, 1):
                        logger.debug("'%s' is gone after %d probe(s)", identifier, not_found_hits)
                        return None
                elif not_found_hits > not_found_checks:
                    raise NotFoundError(last_request={"identifier": identifier})
                else:
                    logger.debug(
                        "'%s' not found yet (%d of %d)", identifier, not_found_hits, not_found_checks
                    )
            else:
                last_status = status
                not_found_hits = 0
                if status in target:
                    target_hits += 1
                    if target_hits >= continuous_target_occurence:
                        return observed
                elif status in pending:
                    target_hits = 0
                else:
                    raise UnexpectedStateError(status, sorted(target))

            remaining = deadline - self.clock()
            if remaining <= 0:
                raise WaitTimeoutError(last_status, timeout, sorted(target))

            self._sleep(min(self._interval(attempt), remaining), last_status)
            attempt += 1
