"""Error taxonomy for the reconcile-and-poll engine."""

from __future__ import annotations

from typing import Any

# -- Remote client signals --


class RemoteError(Exception):
    """Base class for errors raised by a remote client."""


class RemoteNotFound(RemoteError):
    """The remote API reports that the object does not exist."""


class ConflictError(RemoteError):
    """The remote API rejected a request that conflicts with current state."""


class TransientError(RemoteError):
    """Network or service failure that may succeed if the caller retries."""


class ThrottlingError(TransientError):
    """The remote API throttled the request."""


# -- Engine errors --


class ConvergeError(Exception):
    """Base class for all engine errors."""


class NotFoundError(ConvergeError):
    """A lookup found no remote object for the identifier."""

    def __init__(self, last_request: Any = None, cause: BaseException | None = None) -> None:
        self.last_request = last_request
        self.cause = cause
        msg = "couldn't find resource"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)


class EmptyResultError(ConvergeError):
    """The remote API call succeeded but returned no payload."""

    def __init__(self, last_request: Any = None) -> None:
        self.last_request = last_request
        super().__init__("empty result")


class WaitTimeoutError(ConvergeError, TimeoutError):
    """The waiter deadline passed before the target state was reached."""

    def __init__(self, last_status: str, timeout: float, target: list[str]) -> None:
        self.last_status = last_status
        self.timeout = timeout
        self.target = target
        super().__init__(
            f"timeout while waiting for state to become {target!r} "
            f"(last state: '{last_status}', timeout: {timeout:.1f}s)"
        )


class UnexpectedStateError(ConvergeError):
    """The remote object reported a status outside the expected sets."""

    def __init__(self, status: str, expected: list[str]) -> None:
        self.status = status
        self.expected = expected
        super().__init__(f"unexpected state '{status}', wanted target {expected!r}")


class WaitCanceledError(ConvergeError):
    """The wait was canceled before the target state was reached."""

    def __init__(self, last_status: str) -> None:
        self.last_status = last_status
        super().__init__(f"wait canceled (last state: '{last_status}')")


class ValidationError(ConvergeError):
    """Desired state is missing or has invalid fields."""

    def __init__(self, resource: str, errors: list[dict[str, Any]]) -> None:
        self.resource = resource
        self.errors = errors
        fields = ", ".join(".".join(str(p) for p in e.get("loc", ())) for e in errors)
        super().__init__(f"invalid configuration for {resource}: {fields}")


class InvalidStateError(ConvergeError):
    """An operation was requested in a lifecycle state that does not allow it."""


class ResourceOperationError(ConvergeError):
    """A lifecycle operation failed; the cause is chained."""

    def __init__(
        self,
        action: str,
        resource: str,
        identifier: str | None,
        cause: BaseException,
    ) -> None:
        self.action = action
        self.resource = resource
        self.identifier = identifier
        self.cause = cause
        target = f"{resource} ({identifier})" if identifier else resource
        super().__init__(f"{action} {target}: {cause}")
