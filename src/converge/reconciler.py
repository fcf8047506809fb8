"""Reconciler — drive one resource instance through its lifecycle."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from .client import RemoteClient
from .context import Context
from .errors import (
    EmptyResultError,
    InvalidStateError,
    NotFoundError,
    RemoteNotFound,
    ResourceOperationError,
)
from .finder import Finder
from .resource import ResourceType, WaitSpec
from .status import StatusProbe
from .store import StateStore
from .tags import for_read, for_write
from .waiter import Waiter

logger = logging.getLogger(__name__)

ACTION_CREATING = "creating"
ACTION_READING = "reading"
ACTION_UPDATING = "updating"
ACTION_DELETING = "deleting"
ACTION_IMPORTING = "importing"
ACTION_LISTING_TAGS = "listing tags for"
ACTION_WAITING_FOR_CREATION = "waiting for creation of"
ACTION_WAITING_FOR_UPDATE = "waiting for update of"
ACTION_WAITING_FOR_DELETION = "waiting for deletion of"


class LifecycleState(StrEnum):
    ABSENT = "Absent"
    CREATING = "Creating"
    ACTIVE = "Active"
    UPDATING = "Updating"
    DELETING = "Deleting"
    DESTROYED = "Destroyed"


class Reconciler:
    """Sequence remote calls, waits, and state write-back for one instance.

    The client comes from the context and the store is passed in; nothing
    is looked up from process-wide state. Operations on one instance must
    not run concurrently.
    """

    def __init__(
        self,
        resource_type: ResourceType[Any],
        store: StateStore,
        ctx: Context[RemoteClient],
    ) -> None:
        self.resource_type = resource_type
        self.store = store
        self.ctx = ctx
        self.finder = Finder(ctx.client)
        self.state = LifecycleState.ACTIVE if store.get_identifier() else LifecycleState.ABSENT
        self._token: str | None = None

    @property
    def name(self) -> str:
        return self.resource_type.display_name

    @property
    def identifier(self) -> str | None:
        return self.store.get_identifier()

    def _require(self, action: str, *allowed: LifecycleState) -> None:
        if self.state not in allowed:
            raise InvalidStateError(f"cannot {action} {self.name} while {self.state}")

    def _require_identifier(self, action: str) -> str:
        identifier = self.identifier
        if identifier is None:
            raise InvalidStateError(f"cannot {action} {self.name} without an identifier")
        return identifier

    def _fail(self, action: str, err: BaseException) -> ResourceOperationError:
        return ResourceOperationError(action, self.name, self.identifier, err)

    def _wait(self, spec: WaitSpec, identifier: str, timeout: float) -> Mapping[str, Any] | None:
        probe = StatusProbe(self.finder, spec.source)
        waiter = Waiter(probe, backoff=self.ctx.config.backoff, cancel=self.ctx.cancel)
        return waiter.wait(
            identifier,
            pending=spec.pending,
            target=spec.target,
            timeout=timeout,
            continuous_target_occurence=spec.continuous_target_occurence,
            not_found_checks=spec.not_found_checks,
        )

    def _transition(self, state: LifecycleState) -> None:
        logger.debug("%s (%s): %s -> %s", self.name, self.identifier, self.state, state)
        self.state = state

    def exists(self) -> bool:
        """Instance is known to exist remotely."""
        if self.state in (LifecycleState.ABSENT, LifecycleState.DESTROYED):
            return False
        return self.identifier is not None

    def has_changes(self) -> bool:
        """Some configurable field differs from the observed state."""
        return any(self.store.has_change(f) for f in self.resource_type.arguments())

    def create(self) -> dict[str, Any] | None:
        """Create the remote object, wait for it to become active, then read it."""
        self._require("create", LifecycleState.ABSENT, LifecycleState.DESTROYED)
        rt = self.resource_type

        desired = rt.validate(self.store.desired(rt.arguments()))
        request = rt.create_request(desired, self.ctx)
        if rt.taggable:
            tags = for_write(getattr(desired, rt.tags_field, None), self.ctx.config.tags)
            if tags:
                request[rt.tags_field] = tags

        # reused until a create succeeds so a retried request is not duplicated
        if self._token is None:
            self._token = uuid.uuid4().hex

        logger.info("Creating %s", self.name)
        logger.debug("Create request for %s: %r", self.name, request)
        try:
            out = self.ctx.client.create(request, self._token)
        except Exception as err:
            raise self._fail(ACTION_CREATING, err) from err

        identifier = rt.identifier_from(out) if out is not None else None
        if not identifier:
            empty = EmptyResultError(last_request=request)
            raise self._fail(ACTION_CREATING, empty) from empty

        self._token = None
        self.store.set_identifier(identifier, newly_created=True)
        self._transition(LifecycleState.CREATING)

        try:
            try:
                self._wait(rt.create_waiter, identifier, self.ctx.config.timeouts.create)
            except Exception as err:
                raise self._fail(ACTION_WAITING_FOR_CREATION, err) from err

            self._transition(LifecycleState.ACTIVE)
            return self.read()
        finally:
            self.store.set_identifier(identifier)

    def read(self) -> dict[str, Any] | None:
        """Refresh observed state; returns None if the object vanished outside our control."""
        if self.state is LifecycleState.DESTROYED:
            raise InvalidStateError(f"cannot read {self.name}; it has been destroyed")
        identifier = self._require_identifier("read")
        rt = self.resource_type

        try:
            out = self.finder.find(identifier)
        except NotFoundError as err:
            if self.store.is_newly_created():
                raise self._fail(ACTION_READING, err) from err
            logger.warning("%s (%s) not found, removing from state", self.name, identifier)
            self.store.clear()
            self._transition(LifecycleState.DESTROYED)
            return None
        except Exception as err:
            raise self._fail(ACTION_READING, err) from err

        observed = rt.flatten(identifier, out, self.ctx)

        if rt.taggable:
            try:
                remote_tags = self.ctx.client.list_tags(identifier)
            except Exception as err:
                raise self._fail(ACTION_LISTING_TAGS, err) from err
            observed[rt.tags_field] = for_read(
                remote_tags, self.ctx.config.tags, self.store.get(rt.tags_field)
            )

        self.store.replace_observed(observed)
        if self.state is LifecycleState.ABSENT:
            self._transition(LifecycleState.ACTIVE)
        return observed

    def update(self) -> dict[str, Any] | None:
        """Send changed fields, wait for the update to settle, then read."""
        self._require("update", LifecycleState.ACTIVE)
        rt = self.resource_type
        identifier = self._require_identifier("update")

        changed = [f for f in rt.arguments() if self.store.has_change(f)]
        if not changed:
            logger.debug("Skipping update of %s (%s); no changes", self.name, identifier)
            return self.store.observed()

        replaced = [f for f in changed if f in rt.immutable()]
        if replaced:
            raise InvalidStateError(
                f"cannot update {self.name} ({identifier}) in place; "
                f"changing {', '.join(replaced)} requires replacement"
            )

        desired = rt.validate(self.store.desired(rt.arguments())).model_dump()
        changes = {f: desired.get(f) for f in changed}
        if rt.taggable and rt.tags_field in changes:
            changes[rt.tags_field] = for_write(changes[rt.tags_field], self.ctx.config.tags)
        request = rt.update_request(changes)

        logger.info("Updating %s (%s): %s", self.name, identifier, ", ".join(changed))
        try:
            self.ctx.client.update(identifier, request)
        except Exception as err:
            raise self._fail(ACTION_UPDATING, err) from err

        self._transition(LifecycleState.UPDATING)
        if rt.update_waiter is not None:
            try:
                self._wait(rt.update_waiter, identifier, self.ctx.config.timeouts.update)
            except Exception as err:
                raise self._fail(ACTION_WAITING_FOR_UPDATE, err) from err

        self._transition(LifecycleState.ACTIVE)
        return self.read()

    def delete(self) -> None:
        """Delete the remote object and wait until it is gone."""
        self._require("delete", LifecycleState.ACTIVE, LifecycleState.UPDATING)
        identifier = self._require_identifier("delete")

        logger.info("Deleting %s (%s)", self.name, identifier)
        try:
            self.ctx.client.delete(identifier)
        except RemoteNotFound:
            logger.debug("%s (%s) already gone", self.name, identifier)
            self._destroyed()
            return
        except Exception as err:
            raise self._fail(ACTION_DELETING, err) from err

        self._transition(LifecycleState.DELETING)
        try:
            self._wait(self.resource_type.delete_waiter, identifier, self.ctx.config.timeouts.delete)
        except Exception as err:
            raise self._fail(ACTION_WAITING_FOR_DELETION, err) from err

        self._destroyed()

    def _destroyed(self) -> None:
        self.store.clear()
        self._transition(LifecycleState.DESTROYED)

    def import_state(self, identifier: str) -> dict[str, Any]:
        """Adopt an existing remote object by identifier."""
        self._require("import", LifecycleState.ABSENT, LifecycleState.DESTROYED)
        logger.info("Importing %s (%s)", self.name, identifier)
        self.store.set_identifier(identifier)
        self._transition(LifecycleState.ABSENT)

        observed = self.read()
        if observed is None:
            err = NotFoundError(last_request={"identifier": identifier})
            raise ResourceOperationError(ACTION_IMPORTING, self.name, identifier, err) from err
        return observed

    def apply(self) -> dict[str, Any] | None:
        """Create the object if it does not exist, otherwise update it."""
        if self.exists():
            return self.update()
        return self.create()
