"""Shared fixtures: a scripted in-memory remote client."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from typing import Any

import pytest

from converge.client import RemoteClient
from converge.config import Backoff, EngineConfig, ProviderInfo, TagsConfig
from converge.context import Context
from converge.errors import RemoteNotFound

NOT_FOUND = object()


class FakeClient(RemoteClient):
    """Remote API double with a queue of scripted lookup results.

    Each ``get`` consumes one entry of ``script``: a status string overrides
    the stored object's status, ``NOT_FOUND`` raises RemoteNotFound, and an
    exception instance is raised. With the script empty, the stored object
    is returned as is.
    """

    def __init__(self) -> None:
        self.objects: dict[str, dict[str, Any]] = {}
        self.tags: dict[str, dict[str, str]] = {}
        self.tokens: dict[str, str] = {}
        self.seen_tokens: list[str] = []
        self.script: list[Any] = []
        self.calls: Counter[str] = Counter()
        self.requests: list[tuple[str, Any]] = []
        self.errors: dict[str, BaseException] = {}
        self.create_returns_none = False
        self._seq = 0
        self._last: dict[str, dict[str, Any]] = {}

    def _record(self, op: str, payload: Any) -> None:
        self.calls[op] += 1
        self.requests.append((op, payload))
        if op in self.errors:
            raise self.errors[op]

    def create(self, request: Mapping[str, Any], token: str) -> Mapping[str, Any] | None:
        self.seen_tokens.append(token)
        self._record("create", dict(request))
        if self.create_returns_none:
            return None
        if token in self.tokens:
            return self.objects[self.tokens[token]]
        self._seq += 1
        assoc_id = f"snsa-{self._seq:04d}"
        arn = f"arn:aws:vpclattice:us-west-2:123456789012:servicenetworkserviceassociation/{assoc_id}"
        obj = {
            "arn": arn,
            "id": assoc_id,
            "status": "ACTIVE",
            "serviceId": request.get("serviceIdentifier"),
            "serviceNetworkId": request.get("serviceNetworkIdentifier"),
        }
        self.objects[arn] = obj
        self.tags[arn] = dict(request.get("tags", {}))
        self.tokens[token] = arn
        return {**obj, "status": "CREATE_IN_PROGRESS"}

    def get(self, identifier: str) -> Mapping[str, Any] | None:
        self._record("get", identifier)
        obj = self.objects.get(identifier) or self._last.get(identifier)
        if self.script:
            entry = self.script.pop(0)
            if entry is NOT_FOUND:
                raise RemoteNotFound(identifier)
            if isinstance(entry, BaseException):
                raise entry
            if obj is None:
                obj = {"arn": identifier, "id": identifier}
            return {**obj, "status": entry}
        if identifier not in self.objects:
            raise RemoteNotFound(identifier)
        return dict(self.objects[identifier])

    def update(self, identifier: str, changes: Mapping[str, Any]) -> Mapping[str, Any] | None:
        self._record("update", (identifier, dict(changes)))
        if identifier not in self.objects:
            raise RemoteNotFound(identifier)
        if "tags" in changes:
            self.tags[identifier] = dict(changes["tags"])
        return {"operationId": f"op-{identifier}"}

    def delete(self, identifier: str) -> Mapping[str, Any] | None:
        self._record("delete", identifier)
        if identifier not in self.objects:
            raise RemoteNotFound(identifier)
        self._last[identifier] = self.objects.pop(identifier)
        self.tags.pop(identifier, None)
        return {}

    def list_tags(self, identifier: str) -> Mapping[str, str]:
        self._record("list_tags", identifier)
        return dict(self.tags.get(identifier, {}))


@pytest.fixture
def client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig(
        backoff=Backoff(poll_interval=0.0),
        tags=TagsConfig(default_tags={"env": "prod"}, ignore_key_prefixes=["aws:"]),
        provider=ProviderInfo(region="us-west-2", account_id="123456789012"),
    )


@pytest.fixture
def ctx(client: FakeClient, config: EngineConfig) -> Context[FakeClient]:
    return Context(client, config=config)
