"""ResourceType ABC, field schema markers, and resource registration."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

import pydantic
from pydantic import BaseModel

from .context import Context
from .errors import ValidationError
from .status import ApiField, StatusSource

# -- Resource Registry --

_resource_registry: dict[str, type[ResourceType]] = {}


def resource(name: str):
    """Register a ResourceType class under its provider type name."""

    def decorator(cls):
        cls.type_name = name
        _resource_registry[name] = cls
        return cls

    return decorator


def lookup(name: str) -> type[ResourceType]:
    """Return the ResourceType registered under ``name``."""
    if name not in _resource_registry:
        raise ValueError(f"Unknown resource type: '{name}'")
    return _resource_registry[name]


def registered_types() -> list[str]:
    return sorted(_resource_registry)


# -- Field Schema --


class Computed:
    """Marks a model field as set only by the remote system."""

    def __repr__(self) -> str:
        return "Computed()"


class ForceNew:
    """Marks a model field that cannot change without replacing the object."""

    def __repr__(self) -> str:
        return "ForceNew()"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    required: bool
    computed: bool
    force_new: bool = False


def field_specs(model: type[BaseModel]) -> list[FieldSpec]:
    """Describe each field of a desired-state model."""
    specs = []
    for name, info in model.model_fields.items():
        specs.append(
            FieldSpec(
                name=name,
                required=info.is_required(),
                computed=any(isinstance(m, Computed) for m in info.metadata),
                force_new=any(isinstance(m, ForceNew) for m in info.metadata),
            )
        )
    return specs


@dataclass(frozen=True)
class WaitSpec:
    """Status sets and tolerances for one kind of wait."""

    pending: tuple[str, ...]
    target: tuple[str, ...]
    source: StatusSource = field(default_factory=ApiField)
    continuous_target_occurence: int = 1
    not_found_checks: int = 20


# -- ResourceType ABC --


M = TypeVar("M", bound=BaseModel)


class ResourceType(ABC, Generic[M]):
    """Describes one kind of remote object to the generic reconciler."""

    type_name: ClassVar[str] = ""
    display_name: ClassVar[str]
    model: ClassVar[type[BaseModel]]

    taggable: ClassVar[bool] = True
    tags_field: ClassVar[str] = "tags"

    create_waiter: ClassVar[WaitSpec]
    update_waiter: ClassVar[WaitSpec | None] = None
    delete_waiter: ClassVar[WaitSpec]

    @classmethod
    def fields(cls) -> list[FieldSpec]:
        return field_specs(cls.model)

    @classmethod
    def arguments(cls) -> list[str]:
        """Names of the fields a caller may configure."""
        return [f.name for f in cls.fields() if not f.computed]

    @classmethod
    def immutable(cls) -> list[str]:
        """Names of the fields that force replacement when changed."""
        return [f.name for f in cls.fields() if f.force_new]

    def validate(self, values: Mapping[str, Any]) -> M:
        """Build the desired-state model, raising ValidationError on bad input."""
        try:
            return self.model.model_validate(dict(values))  # type: ignore[return-value]
        except pydantic.ValidationError as exc:
            raise ValidationError(self.display_name, exc.errors()) from exc

    @abstractmethod
    def create_request(self, desired: M, ctx: Context[Any]) -> dict[str, Any]:
        """Build the create call's request fields (without tags)."""

    def identifier_from(self, response: Mapping[str, Any]) -> str | None:
        """Pick the identifier out of a create response."""
        return response.get("arn") or response.get("id")

    def update_request(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        """Build a partial update request from the changed fields."""
        return dict(changes)

    @abstractmethod
    def flatten(
        self,
        identifier: str,
        response: Mapping[str, Any],
        ctx: Context[Any],
    ) -> dict[str, Any]:
        """Map a lookup response to observed state fields (without tags)."""
