"""Tag merging and filtering against provider-wide defaults."""

from __future__ import annotations

from collections.abc import Mapping

from .config import TagsConfig


def ignored(key: str, config: TagsConfig) -> bool:
    """Return True if the key is excluded by the ignore rules."""
    if key in config.ignore_keys:
        return True
    return any(key.startswith(prefix) for prefix in config.ignore_key_prefixes)


def for_write(tags: Mapping[str, str] | None, config: TagsConfig) -> dict[str, str]:
    """Tags to send to the remote API: defaults overlaid by resource tags, minus ignored keys."""
    merged = {**config.default_tags, **(tags or {})}
    return {k: v for k, v in merged.items() if not ignored(k, config)}


def for_read(
    remote: Mapping[str, str],
    config: TagsConfig,
    configured: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Tags to expose to the caller: remote tags minus ignored keys and unchanged defaults.

    A default tag is elided only when the remote value still equals the
    default and the caller did not configure that key on the resource, so
    overrides and explicitly repeated defaults stay visible.
    """
    configured = configured or {}
    visible: dict[str, str] = {}
    for key, value in remote.items():
        if ignored(key, config):
            continue
        if config.default_tags.get(key) == value and key not in configured:
            continue
        visible[key] = value
    return visible
