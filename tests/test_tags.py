"""Tests for converge.tags."""

from __future__ import annotations

from converge.config import TagsConfig
from converge.tags import for_read, for_write, ignored


class TestForWrite:
    def test_merges_defaults(self):
        config = TagsConfig(default_tags={"env": "prod"})
        assert for_write({"a": "1"}, config) == {"a": "1", "env": "prod"}

    def test_resource_tags_win(self):
        config = TagsConfig(default_tags={"env": "prod"})
        assert for_write({"env": "dev"}, config) == {"env": "dev"}

    def test_drops_ignored(self):
        config = TagsConfig(ignore_keys=["owner"], ignore_key_prefixes=["aws:"])
        tags = {"owner": "me", "aws:cloudformation:stack": "s", "a": "1"}
        assert for_write(tags, config) == {"a": "1"}

    def test_none_means_defaults_only(self):
        config = TagsConfig(default_tags={"env": "prod"})
        assert for_write(None, config) == {"env": "prod"}


class TestForRead:
    def test_elides_defaults(self):
        config = TagsConfig(default_tags={"env": "prod"})
        assert for_read({"a": "1", "env": "prod"}, config) == {"a": "1"}

    def test_keeps_overridden_default(self):
        config = TagsConfig(default_tags={"env": "prod"})
        assert for_read({"env": "dev"}, config) == {"env": "dev"}

    def test_drops_ignored(self):
        config = TagsConfig(ignore_keys=["owner"], ignore_key_prefixes=["aws:"])
        assert for_read({"owner": "me", "aws:x": "y", "a": "1"}, config) == {"a": "1"}

    def test_write_then_read(self):
        config = TagsConfig(default_tags={"env": "prod"})
        remote = for_write({"a": "1"}, config)
        assert remote == {"a": "1", "env": "prod"}
        assert for_read(remote, config) == {"a": "1"}


class TestIgnored:
    def test_exact_key(self):
        assert ignored("owner", TagsConfig(ignore_keys=["owner"]))

    def test_prefix(self):
        assert ignored("aws:x", TagsConfig(ignore_key_prefixes=["aws:"]))

    def test_not_ignored(self):
        assert not ignored("owner", TagsConfig())


class TestConfiguredDefaults:
    def test_keeps_default_the_caller_configured(self):
        config = TagsConfig(default_tags={"env": "prod"})
        remote = {"a": "1", "env": "prod"}
        assert for_read(remote, config, {"env": "prod"}) == {"a": "1", "env": "prod"}

    def test_still_drops_ignored_configured_key(self):
        config = TagsConfig(default_tags={"env": "prod"}, ignore_keys=["env"])
        assert for_read({"env": "prod"}, config, {"env": "prod"}) == {}
