"""Tests for converge.context and converge.config."""

from __future__ import annotations

import threading

import pytest
from pydantic import ValidationError

from converge.config import Backoff, EngineConfig, Timeouts
from converge.context import Context


class TestContext:
    def test_create_with_client(self):
        client = object()
        ctx = Context(client)
        assert ctx.client is client

    def test_dry_run_defaults_false(self):
        assert Context(object()).dry_run is False

    def test_dry_run_explicit_true(self):
        assert Context(object(), dry_run=True).dry_run is True

    def test_default_config(self):
        ctx = Context(object())
        assert ctx.config == EngineConfig()
        assert ctx.config.timeouts.create == 1800

    def test_cancel_event(self):
        cancel = threading.Event()
        ctx = Context(object(), cancel=cancel)
        assert ctx.canceled is False
        cancel.set()
        assert ctx.canceled is True


class TestConfig:
    def test_timeouts_must_be_positive(self):
        with pytest.raises(ValidationError):
            Timeouts(create=0)

    def test_jitter_bounds(self):
        with pytest.raises(ValidationError):
            Backoff(jitter=2)

    def test_from_dict(self):
        config = EngineConfig.model_validate(
            {
                "timeouts": {"delete": 60},
                "tags": {"default_tags": {"env": "prod"}},
                "provider": {"region": "eu-west-1"},
            }
        )
        assert config.timeouts.delete == 60
        assert config.timeouts.create == 1800
        assert config.tags.default_tags == {"env": "prod"}
        assert config.provider.partition == "aws"
