"""Tests for src/models.py dataclasses."""

import dataclasses

import pytest

from src.models import CallResult, ModelSpec, ProviderKind
from src.providers.base import ProviderError


def test_model_spec_is_frozen():
    spec = ModelSpec("o3-mini", ProviderKind.OPENAI)
    with pytest.raises(dataclasses.FrozenInstanceError):
        spec.model = "other"  # type: ignore[misc]


def test_provider_kind_from_settings_value():
    assert ProviderKind("claude") is ProviderKind.CLAUDE


def test_call_result_ok_text():
    r = CallResult(model="o3-mini", latency_sec=1.2, content="Hello.")
    assert r.ok is True
    assert r.text == "Hello."


def test_call_result_error_placeholder():
    r = CallResult(model="o3-mini", latency_sec=0.3, error=ProviderError("openai", "boom"))
    assert r.ok is False
    assert r.text == "Error from o3-mini: boom"
