"""Tests for settings."""

import pytest
from pydantic import ValidationError

from medcorpus.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.min_documents_read == 2
    assert settings.min_searches == 3
    assert settings.min_expected_sections == 3
    assert settings.timeline_events_per_year == 20


def test_environment_override(monkeypatch):
    monkeypatch.setenv("MEDCORPUS_MIN_SEARCHES", "1")
    assert Settings(_env_file=None).min_searches == 1


def test_negative_threshold_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, min_searches=-1)
