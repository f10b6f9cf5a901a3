from __future__ import annotations

import pytest

from skillgap.config import _optional_int


def test_optional_int_unset_means_no_limit(monkeypatch):
    monkeypatch.delenv("SKILLGAP_ROADMAP_MAX_STEPS", raising=False)
    assert _optional_int("SKILLGAP_ROADMAP_MAX_STEPS") is None
    monkeypatch.setenv("SKILLGAP_ROADMAP_MAX_STEPS", "")
    assert _optional_int("SKILLGAP_ROADMAP_MAX_STEPS") is None


def test_optional_int_accepts_zero_and_positive(monkeypatch):
    monkeypatch.setenv("SKILLGAP_ROADMAP_MAX_STEPS", "0")
    assert _optional_int("SKILLGAP_ROADMAP_MAX_STEPS") == 0
    monkeypatch.setenv("SKILLGAP_ROADMAP_MAX_STEPS", "5")
    assert _optional_int("SKILLGAP_ROADMAP_MAX_STEPS") == 5


def test_optional_int_rejects_negative(monkeypatch):
    monkeypatch.setenv("SKILLGAP_ROADMAP_MAX_STEPS", "-2")
    with pytest.raises(ValueError):
        _optional_int("SKILLGAP_ROADMAP_MAX_STEPS")
