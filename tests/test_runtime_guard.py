"""Tests for runtime/environment guardrails."""

from __future__ import annotations

import importlib.util

import pytest

from fairleague.utils.runtime import runtime_problems, validate_runtime


def test_validate_runtime_accepts_supported_python():
    validate_runtime(min_python=(3, 10), required_modules=(), python_version=(3, 12))


def test_validate_runtime_rejects_unsupported_python():
    with pytest.raises(RuntimeError) as exc:
        validate_runtime(min_python=(3, 10), required_modules=(), python_version=(3, 9))

    message = str(exc.value)
    assert "Python >=3.10" in message
    assert "3.9" in message
    assert "pip install -e" in message


def test_runtime_problems_reports_everything(monkeypatch: pytest.MonkeyPatch):
    original_find_spec = importlib.util.find_spec

    def fake_find_spec(name: str):
        if name in ("missing_pkg", "other_pkg"):
            return None
        return original_find_spec(name)

    monkeypatch.setattr(importlib.util, "find_spec", fake_find_spec)

    problems = runtime_problems(
        min_python=(3, 10),
        required_modules=("json", "other_pkg", "missing_pkg"),
        python_version=(3, 8),
    )
    assert len(problems) == 2
    assert "3.8" in problems[0]
    assert problems[1] == "Missing required Python modules: missing_pkg, other_pkg"


def test_runtime_problems_empty_when_fine():
    assert runtime_problems(required_modules=("json",), python_version=(3, 11)) == []
