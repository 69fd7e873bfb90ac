"""Runtime checks run by CLI entrypoints before importing the engine."""

from __future__ import annotations

import importlib.util
import sys
from collections.abc import Sequence

MIN_PYTHON = (3, 10)
REQUIRED_MODULES = ("pydantic", "pandas", "sqlalchemy", "unidecode")
INSTALL_HINT = 'Install with `python -m pip install -e ".[dev]"` in a fresh virtualenv.'


def runtime_problems(
    min_python: tuple[int, int] = MIN_PYTHON,
    required_modules: Sequence[str] = REQUIRED_MODULES,
    python_version: tuple[int, int] | None = None,
) -> list[str]:
    """List everything wrong with the current interpreter; empty when fine."""
    problems = []
    current = python_version or (sys.version_info.major, sys.version_info.minor)
    if current < min_python:
        problems.append(
            f"FairLeague requires Python >={min_python[0]}.{min_python[1]}, "
            f"found {current[0]}.{current[1]}"
        )

    missing = sorted(mod for mod in required_modules if importlib.util.find_spec(mod) is None)
    if missing:
        problems.append(f"Missing required Python modules: {', '.join(missing)}")
    return problems


def validate_runtime(
    min_python: tuple[int, int] = MIN_PYTHON,
    required_modules: Sequence[str] = REQUIRED_MODULES,
    python_version: tuple[int, int] | None = None,
) -> None:
    """Raise RuntimeError naming every runtime problem at once."""
    problems = runtime_problems(min_python, required_modules, python_version)
    if problems:
        raise RuntimeError("; ".join(problems) + ". " + INSTALL_HINT)
