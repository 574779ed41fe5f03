# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the local check runner."""

import importlib.util
import subprocess
from pathlib import Path
from types import ModuleType

import pytest

_CI_PATH = Path(__file__).resolve().parents[2] / "tools" / "ci.py"


@pytest.fixture
def ci() -> ModuleType:
    module_spec = importlib.util.spec_from_file_location("typecanvas_ci", _CI_PATH)
    assert module_spec is not None and module_spec.loader is not None
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    """Replace subprocess.run; commands containing 'ruff' fail."""
    calls: list[list[str]] = []

    def _run(command: list[str], cwd: str) -> subprocess.CompletedProcess[bytes]:
        calls.append(command)
        return subprocess.CompletedProcess(command, 1 if "ruff" in command else 0)

    monkeypatch.setattr(subprocess, "run", _run)
    return calls


class TestSelectSteps:
    def test_all_by_default(self, ci: ModuleType) -> None:
        assert ci.select_steps([]) == ci.STEPS

    def test_keeps_pipeline_order(self, ci: ModuleType) -> None:
        assert [s.key for s in ci.select_steps(["tests", "format"])] == ["format", "tests"]

    def test_unknown_step(self, ci: ModuleType) -> None:
        with pytest.raises(ValueError, match="Unknown step"):
            ci.select_steps(["deploy"])

    def test_coverage_targets_package(self, ci: ModuleType) -> None:
        (tests,) = ci.select_steps(["tests"])
        assert "--cov=typecanvas" in tests.command


class TestMain:
    def test_passing_steps(self, ci: ModuleType, fake_run: list[list[str]]) -> None:
        assert ci.main(["tests", "build"]) == 0
        assert len(fake_run) == 2

    def test_failure_sets_exit_code(self, ci: ModuleType, fake_run: list[list[str]]) -> None:
        assert ci.main(["lint", "tests"]) == 1
        assert len(fake_run) == 2

    def test_fail_fast(self, ci: ModuleType, fake_run: list[list[str]]) -> None:
        assert ci.main(["--fail-fast"]) == 1
        assert len(fake_run) == 1

    def test_unknown_step_exit_code(self, ci: ModuleType, fake_run: list[list[str]]) -> None:
        assert ci.main(["deploy"]) == 2
        assert fake_run == []
