#!/usr/bin/env python3
# Copyright 2026 TypeCanvas Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the TypeCanvas checks locally: format, lint, type check, tests and build.

Usage:
    tools/ci.py                 # run every step
    tools/ci.py tests lint      # run the named steps only
    tools/ci.py --fail-fast     # stop at the first failing step
"""

import argparse
import pathlib
import subprocess
import sys
import time
from dataclasses import dataclass

from yachalk import chalk

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Step:
    """A named check and the command that runs it."""

    key: str
    title: str
    command: list[str]


@dataclass(frozen=True)
class StepResult:
    """Outcome of one executed step."""

    step: Step
    passed: bool
    elapsed: float


STEPS: list[Step] = [
    Step("format", "Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    Step("lint", "Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    Step("types", "Type check", ["uv", "run", "ty", "check", "src/"]),
    Step("tests", "Tests", ["uv", "run", "pytest", "--cov=typecanvas", "--cov-report=term-missing"]),
    Step("build", "Build", ["uv", "build"]),
]


def select_steps(keys: list[str]) -> list[Step]:
    """Return the steps named by *keys* in pipeline order, or all steps if none are given.

    Raises:
        ValueError: If a key does not name a step.
    """
    known = {step.key for step in STEPS}
    unknown = [key for key in keys if key not in known]
    if unknown:
        raise ValueError(f"Unknown step(s): {', '.join(unknown)} (choose from {', '.join(sorted(known))})")
    if not keys:
        return list(STEPS)
    return [step for step in STEPS if step.key in keys]


def run_steps(steps: list[Step], fail_fast: bool = False) -> list[StepResult]:
    """Execute *steps* from the repository root and collect their results."""
    results: list[StepResult] = []
    for step in steps:
        _print_banner(step.title)
        start = time.monotonic()
        proc = subprocess.run(step.command, cwd=_repo_root())
        result = StepResult(step, proc.returncode == 0, time.monotonic() - start)
        results.append(result)
        if fail_fast and not result.passed:
            break
    return results


def main(argv: list[str] | None = None) -> int:
    """Run the selected steps, print a summary and return the exit code."""
    parser = argparse.ArgumentParser(description="Run the TypeCanvas checks locally.")
    parser.add_argument("steps", nargs="*", help="Steps to run (default: all).")
    parser.add_argument("--fail-fast", action="store_true", help="Stop at the first failing step.")
    args = parser.parse_args(argv)

    try:
        steps = select_steps(args.steps)
    except ValueError as exc:
        print(chalk.red(str(exc)), file=sys.stderr)
        return 2

    results = run_steps(steps, fail_fast=args.fail_fast)
    _print_summary(results)
    return 0 if all(r.passed for r in results) else 1


# ################
# Implementation
# ################

_RULE = "=" * 60


def _print_banner(title: str) -> None:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue(title))
    print(chalk.blue(_RULE))


def _print_summary(results: list[StepResult]) -> None:
    _print_banner("  Summary")
    for result in results:
        status, paint = ("PASS", chalk.green) if result.passed else ("FAIL", chalk.red)
        print(paint(f"  {status}  {result.step.title} ({result.elapsed:.1f}s)"))
    print()


def _repo_root() -> str:
    return str(pathlib.Path(__file__).parent.parent)


if __name__ == "__main__":
    sys.exit(main())
