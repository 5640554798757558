#!/usr/bin/env python3
"""
Development scripts for servicewire.

These scripts integrate with uv to run various checks and tests.
"""

import subprocess
import sys
from pathlib import Path


def run_command(cmd: list[str], description: str) -> bool:
    """Run a command and return True if successful."""
    print(f"\n{description}...")
    print(f"Running: {' '.join(cmd)}")

    try:
        subprocess.run(cmd, check=True, capture_output=False)
        print(f"{description} passed")
        return True
    except subprocess.CalledProcessError as e:
        print(f"{description} failed with exit code {e.returncode}")
        return False
    except FileNotFoundError:
        print(f"Command not found: {cmd[0]}")
        return False


def run_all(checks: list[tuple[list[str], str]]) -> int:
    """Run every check, even after a failure."""
    results = [run_command(cmd, desc) for cmd, desc in checks]
    return 0 if all(results) else 1


def run_tests() -> int:
    """Run the test suite."""
    return run_all([(["uv", "run", "pytest", "-v"], "Tests")])


def run_lint() -> int:
    """Run linting checks."""
    status = run_all(
        [
            (["uv", "run", "ruff", "check", "."], "Ruff linting"),
            (["uv", "run", "ruff", "format", "--check", "."], "Ruff formatting"),
        ]
    )
    if status:
        print("\nTo auto-fix formatting issues, run: uv run ruff format .")
    return status


def run_typecheck() -> int:
    """Run type checking with both mypy and pyright."""
    return run_all(
        [
            (["uv", "run", "mypy", "src/servicewire/"], "MyPy type checking"),
            (["uv", "run", "pyright", "src/servicewire/"], "Pyright type checking"),
        ]
    )


def run_demos() -> int:
    """Run all demo scripts to ensure they work correctly."""
    demo_dir = Path("demo")
    if not demo_dir.exists():
        print("Demo directory not found")
        return 1

    demo_files = sorted(f for f in demo_dir.glob("*.py") if not f.name.startswith("_"))
    return run_all([(["uv", "run", "python", str(f)], f"Demo: {f.name}") for f in demo_files])


def check_all() -> int:
    """Run all checks: tests, linting, type checking and demos."""
    checks = [
        ("Tests", run_tests),
        ("Linting", run_lint),
        ("Type Checking", run_typecheck),
        ("Demos", run_demos),
    ]

    results = {}
    for name, func in checks:
        print(f"\n{'=' * 20} {name} {'=' * 20}")
        results[name] = func() == 0

    print(f"\n{'=' * 20} SUMMARY {'=' * 20}")
    for name, passed in results.items():
        print(f"{name:<15} {'PASS' if passed else 'FAIL'}")

    return 0 if all(results.values()) else 1


COMMANDS = {
    "test": run_tests,
    "lint": run_lint,
    "typecheck": run_typecheck,
    "demos": run_demos,
    "check": check_all,
}


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] in COMMANDS:
        sys.exit(COMMANDS[sys.argv[1]]())

    print(f"Available commands: {', '.join(COMMANDS)}")
    print("Usage: python scripts.py <command>")
    sys.exit(1 if len(sys.argv) > 1 else 0)
