#!/usr/bin/env python
"""Run the HalabTours test suite and code quality checks."""
import subprocess
import sys

SOURCE_DIRS = "src tests"

# (command, description); every check runs even if an earlier one fails
CHECKS = [
    (f"black --check --line-length 100 {SOURCE_DIRS}", "black code style check"),
    (
        f"isort --check-only --profile black --line-length 100 {SOURCE_DIRS}",
        "isort import order check",
    ),
    (f"flake8 --max-line-length 100 --extend-ignore E203 {SOURCE_DIRS}", "flake8 lint"),
    ("pytest tests", "pytest tests"),
]


def run_command(command, description):
    """Run a command and print its output."""
    print(f"\n\n{'=' * 80}")
    print(f"Running {description}...")
    print(f"{'=' * 80}\n")

    result = subprocess.run(command, shell=True, capture_output=True, text=True)
    print(result.stdout)

    if result.stderr:
        print("Errors:")
        print(result.stderr)

    return result.returncode == 0


def main():
    """Run all tests and code quality checks."""
    failed = [
        description for command, description in CHECKS if not run_command(command, description)
    ]

    if failed:
        print(f"\n\nFailed checks: {', '.join(failed)}. Please fix the issues before committing.")
        sys.exit(1)

    print("\n\nAll checks passed!")


if __name__ == "__main__":
    main()
