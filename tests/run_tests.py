"""Test runner scripts for the project entry points."""

import subprocess
import sys


def run_command(command):
    """Run a shell command and return exit code."""
    result = subprocess.run(command, check=False, shell=True)
    return result.returncode


def run_all():
    """Run all tests (unit and component)."""
    print("Running all tests...")
    exit_code = run_command(
        "python manage.py test tests.unit tests.component "
        "--settings=notifier_service.settings_test"
    )
    sys.exit(exit_code)


def run_unit():
    """Run unit tests only."""
    print("Running unit tests...")
    exit_code = run_command(
        "python manage.py test tests.unit --settings=notifier_service.settings_test"
    )
    sys.exit(exit_code)


def run_component():
    """Run component tests only."""
    print("Running component tests...")
    exit_code = run_command(
        "python manage.py test tests.component "
        "--settings=notifier_service.settings_test"
    )
    sys.exit(exit_code)
