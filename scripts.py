#!/usr/bin/env python3
"""Development scripts for the Ticket Booking service."""

import subprocess
import sys


def start():
    """Start the development server."""
    subprocess.run([
        "uvicorn",
        "ticket_booking.main:app",
        "--host", "0.0.0.0",
        "--port", "3000",
        "--reload"
    ])


def widget():
    """Start the terminal booking widget against the local server."""
    subprocess.run(["ticket-booking", "widget"])


def test():
    """Run the test suite."""
    sys.exit(subprocess.run(["pytest", "tests/"]).returncode)


def lint():
    """Run linting and type checking."""
    subprocess.run(["black", "ticket_booking/", "tests/"])
    subprocess.run(["mypy", "ticket_booking/"])


def format_code():
    """Format code with black."""
    subprocess.run(["black", "ticket_booking/", "tests/"])


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts.py <command>")
        print("Commands: start, widget, test, lint, format-code")
        sys.exit(1)

    command = sys.argv[1].replace("-", "_")
    if hasattr(sys.modules[__name__], command):
        getattr(sys.modules[__name__], command)()
    else:
        print(f"Unknown command: {sys.argv[1]}")
        sys.exit(1)
