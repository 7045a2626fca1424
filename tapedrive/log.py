"""Styled console output for the command line."""

from __future__ import annotations

import sys

from termcolor import colored


def print_title(text: str) -> None:
    """Print a bold title for a major section of output."""
    print(colored(f"\n{text}", attrs=["bold"]))


def print_info(text: str) -> None:
    """Print a plain informational message."""
    print(text)


def print_divider() -> None:
    """Print an empty line between sections."""
    sys.stdout.write("\n")
    sys.stdout.flush()


def print_section_header(text: str) -> None:
    """Print a yellow, bold section header."""
    print(colored(f"\n=== {text} ===", "yellow", attrs=["bold"]))


def print_message(text: str) -> None:
    """Print a message with a cyan arrow prefix."""
    print(colored(f"→ {text}", "cyan"))


def print_count(text: str) -> None:
    """Print a count or metric with a blue diamond prefix."""
    print(colored(f"⟐ {text}", "blue"))


def print_error(text: str) -> None:
    """Print an error with a red cross prefix."""
    print(colored(f"✗ {text}", "red"))