"""CLI utility functions for lxbuild.

This module provides common utilities used by the CLI:
- Descriptor path validation
- Error handling and formatting
"""

import sys
from pathlib import Path
from typing import Optional

from lxbuild.config import DESCRIPTOR_EXTENSION


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message.

        Args:
            title: Error title (e.g., "Build failed during linking")
            message: Error message details
        """
        print()
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}")
        print()
        print(message)
        print()

    @staticmethod
    def print_success(message: str) -> None:
        print()
        print(f"{ErrorFormatter.GREEN}✓ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def print_build_failure(stage: Optional[str], message: str) -> None:
        """Report a failed build, naming the pipeline stage that stopped it."""
        ErrorFormatter.print_error(f"Build failed during {stage or 'build'}!", message)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        print()
        print(f"{ErrorFormatter.YELLOW}✗ Build interrupted{ErrorFormatter.RESET}")
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
            verbose: Whether to print traceback
        """
        message = f"{type(error).__name__}: {error}"
        ErrorFormatter.print_error("Unexpected error", message)

        if verbose:
            import traceback

            print("Traceback:")
            print(traceback.format_exc())

        sys.exit(1)


class PathValidator:
    """Validates descriptor paths given on the command line."""

    @staticmethod
    def validate_descriptor(descriptor: Path) -> None:
        """Validate that the descriptor exists and looks like a .lx-build file.

        Args:
            descriptor: Path to validate

        Raises:
            SystemExit: If the path is missing, not a file, or has the wrong extension
        """
        if not descriptor.exists():
            print(
                f"{ErrorFormatter.RED}✗ Error: Path does not exist: {descriptor}{ErrorFormatter.RESET}"
            )
            sys.exit(2)
        if not descriptor.is_file():
            print(
                f"{ErrorFormatter.RED}✗ Error: Path is not a file: {descriptor}{ErrorFormatter.RESET}"
            )
            sys.exit(2)
        if not descriptor.name.endswith(DESCRIPTOR_EXTENSION):
            print(
                f"{ErrorFormatter.RED}✗ Error: Not a {DESCRIPTOR_EXTENSION} file: {descriptor}{ErrorFormatter.RESET}"
            )
            sys.exit(2)
