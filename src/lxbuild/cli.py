"""
Command-line interface for lxbuild.

This module provides the `lxbuild` CLI tool for building LX projects.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

from lxbuild import __version__
from lxbuild.build import BuildOrchestrator
from lxbuild.cli_utils import ErrorFormatter, PathValidator


@dataclass
class BuildArgs:
    """Arguments for the build command."""

    descriptor: Path
    verbose: bool = False


def build_command(args: BuildArgs) -> None:
    """Build an LX project into a native executable.

    Examples:
        lxbuild build example/project.lx-build
        lxbuild build example/project.lx-build --verbose
    """
    print(f"LX Build v{__version__}")
    print()

    try:
        orchestrator = BuildOrchestrator(verbose=args.verbose)

        if args.verbose:
            print(f"Building project: {args.descriptor}")
            print()
        else:
            print(f"Building {args.descriptor.name}...")

        result = orchestrator.build(args.descriptor)

        if result.success:
            ErrorFormatter.print_success("Build successful!")
            print()
            print(f"Executable: {result.executable_path}")
            print(f"Build time: {result.build_time:.2f}s")
            sys.exit(0)
        else:
            stage = result.stage.value if result.stage else None
            ErrorFormatter.print_build_failure(stage, result.message)
            sys.exit(1)

    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def main() -> None:
    """lxbuild - native toolchain driver for the LX compiler."""
    parser = argparse.ArgumentParser(
        prog="lxbuild",
        description="lxbuild - build LX projects with a native C++ toolchain",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"lxbuild {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    build_parser = subparsers.add_parser(
        "build",
        help="Translate, compile and link an LX project",
    )
    build_parser.add_argument(
        "descriptor",
        type=Path,
        help="Path to the project's .lx-build file",
    )
    build_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    parsed_args = parser.parse_args()

    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    PathValidator.validate_descriptor(parsed_args.descriptor)

    if parsed_args.command == "build":
        build_command(
            BuildArgs(
                descriptor=parsed_args.descriptor,
                verbose=parsed_args.verbose,
            )
        )


if __name__ == "__main__":
    main()
