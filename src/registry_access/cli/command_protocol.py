"""Command protocol for registry-access CLI.

Defines the interface every CLI command implements. Commands own their
argument parser configuration and execution logic.

Usage:
    from registry_access.cli.command_protocol import Command

    class MyCommand:
        name = "my-command"
        help = "Description of my command"

        @staticmethod
        def add_arguments(parser: argparse.ArgumentParser) -> None:
            parser.add_argument("package", help="Package name")

        @staticmethod
        def run(args: argparse.Namespace) -> int:
            print(f"Processing {args.package}")
            return 0
"""

import argparse
from typing import Protocol, runtime_checkable


@runtime_checkable
class Command(Protocol):
    """Protocol for CLI command modules.

    Attributes:
        name: The subcommand name (e.g., "access", "config").
        help: Brief help text shown in the top-level --help output.

    Methods:
        add_arguments: Register arguments on the provided subparser.
        run: Execute the command with the parsed argument namespace.
    """

    name: str
    help: str

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """Add command-specific arguments to the parser.

        Args:
            parser: The argparse subparser for this command.
        """
        ...

    @staticmethod
    def run(args: argparse.Namespace) -> int:
        """Execute the command.

        Args:
            args: Parsed arguments from argparse. All arguments added
                  in add_arguments() are available as attributes.

        Returns:
            Exit code (0 for success, non-zero for errors).
        """
        ...
