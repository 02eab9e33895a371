"""
Argument parser setup for registry-access CLI.

Top-level options live here; each command registers its own arguments
through the Command protocol.
"""

import argparse

from registry_access import __version__

from .registry import discover_commands, register_commands

__all__ = ["create_parser"]

# Used as epilog in help
CLI_DOCSTRING = """
Commands:

    registry-access access <subcommand> [args]  - Change or list package access
    registry-access completion <words...>       - Completion candidates for access
    registry-access config                      - View/manage configuration

Examples:
    rac access public @myorg/widgets
    rac access grant read-write myorg:developers @myorg/widgets
    rac access revoke myorg:developers
    rac access 2fa-required
    rac access ls-packages myorg:developers
    rac access ls-collaborators @myorg/widgets
    rac completion rac access grant
"""


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="registry-access",
        description="Manage access to packages published on a registry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=CLI_DOCSTRING,
    )
    parser.add_argument("--version", action="version", version=f"registry-access {__version__}")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging and show full stack traces on errors",
        dest="global_verbose",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log errors",
        dest="global_quiet",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    register_commands(subparsers, discover_commands())

    return parser
