"""Command registry for registry-access CLI.

Provides auto-discovery and registration of commands that implement the
Command protocol.

Usage:
    from registry_access.cli.registry import discover_commands, register_commands

    # Discover all command modules
    commands = discover_commands()

    # Register them on an argparse subparsers group
    register_commands(subparsers, commands)
"""

import argparse
import importlib
import logging
import pkgutil
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from registry_access.cli.command_protocol import Command

logger = logging.getLogger(__name__)

# Registry of command classes.
# Populated by discover_commands() at startup.
_registry: dict[str, type["Command"]] = {}


def discover_commands() -> dict[str, type["Command"]]:
    """Discover command classes in the commands subpackage.

    Scans registry_access.cli.commands for modules that export a class
    implementing the Command protocol (has name, help, add_arguments, run).

    Returns:
        Dict mapping command names to command classes.
    """
    from registry_access.cli.command_protocol import Command

    import registry_access.cli.commands as pkg

    commands: dict[str, type[Command]] = {}

    for _importer, modname, _ispkg in pkgutil.iter_modules(pkg.__path__):
        if modname.startswith("_"):
            continue
        module = importlib.import_module(f"registry_access.cli.commands.{modname}")

        # Look for a class named *Command (e.g., AccessCommand)
        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if (
                isinstance(obj, type)
                and obj is not Command
                and attr_name.endswith("Command")
                and hasattr(obj, "name")
                and hasattr(obj, "help")
                and hasattr(obj, "add_arguments")
                and hasattr(obj, "run")
            ):
                commands[obj.name] = obj

    logger.debug(f"Discovered commands: {sorted(commands)}")

    global _registry
    _registry = commands
    return commands


def get_registry() -> dict[str, type["Command"]]:
    """Return the current command registry."""
    return _registry


def register_commands(
    subparsers: argparse._SubParsersAction,
    commands: dict[str, type["Command"]],
    *,
    skip_existing: bool = True,
) -> None:
    """Register commands on an argparse subparsers group.

    For each command, creates a subparser and calls the command's
    add_arguments() method to populate it. Sets a ``_command_class``
    default on the subparser so main() can find the right run() method.

    Args:
        subparsers: The _SubParsersAction from parser.add_subparsers().
        commands: Dict of command name -> command class.
        skip_existing: If True, skip commands whose names already exist
            as subparsers.
    """
    existing_names: set[str] = set()
    if skip_existing and hasattr(subparsers, "_name_parser_map"):
        existing_names = set(subparsers._name_parser_map.keys())

    for name, cmd_class in sorted(commands.items()):
        if name in existing_names:
            continue

        sub = subparsers.add_parser(
            name,
            help=cmd_class.help,
            description=cmd_class.__doc__,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        cmd_class.add_arguments(sub)
        sub.set_defaults(_command_class=cmd_class)
