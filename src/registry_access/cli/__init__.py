"""
Command-line interface for registry-access.

Provides CLI commands via the `registry-access` or `rac` command:

    registry-access access <subcommand> [args]  - Change or list package access
    registry-access completion <words...>       - Completion candidates
    registry-access config                      - View/manage configuration

Examples:
    rac access public @myorg/widgets
    rac access grant read-only myorg:auditors @myorg/widgets
    rac access ls-packages
"""

from typing import List, Optional

from registry_access.config import Config, ConfigError
from registry_access.exceptions import RegistryAccessError

from .parser import create_parser
from .utils import configure_logging, print_error

__all__ = ["main"]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for registry-access CLI."""
    parser = create_parser()
    args, extras = parser.parse_known_args(argv)
    if extras:
        # Positionals given after an option land in extras; commands that
        # declare ``extra_positionals`` take them back in order.
        dest = getattr(getattr(args, "_command_class", None), "extra_positionals", None)
        if dest is None or any(extra.startswith("-") for extra in extras):
            parser.error(f"unrecognized arguments: {' '.join(extras)}")
        setattr(args, dest, [*(getattr(args, dest) or []), *extras])

    try:
        defaults = Config.load().defaults
    except ConfigError as e:
        print_error(e, verbose=args.global_verbose)
        return 1

    verbose = args.global_verbose or defaults.verbose
    configure_logging(verbose=verbose, quiet=args.global_quiet or defaults.quiet)

    if not args.command:
        parser.print_help()
        return 0

    try:
        return args._command_class.run(args)
    except RegistryAccessError as e:
        print_error(e, verbose=verbose)
        return 1
