"""Access command: change and inspect package access on the registry."""

import argparse
from pathlib import Path

from registry_access.exceptions import ACCESS_USAGE


class AccessCommand:
    """Set access level on published packages.

    Subcommands:
        public, restricted        Change visibility of a scoped package
        grant, revoke             Add or remove team access
        2fa-required              Require two-factor auth to publish
        2fa-not-required          Drop the two-factor auth requirement
        ls-packages               List packages a user, org, or team can access
        ls-collaborators          List users with access to a package
        edit                      Not implemented

    Without an explicit package, the name in ./package.json is used.
    """

    name = "access"
    help = "Set access level on published packages"

    # Options may appear between subcommand arguments
    extra_positionals = "arguments"

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.usage = ACCESS_USAGE.replace("registry-access access", "%(prog)s")
        parser.add_argument(
            "subcommand",
            nargs="?",
            help="Access subcommand (public, restricted, grant, revoke, ...)",
        )
        parser.add_argument(
            "arguments",
            nargs="*",
            help="Subcommand arguments",
        )
        parser.add_argument(
            "--registry",
            help="Registry URL (default: from config, else https://registry.npmjs.org)",
        )
        parser.add_argument(
            "--prefix",
            type=Path,
            help="Directory containing package.json (default: current directory)",
        )

    @staticmethod
    def run(args: argparse.Namespace) -> int:
        from registry_access.access import AccessOptions, AccessRouter
        from registry_access.client import HttpRegistryClient
        from registry_access.config import Config
        from registry_access.identity import RegistryIdentity

        prefix = args.prefix if args.prefix is not None else Path.cwd()
        config = Config.load(prefix)
        registry = args.registry or config.registry.url

        client = HttpRegistryClient(
            registry,
            token=config.registry.token,
            timeout=config.registry.timeout,
        )
        router = AccessRouter(
            client,
            identity=RegistryIdentity(client, username=config.registry.username),
        )
        router.dispatch(
            [args.subcommand, *args.arguments],
            AccessOptions(registry=registry, prefix=prefix),
        )
        return 0
