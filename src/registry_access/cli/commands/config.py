"""Config command: view and manage registry-access configuration."""

import argparse


class ConfigCommand:
    """View and manage registry-access configuration."""

    name = "config"
    help = "View and manage configuration"

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        action_group = parser.add_mutually_exclusive_group()
        action_group.add_argument(
            "--show",
            action="store_true",
            help="Show effective configuration with sources",
        )
        action_group.add_argument(
            "--init",
            action="store_true",
            help="Create template config file",
        )
        action_group.add_argument(
            "--paths",
            action="store_true",
            help="Show config file paths",
        )
        parser.add_argument(
            "--user",
            action="store_true",
            help="Use user config for --init",
        )
        parser.add_argument(
            "action",
            nargs="?",
            choices=["get", "set"],
            help="Config action (get/set)",
        )
        parser.add_argument(
            "key",
            nargs="?",
            help="Config key (e.g., registry.url)",
        )
        parser.add_argument(
            "value",
            nargs="?",
            help="Value to set",
        )

    @staticmethod
    def run(args: argparse.Namespace) -> int:
        from registry_access.cli.config_cmd import run_config

        return run_config(
            show=args.show,
            init=args.init,
            paths=args.paths,
            user=args.user,
            action=args.action,
            key=args.key,
            value=args.value,
        )
