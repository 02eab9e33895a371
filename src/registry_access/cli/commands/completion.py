"""Completion command: candidates for a partial access command line."""

import argparse


class CompletionCommand:
    """Print shell completion candidates, one per line.

    Pass every word typed so far, starting with the program and command
    words, e.g. ``registry-access completion npm access grant``.
    """

    name = "completion"
    help = "Print completion candidates for access subcommands"

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "words",
            nargs="*",
            help="Words typed so far, including program and command words",
        )

    @staticmethod
    def run(args: argparse.Namespace) -> int:
        from registry_access.access import complete

        for candidate in complete(args.words):
            print(candidate)
        return 0
