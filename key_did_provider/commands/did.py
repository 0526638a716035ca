"""Command printing the DID derived from the configured seed."""

from typing import Sequence

from configargparse import ArgumentParser

from ..config import argparse as arg
from ..config.provider import provider_config
from ..config.settings import Settings
from ..config.util import common_config
from . import PROG


def init_argument_parser(parser: ArgumentParser):
    """Initialize an argument parser with the module's arguments."""
    return arg.load_argument_groups(
        parser, *arg.group.get_registered(arg.CAT_PROVIDER)
    )


def execute(argv: Sequence[str] = None):
    """Entrypoint."""
    parser = arg.create_argument_parser(prog=PROG)
    parser.prog += " did"
    get_settings = init_argument_parser(parser)
    args = parser.parse_args(argv)
    settings = Settings(get_settings(args))
    common_config(settings)

    print(provider_config(settings).did)


def main():
    """Execute the main line."""
    if __name__ == "__main__":
        execute()


main()
