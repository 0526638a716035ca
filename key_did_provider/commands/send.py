"""Command answering one JSON-RPC request with the configured provider."""

import asyncio
import json
import sys
from typing import Sequence

from configargparse import ArgumentParser

from ..config import argparse as arg
from ..config.provider import provider_config
from ..config.settings import Settings
from ..config.util import common_config
from ..provider.error import PARSE_ERROR, RpcError
from ..provider.models import error_response
from . import PROG


def init_argument_parser(parser: ArgumentParser):
    """Initialize an argument parser with the module's arguments."""
    parser.add_argument(
        "request",
        nargs="?",
        default=None,
        help="JSON request envelope, read from standard input when omitted",
    )
    return arg.load_argument_groups(
        parser, *arg.group.get_registered(arg.CAT_PROVIDER)
    )


async def send(settings: Settings, raw_request: str) -> dict:
    """Parse the raw request and answer it."""
    try:
        request = json.loads(raw_request)
    except json.JSONDecodeError:
        return error_response(None, RpcError(PARSE_ERROR).serialize())
    provider = provider_config(settings)
    return await provider.send(request)


def execute(argv: Sequence[str] = None):
    """Entrypoint."""
    parser = arg.create_argument_parser(prog=PROG)
    parser.prog += " send"
    get_settings = init_argument_parser(parser)
    args = parser.parse_args(argv)
    settings = Settings(get_settings(args))
    common_config(settings)

    raw_request = args.request if args.request is not None else sys.stdin.read()
    response = asyncio.run(send(settings, raw_request))
    print(json.dumps(response))


def main():
    """Execute the main line."""
    if __name__ == "__main__":
        execute()


main()
