"""Command-line entry point for the ``java`` plugin."""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

import httpx
from rich.console import Console
from rich.markup import escape

from java_heapdump import __version__
from java_heapdump.api import PlatformClient
from java_heapdump.command import HeapDumpArgs, HeapDumpCommand
from java_heapdump.config import load_config
from java_heapdump.errors import HeapDumpError
from java_heapdump.picker import Selector, select_one

GROUP = "java"
HELP = "Java tools for Akkeris apps"
PRIMARY = True

HEAPDUMP_COMMAND = "java:heapdump"
HEAPDUMP_HELP = "Get Java heap dump from a dyno"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aka-java", description=HELP)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    heapdump = subparsers.add_parser(HEAPDUMP_COMMAND, help=HEAPDUMP_HELP, description=HEAPDUMP_HELP)
    heapdump.add_argument("dyno_pos", nargs="?", metavar="dyno", help="Dyno ID (same as --dyno)")
    heapdump.add_argument("filename_pos", nargs="?", metavar="filename", help="Filename for heap dump (same as --filename)")
    heapdump.add_argument("-a", "--app", required=True, help="App name")
    heapdump.add_argument("-d", "--dyno", help="Dyno ID, e.g. web.1; prompts for one when omitted")
    heapdump.add_argument("-o", "--filename", help="Filename for heap dump; defaults to app_dyno_timestamp.hprof")
    heapdump.add_argument("--config", help="Path to a YAML config file (env: JAVA_HEAPDUMP_CONFIG)")
    heapdump.add_argument("-v", "--verbose", action="store_true", help="Log API requests")
    heapdump.set_defaults(func=_cmd_heapdump)
    return parser


def heapdump_args(args: argparse.Namespace) -> HeapDumpArgs:
    return HeapDumpArgs(
        app=args.app,
        dyno=args.dyno or args.dyno_pos,
        filename=args.filename or args.filename_pos,
    )


async def _cmd_heapdump(args: argparse.Namespace, console: Console, selector: Selector,
                        transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
    settings = load_config(args.config)
    async with httpx.AsyncClient(transport=transport) as client:
        command = HeapDumpCommand(PlatformClient(client, settings), settings, selector=selector, console=console)
        await command.run(heapdump_args(args))


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None,
         selector: Selector = select_one, transport: Optional[httpx.AsyncBaseTransport] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    err_console = console or Console(stderr=True)
    console = console or Console()
    try:
        asyncio.run(args.func(args, console, selector, transport))
    except KeyboardInterrupt:
        return 130
    except HeapDumpError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return 1
    except httpx.HTTPStatusError as e:
        err_console.print(f"[red]Error:[/red] {e.response.status_code} {e.response.reason_phrase} from {e.request.url}", highlight=False)
        return 1
    except httpx.HTTPError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
