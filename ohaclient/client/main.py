import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional, Type

from dotenv import find_dotenv, load_dotenv
from rich.console import Console

from ohaclient.client.api import OhaTransport, authenticate
from ohaclient.client.output import color, console, print_error, print_usage, setup_logging
from ohaclient.common import config as config_loader
from ohaclient.common.errors import NotConfiguredError, OhaError, ValidationError
from ohaclient.common.schema import BaseCommand, ConnectionConfig

# Commands
from ohaclient.commands.account import ManageCommand, RegisterCommand
from ohaclient.commands.hashes import SearchCommand, SubmitCommand
from ohaclient.commands.lists import CreateListCommand, ListsCommand, UpdateListCommand
from ohaclient.commands.resources import MasksCommand, RulesCommand, WordlistCommand
from ohaclient.commands.server import HealthCommand, StatusCommand

logger = logging.getLogger(__name__)

COMMAND_REGISTRY: Dict[str, Type[BaseCommand]] = {}

# Cannot appear in a command-line argument
VERB_PREFIX_CHARS = "\0"

def register_commands():
    commands = [
        RegisterCommand, ManageCommand, SearchCommand, SubmitCommand,
        HealthCommand, StatusCommand, WordlistCommand, RulesCommand,
        MasksCommand, ListsCommand, CreateListCommand, UpdateListCommand,
    ]
    for c in commands:
        COMMAND_REGISTRY[c.get_name()] = c
        logger.debug("Registered '%s' -> %s", c.get_name(), c.__name__)

class UsageRequested(Exception):
    pass

class CommandParser(argparse.ArgumentParser):
    """Turns argparse failures into a request to show the usage screen."""

    def error(self, message):
        raise UsageRequested(message)

class CommandContext:
    """
    Everything a command needs for one invocation. The bearer token is
    requested on first use and reused for the rest of the invocation.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        transport: Optional[OhaTransport] = None,
        out: Optional[Console] = None,
        ask: Optional[Callable[[str], str]] = None,
    ):
        self.config = config
        self.transport = transport or OhaTransport.from_config(config)
        self.console = out or console
        self.ask = ask or self.console.input
        self._token: Optional[str] = None

    def say(self, message: str) -> None:
        self.console.print(message, markup=False)

    def token(self) -> str:
        if self._token is None:
            self._token = authenticate(self.transport, self.config)
        return self._token

def split_global_args(argv: List[str]):
    """Splits argv into the global flags before the verb and everything after."""
    i = 0
    while i < len(argv) and argv[i].startswith("-"):
        if argv[i] == "--config":
            i += 1
        i += 1
    return argv[:i], argv[i:]

def build_global_parser() -> argparse.ArgumentParser:
    parser = CommandParser(add_help=False)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--verify-tls", action="store_true", help="Verify the server's TLS certificate")
    parser.add_argument("--config", default=None, help="Path to the JSON config file (default: ~/.oha)")
    return parser

def build_parser() -> CommandParser:
    parser = CommandParser(
        prog="ohaclient",
        description="Client for the OHA hash coordination server",
        parents=[build_global_parser()],
        add_help=False,
    )
    subparsers = parser.add_subparsers(dest="command", parser_class=CommandParser)
    for name, command in COMMAND_REGISTRY.items():
        # Verb arguments may start with "-"; only the validators judge them
        sub = subparsers.add_parser(name, help=command.get_help(), add_help=False, prefix_chars=VERB_PREFIX_CHARS)
        command.add_arguments(sub)
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    load_dotenv(find_dotenv(usecwd=True))
    if not COMMAND_REGISTRY:
        register_commands()

    global_argv, _ = split_global_args(argv)
    try:
        opts = build_global_parser().parse_args(global_argv)
    except UsageRequested as e:
        setup_logging()
        logger.debug("Usage: %s", e)
        print_usage(None, COMMAND_REGISTRY.values())
        return 0
    setup_logging(opts.verbose)

    try:
        config = config_loader.load(opts.config, verify_tls=opts.verify_tls)
    except NotConfiguredError as e:
        console.print(color(str(e), "red"))
        return e.exit_code
    except OhaError as e:
        print_error(str(e))
        return e.exit_code

    try:
        args = build_parser().parse_args(argv)
    except UsageRequested as e:
        logger.debug("Usage: %s", e)
        print_usage(config, COMMAND_REGISTRY.values())
        return 0

    if args.command is None:
        print_usage(config, COMMAND_REGISTRY.values())
        return 0

    command = COMMAND_REGISTRY[args.command]
    try:
        command.run(args, CommandContext(config))
    except ValidationError as e:
        print_error(str(e))
        print_usage(config, COMMAND_REGISTRY.values())
        return e.exit_code
    except OhaError as e:
        print_error(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        console.print("Interrupted.")
        return 130
    return 0

if __name__ == "__main__":
    sys.exit(main())
