import logging
from typing import Iterable, Optional, Type

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ohaclient.common.schema import BaseCommand, ConnectionConfig

console = Console(highlight=False, soft_wrap=True, emoji=False)
error_console = Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)

def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.ERROR)
    logging.getLogger("urllib3.connectionpool").setLevel(logging.ERROR)

def color(text: str, style: str) -> str:
    return f"[{style}]{escape(text)}[/{style}]"

def print_raw(body: bytes, out: Optional[Console] = None) -> None:
    """
    Prints a server body followed by a newline. When the console writes to a
    real stream the bytes go out untouched; otherwise they are decoded.
    """
    out = out or console
    stream = getattr(out.file, "buffer", None)
    if stream is None:
        out.print(body.decode("utf-8", errors="replace"), markup=False, highlight=False)
        return
    out.file.flush()
    stream.write(body + b"\n")
    stream.flush()

def print_error(message: str, out: Optional[Console] = None) -> None:
    out = out or console
    out.print(color(f"error: {message}", "red"))

def print_usage(config: Optional[ConnectionConfig], commands: Iterable[Type[BaseCommand]], out: Optional[Console] = None) -> None:
    out = out or console
    commands = list(commands)

    out.print(color("[+] OHA Client Configuration Settings:", "yellow"))
    if config is not None:
        host = f"{config.server_url}:{config.server_port}"
        out.print(color(f"OHA User: {config.client_username}", "green"))
        out.print(color(f"OHA Server URL: {host}", "green"))
        out.print(color(f"OHA Server API URL: {host}{config.server_api_route}", "green"))

    out.print(color("[+] Available Commands:", "yellow"))
    for command in commands:
        out.print(color(f"{command.get_name()}:", "cyan"), escape(command.get_help()))

    out.print(color("[+] Example Commands:", "yellow"))
    for command in commands:
        out.print(color(f"{command.get_name()}:", "cyan"), escape(command.get_example()))
