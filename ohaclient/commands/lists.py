import argparse
import json
from typing import List
from urllib.parse import quote

from pydantic import ValidationError as PydanticValidationError

from ohaclient.client.output import color, print_raw
from ohaclient.common.errors import ResponseError
from ohaclient.common.schema import BaseCommand, ListEntry
from ohaclient.common.validators import read_bytes, validate_file, validate_list_name

def list_route(name: str) -> str:
    return f"/lists/{quote(name, safe='')}"

def create_route(name: str) -> str:
    return f"/lists?name={quote(name, safe='')}"

def format_entry(entry: ListEntry) -> str:
    return f"Name: {entry.name} | Size: {entry.size:.0f} | Created: {entry.creation_time}"

def parse_listing(res: bytes) -> List[ListEntry]:
    try:
        body = json.loads(res)
        files = body["files"] if isinstance(body, dict) else None
        if not isinstance(files, list):
            raise ResponseError(f"unexpected list response: {res.decode('utf-8', errors='replace')}")
        return [ListEntry.model_validate(item) for item in files]
    except (ValueError, PydanticValidationError) as e:
        raise ResponseError(f"unexpected list response: {e}") from e

class ListsCommand(BaseCommand):
    """
    Without a name, prints a table of the user's private lists.
    With a name, prints that list's content exactly as the server returns it.
    """

    @staticmethod
    def get_name() -> str:
        return "lists"

    @staticmethod
    def get_help() -> str:
        return "View or downloads the available lists on the OHA Server."

    @staticmethod
    def get_example() -> str:
        return "ohaclient lists or ohaclient lists LISTNAME"

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("listname", nargs="?", help="Name of the list to download")

    @staticmethod
    def run(args, ctx):
        if args.listname is None:
            res = ctx.transport.get("/lists", token=ctx.token())
            entries = parse_listing(res)
            ctx.console.print(color("Private Files Listing:", "yellow"))
            for entry in entries:
                ctx.console.print(color(format_entry(entry), "green"))
            return entries

        name = validate_list_name(args.listname)
        res = ctx.transport.get(list_route(name), token=ctx.token())
        print_raw(res, ctx.console)
        return res

class CreateListCommand(BaseCommand):

    @staticmethod
    def get_name() -> str:
        return "create"

    @staticmethod
    def get_help() -> str:
        return "Create a new private list on the OHA Server."

    @staticmethod
    def get_example() -> str:
        return "ohaclient create LISTNAME FILE"

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("listname", help="Name for the new list")
        parser.add_argument("file", help="File whose content becomes the list")

    @staticmethod
    def run(args, ctx) -> bytes:
        name = validate_list_name(args.listname)
        path = validate_file(args.file)
        token = ctx.token()

        res = ctx.transport.post(create_route(name), read_bytes(path), token=token)
        print_raw(res, ctx.console)
        return res

class UpdateListCommand(BaseCommand):

    @staticmethod
    def get_name() -> str:
        return "update"

    @staticmethod
    def get_help() -> str:
        return "Updates the target list on the OHA Server."

    @staticmethod
    def get_example() -> str:
        return "ohaclient update LISTNAME FILE"

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("listname", help="Name of the list to replace")
        parser.add_argument("file", help="File whose content replaces the list")

    @staticmethod
    def run(args, ctx) -> bytes:
        name = validate_list_name(args.listname)
        path = validate_file(args.file)
        token = ctx.token()

        res = ctx.transport.post(list_route(name), read_bytes(path), token=token)
        print_raw(res, ctx.console)
        return res
