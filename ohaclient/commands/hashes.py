import argparse
import json
from typing import Any, List

from ohaclient.client.output import print_raw
from ohaclient.common.schema import BaseCommand, SearchHashes, UploadHashes
from ohaclient.common.validators import read_lines, validate_file, validate_int

# Sent by the server instead of an empty array when nothing matched
EMPTY_FOUND = "[]"

def format_found(found: List[Any]) -> List[str]:
    lines = []
    for entry in found:
        if not isinstance(entry, dict):
            continue
        lines.append(f"{entry.get('algorithm')} | {entry.get('hash')}:{entry.get('plaintext')}")
    return lines

class SearchCommand(BaseCommand):
    """
    Looks up every hash in a file and prints the ones the server
    has a plaintext for.
    """

    @staticmethod
    def get_name() -> str:
        return "search"

    @staticmethod
    def get_help() -> str:
        return "Searches the OHA Server for any matching HASH values in a file."

    @staticmethod
    def get_example() -> str:
        return "ohaclient search FILE"

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("file", help="File with one hash per line")

    @staticmethod
    def run(args, ctx) -> List[str]:
        path = validate_file(args.file)
        token = ctx.token()

        payload = SearchHashes(data=read_lines(path))
        res = ctx.transport.post("/search", payload.model_dump_json(), token=token)

        try:
            body = json.loads(res)
        except ValueError:
            print_raw(res, ctx.console)
            return []

        found = body.get("found") if isinstance(body, dict) else None
        if isinstance(found, list):
            lines = format_found(found)
            for line in lines:
                ctx.console.print(line, markup=False)
            return lines

        # No matches: only surface the body when the server reported a problem
        if found != EMPTY_FOUND and isinstance(body, dict) and "error" in body:
            print_raw(res, ctx.console)
        return []

class SubmitCommand(BaseCommand):

    @staticmethod
    def get_name() -> str:
        return "submit"

    @staticmethod
    def get_help() -> str:
        return "Submit a file containing HASH:PLAIN values to the OHA Server."

    @staticmethod
    def get_example() -> str:
        return "ohaclient submit ALGO FILE"

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("algo", help="Numeric hash algorithm identifier")
        parser.add_argument("file", help="File with one HASH:PLAIN per line")

    @staticmethod
    def run(args, ctx) -> bytes:
        algorithm = validate_int(args.algo)
        path = validate_file(args.file)
        token = ctx.token()

        payload = UploadHashes(algorithm=algorithm, hash_plain=read_lines(path))
        res = ctx.transport.post("/found", payload.model_dump_json(by_alias=True), token=token)
        print_raw(res, ctx.console)
        return res
