import argparse

from ohaclient.client.output import print_raw
from ohaclient.common.schema import BaseCommand
from ohaclient.common.validators import validate_int, validate_query

def download_route(resource: str, num: str, query: str) -> str:
    # The "?" is sent even when the query is empty
    return f"/download/{resource}/{num}?{query}"

class DownloadResourceCommand(BaseCommand):
    """
    Shared implementation for the wordlist, rules and masks verbs, which
    differ only in the server resource they read from.
    """
    RESOURCE = ""
    DESCRIPTION = ""

    @classmethod
    def get_name(cls) -> str:
        return cls.RESOURCE

    @classmethod
    def get_help(cls) -> str:
        return f"Downloads portions of the {cls.DESCRIPTION} file from the OHA Server."

    @classmethod
    def get_example(cls) -> str:
        return f"ohaclient {cls.RESOURCE} NUM [QUERY-STRING]"

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("num", help="Number of lines to download")
        parser.add_argument("query", nargs="?", help="Query string passed through to the server")

    @classmethod
    def run(cls, args, ctx) -> bytes:
        num = validate_int(args.num)
        query = validate_query(args.query)
        token = ctx.token()

        res = ctx.transport.get(download_route(cls.RESOURCE, num, query), token=token)
        print_raw(res, ctx.console)
        return res

class WordlistCommand(DownloadResourceCommand):
    RESOURCE = "wordlist"
    DESCRIPTION = "wordlist"

class RulesCommand(DownloadResourceCommand):
    RESOURCE = "rules"
    DESCRIPTION = "rules"

class MasksCommand(DownloadResourceCommand):
    RESOURCE = "masks"
    DESCRIPTION = "masks"
