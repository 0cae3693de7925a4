import json
from typing import Any

from ohaclient.client.output import print_raw
from ohaclient.common.errors import ResponseError
from ohaclient.common.schema import BaseCommand

def pretty_json(res: bytes) -> str:
    try:
        obj: Any = json.loads(res)
    except ValueError as e:
        raise ResponseError(f"health response was not valid JSON: {e}") from e
    return json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False)

class HealthCommand(BaseCommand):

    @staticmethod
    def get_name() -> str:
        return "health"

    @staticmethod
    def get_help() -> str:
        return "Requests the OHA Server settings then prints them."

    @staticmethod
    def get_example() -> str:
        return "ohaclient health"

    @staticmethod
    def run(args, ctx) -> str:
        res = ctx.transport.get("/health", token=ctx.token())
        pretty = pretty_json(res)
        ctx.console.print(pretty, markup=False)
        return pretty

class StatusCommand(BaseCommand):

    @staticmethod
    def get_name() -> str:
        return "status"

    @staticmethod
    def get_help() -> str:
        return "Check the status of downloadable files on the OHA Server."

    @staticmethod
    def get_example() -> str:
        return "ohaclient status"

    @staticmethod
    def run(args, ctx) -> bytes:
        res = ctx.transport.get("/status", token=ctx.token())
        print_raw(res, ctx.console)
        return res
