import argparse
from typing import Callable, Optional

from ohaclient.client.output import print_raw
from ohaclient.common.schema import BaseCommand, Credentials, UserPermissions
from ohaclient.common.validators import validate_int

# Prompt label -> UserPermissions field, in prompt order
PERMISSION_PROMPTS = (
    ("CanLogin", "can_login"),
    ("CanUpload", "can_upload"),
    ("CanSearch", "can_search"),
    ("CanManage", "can_manage"),
)

class RegisterCommand(BaseCommand):

    @staticmethod
    def get_name() -> str:
        return "register"

    @staticmethod
    def get_help() -> str:
        return "Attempts user registration on the OHA Server."

    @staticmethod
    def get_example() -> str:
        return "ohaclient register"

    @staticmethod
    def run(args, ctx) -> bytes:
        credentials = Credentials(username=ctx.config.client_username, password=ctx.config.client_password)
        res = ctx.transport.post("/register", credentials.model_dump_json())
        print_raw(res, ctx.console)
        return res

def prompt_permissions(user_id: int, ask: Callable[[str], str], say: Optional[Callable[[str], None]] = None) -> UserPermissions:
    """
    Asks a y/n question for each of the four capability flags.
    Anything other than "y" or "yes" leaves the flag False.
    """
    say = say or print
    granted = {}
    for label, field in PERMISSION_PROMPTS:
        try:
            answer = ask(f"Change permission for {label} to true? (y/n): ")
        except EOFError:
            answer = ""
        answer = (answer or "").strip().lower()
        granted[field] = answer in ("y", "yes")
        if granted[field]:
            say(f"Permission for {label} changed.")
        else:
            say(f"Permission for {label} not changed.")
    return UserPermissions(user_id=user_id, **granted)

class ManageCommand(BaseCommand):

    @staticmethod
    def get_name() -> str:
        return "manage"

    @staticmethod
    def get_help() -> str:
        return "Changes user permissions for target user."

    @staticmethod
    def get_example() -> str:
        return "ohaclient manage UID"

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("uid", help="ID of the user to change")

    @staticmethod
    def run(args, ctx) -> bytes:
        uid = int(validate_int(args.uid))
        token = ctx.token()

        permissions = prompt_permissions(uid, ctx.ask, ctx.say)
        res = ctx.transport.post("/manage", permissions.model_dump_json(by_alias=True), token=token)
        print_raw(res, ctx.console)
        return res
