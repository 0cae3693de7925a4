from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional, TYPE_CHECKING
from abc import ABC, abstractmethod
import argparse

if TYPE_CHECKING:
    from ohaclient.client.main import CommandContext

class ConnectionConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    server_url: str = Field(default="", alias="server-url")
    server_port: str = Field(default="", alias="server-port")
    server_api_route: str = Field(default="", alias="server-api-route")
    client_username: str = Field(default="", alias="client-username")
    client_password: str = Field(default="", alias="client-password", repr=False)
    verify_tls: bool = Field(default=False, alias="verify-tls")

    @property
    def base_url(self) -> str:
        return f"https://{self.server_url}:{self.server_port}{self.server_api_route}"

class Credentials(BaseModel):
    username: str
    password: str = Field(repr=False)

class UploadHashes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    algorithm: str
    hash_plain: List[str] = Field(alias="hash-plain")

class SearchHashes(BaseModel):
    data: List[str]

class UserPermissions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userID")
    can_login: bool = Field(default=False, alias="canLogin")
    can_search: bool = Field(default=False, alias="canSearch")
    can_upload: bool = Field(default=False, alias="canUpload")
    can_manage: bool = Field(default=False, alias="canManage")

class ListEntry(BaseModel):
    name: str = ""
    size: float = 0
    creation_time: str = ""

class BaseCommand(ABC):

    @staticmethod
    @abstractmethod
    def get_name() -> str:
        pass

    @staticmethod
    @abstractmethod
    def get_help() -> str:
        pass

    @staticmethod
    @abstractmethod
    def get_example() -> str:
        pass

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """
        Declares this verb's positional arguments. Optional ones use nargs="?"
        and arrive in run() as None when absent.
        """
        pass

    @staticmethod
    @abstractmethod
    def run(args: argparse.Namespace, ctx: "CommandContext") -> Optional[Any]:
        """
        Executes the command against the server.
        :param args: Parsed command-line arguments.
        :param ctx: Per-invocation context (config, transport, console, token).
        """
        pass
