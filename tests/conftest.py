"""Pytest fixtures for ohaclient tests."""
import io
import json
from typing import Any, Dict, List, Optional, Union
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from ohaclient.client.api import OhaTransport
from ohaclient.client.main import CommandContext
from ohaclient.common.schema import ConnectionConfig

TOKEN = "test-jwt-token"


@pytest.fixture
def config():
    """Returns a valid connection config."""
    return ConnectionConfig(
        server_url="oha.example.com",
        server_port="8443",
        server_api_route="/api",
        client_username="alice",
        client_password="correct-horse-battery",
    )


@pytest.fixture
def config_file(tmp_path):
    """Writes a valid ~/.oha style file and returns its path."""
    path = tmp_path / "oha.json"
    path.write_text(json.dumps({
        "server-url": "oha.example.com",
        "server-port": "8443",
        "server-api-route": "/api",
        "client-username": "alice",
        "client-password": "correct-horse-battery",
    }))
    return path


def make_response(body: Union[bytes, str, Dict[str, Any], List[Any]], status_code: int = 200) -> MagicMock:
    """Builds a stand-in for requests.Response."""
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    response = MagicMock()
    response.status_code = status_code
    response.content = body
    return response


class FakeServer:
    """
    Answers requests.request calls by route. /login always succeeds unless
    overridden; every other route returns what was registered for it.
    """

    def __init__(self, base_url: str):
        self.base_url = base_url
        self.routes: Dict[str, Any] = {"/login": {"token": TOKEN}}
        self.calls: List[Dict[str, Any]] = []

    def on(self, route: str, body: Any, status_code: int = 200) -> "FakeServer":
        self.routes[route] = (body, status_code)
        return self

    def __call__(self, method, url, data=None, headers=None, verify=None, **kwargs):
        route = url[len(self.base_url):]
        self.calls.append({"method": method, "route": route, "data": data, "headers": headers or {}, "verify": verify})
        entry = self.routes.get(route, ({"error": "not found"}, 404))
        if not isinstance(entry, tuple):
            entry = (entry, 200)
        return make_response(*entry)

    def call(self, route: str) -> Optional[Dict[str, Any]]:
        for c in self.calls:
            if c["route"] == route:
                return c
        return None

    def json_body(self, route: str) -> Any:
        return json.loads(self.call(route)["data"])


@pytest.fixture
def server(config):
    """Patches requests.request with a FakeServer for the configured base URL."""
    fake = FakeServer(config.base_url)
    with patch("ohaclient.client.api.requests.request", side_effect=fake):
        yield fake


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def ctx(config, server, output):
    """Command context writing to an in-memory console."""
    out = Console(file=output, highlight=False, soft_wrap=True, emoji=False, color_system=None)
    return CommandContext(config, transport=OhaTransport.from_config(config), out=out)
