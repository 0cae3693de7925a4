import json
import logging
import warnings
from typing import Optional, Union

import requests
from urllib3.exceptions import InsecureRequestWarning

from ohaclient.common.errors import AuthError, ResponseError, TransportError
from ohaclient.common.schema import ConnectionConfig, Credentials

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "/login"

class OhaTransport:
    """
    Thin wrapper over requests for the OHA server API.

    Every call returns the raw response body. HTTP status codes are not
    interpreted: the server reports failures inside the JSON body and the
    caller prints them.
    """

    def __init__(self, base_url: str, verify_tls: bool = False):
        self.base_url = base_url
        self.verify_tls = verify_tls
        if not verify_tls:
            warnings.filterwarnings("ignore", category=InsecureRequestWarning)
            logger.info("TLS certificate verification is disabled for %s", base_url)

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> "OhaTransport":
        return cls(config.base_url, verify_tls=config.verify_tls)

    def url(self, route: str) -> str:
        return f"{self.base_url}{route}"

    def request(
        self,
        method: str,
        route: str,
        body: Optional[Union[str, bytes]] = None,
        token: Optional[str] = None,
    ) -> bytes:
        url = self.url(route)
        headers = {}
        if body is not None:
            headers["Content-Type"] = "application/json"
            # http.client would encode a str body as Latin-1
            if isinstance(body, str):
                body = body.encode("utf-8")
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("%s %s", method, url)
        try:
            r = requests.request(method, url, data=body, headers=headers, verify=self.verify_tls)
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e), url=url) from e

        logger.debug("%s %s -> HTTP %s (%d bytes)", method, url, r.status_code, len(r.content))
        return r.content

    def get(self, route: str, token: Optional[str] = None) -> bytes:
        return self.request("GET", route, token=token)

    def post(self, route: str, body: Union[str, bytes], token: Optional[str] = None) -> bytes:
        return self.request("POST", route, body=body, token=token)

def authenticate(transport: OhaTransport, config: ConnectionConfig) -> str:
    """
    Exchanges the configured username and password for a bearer token.
    Any server-side error is reported as a generic credentials failure.
    """
    credentials = Credentials(username=config.client_username, password=config.client_password)
    res = transport.post(LOGIN_ROUTE, credentials.model_dump_json())

    try:
        body = json.loads(res)
    except ValueError as e:
        raise ResponseError("login response was not valid JSON") from e

    if not isinstance(body, dict) or body.get("error") is not None:
        raise AuthError("username or password is incorrect")

    token = body.get("token")
    if not token:
        raise AuthError("username or password is incorrect")
    logger.debug("Authenticated as %s", config.client_username)
    return str(token)
