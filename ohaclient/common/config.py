import logging
import os
import re
from pathlib import Path
from typing import Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ohaclient.common.errors import ConfigError, NotConfiguredError
from ohaclient.common.schema import ConnectionConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".oha"
CONFIG_PATH_ENV = "OHA_CONFIG"

# Environment variable -> ConnectionConfig field
ENV_VARS = {
    "SERVER_URL": "server_url",
    "SERVER_PORT": "server_port",
    "SERVER_API": "server_api_route",
    "CLIENT_USERNAME": "client_username",
    "CLIENT_PASSWORD": "client_password",
}
VERIFY_TLS_ENV = "SERVER_VERIFY_TLS"

URL_PATTERN = re.compile(r"^https?://[a-zA-Z0-9-]+\.[a-zA-Z0-9-]+")
PORT_PATTERN = re.compile(r"[0-9]+")
USERNAME_START_PATTERN = re.compile(r"^[a-zA-Z0-9]")
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 12

NOT_CONFIGURED_MESSAGE = (
    "[!] Unauthenticated. Please fill out Env vars or place a configuration file at ~/.oha"
)

def config_path(override: Optional[Union[str, Path]] = None, environ: Optional[Mapping[str, str]] = None) -> Path:
    environ = os.environ if environ is None else environ
    if override:
        return Path(override).expanduser()
    if environ.get(CONFIG_PATH_ENV):
        return Path(environ[CONFIG_PATH_ENV]).expanduser()
    return DEFAULT_CONFIG_PATH

def load_config_file(path: Path) -> ConnectionConfig:
    """
    Parses the JSON config file. Raises ConfigError when the file is missing,
    unreadable or not a valid configuration object.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Error reading file: {path}") from e
    try:
        return ConnectionConfig.model_validate_json(content)
    except PydanticValidationError as e:
        raise ConfigError(f"Error parsing file: {path}") from e

def _truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")

def load_config_env(environ: Optional[Mapping[str, str]] = None) -> ConnectionConfig:
    environ = os.environ if environ is None else environ
    missing = [name for name in ENV_VARS if not environ.get(name)]
    if missing:
        logger.debug("Missing environment variables: %s", ", ".join(missing))
        raise NotConfiguredError(NOT_CONFIGURED_MESSAGE)

    values = {field: environ[name] for name, field in ENV_VARS.items()}
    values["verify_tls"] = _truthy(environ.get(VERIFY_TLS_ENV))
    return ConnectionConfig(**values)

def validate_config(config: ConnectionConfig) -> ConnectionConfig:
    if not URL_PATTERN.match(config.base_url):
        raise ConfigError("invalid server URL")
    if PORT_PATTERN.fullmatch(config.server_port) is None:
        raise ConfigError("invalid server port")
    if len(config.client_username) < MIN_USERNAME_LENGTH or not USERNAME_START_PATTERN.match(config.client_username):
        raise ConfigError(
            f"Invalid username. Expected at least {MIN_USERNAME_LENGTH} characters starting with "
            f"an alphanumeric character. Got: {config.client_username}"
        )
    if len(config.client_password) < MIN_PASSWORD_LENGTH:
        raise ConfigError(f"passwords must be at least {MIN_PASSWORD_LENGTH} characters long")
    return config

def load(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    verify_tls: bool = False,
) -> ConnectionConfig:
    """
    Resolves the connection configuration for this invocation.

    The config file wins when it can be read; otherwise all five environment
    variables must be set. The result is validated before it is returned.

    :param path: Explicit config file path (defaults to $OHA_CONFIG or ~/.oha).
    :param environ: Environment mapping, os.environ when omitted.
    :param verify_tls: Forces certificate verification on regardless of source.
    """
    environ = os.environ if environ is None else environ
    file_path = config_path(path, environ)
    try:
        config = load_config_file(file_path)
        logger.debug("Loaded configuration from %s", file_path)
    except ConfigError as e:
        logger.debug("%s; falling back to environment", e)
        config = load_config_env(environ)
        logger.debug("Loaded configuration from environment")

    if verify_tls and not config.verify_tls:
        config = config.model_copy(update={"verify_tls": True})
    return validate_config(config)
