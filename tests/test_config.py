"""Tests for configuration loading and validation."""
import json

import pytest

from ohaclient.common import config as config_loader
from ohaclient.common.errors import ConfigError, NotConfiguredError
from ohaclient.common.schema import ConnectionConfig

ENV = {
    "SERVER_URL": "oha.example.com",
    "SERVER_PORT": "8443",
    "SERVER_API": "/api",
    "CLIENT_USERNAME": "alice",
    "CLIENT_PASSWORD": "correct-horse-battery",
}


def make_config(**overrides):
    values = dict(
        server_url="oha.example.com",
        server_port="8443",
        server_api_route="/api",
        client_username="alice",
        client_password="correct-horse-battery",
    )
    values.update(overrides)
    return ConnectionConfig(**values)


class TestLoadFromFile:

    def test_file_is_used(self, config_file):
        config = config_loader.load(config_file, environ={})

        assert config.server_url == "oha.example.com"
        assert config.client_username == "alice"
        assert config.base_url == "https://oha.example.com:8443/api"
        assert config.verify_tls is False

    def test_file_takes_precedence_over_env(self, config_file):
        env = dict(ENV, CLIENT_USERNAME="bob")
        config = config_loader.load(config_file, environ=env)

        assert config.client_username == "alice"

    def test_numeric_port_in_file(self, tmp_path):
        path = tmp_path / "oha.json"
        path.write_text(json.dumps({
            "server-url": "oha.example.com",
            "server-port": 8443,
            "server-api-route": "/api",
            "client-username": "alice",
            "client-password": "correct-horse-battery",
        }))

        assert config_loader.load(path, environ={}).server_port == "8443"

    def test_verify_tls_key(self, tmp_path, config_file):
        data = json.loads(config_file.read_text())
        data["verify-tls"] = True
        config_file.write_text(json.dumps(data))

        assert config_loader.load(config_file, environ={}).verify_tls is True

    def test_unparseable_file_falls_back_to_env(self, tmp_path):
        path = tmp_path / "oha.json"
        path.write_text("{not json")

        config = config_loader.load(path, environ=ENV)
        assert config.client_username == "alice"

    def test_config_path_from_env(self, config_file):
        env = {config_loader.CONFIG_PATH_ENV: str(config_file)}
        assert config_loader.config_path(None, env) == config_file

    def test_file_with_missing_keys_is_invalid(self, tmp_path):
        path = tmp_path / "oha.json"
        path.write_text(json.dumps({"client-username": "alice"}))

        with pytest.raises(ConfigError, match="invalid server URL"):
            config_loader.load(path, environ=ENV)


class TestLoadFromEnv:

    def test_all_variables_present(self, tmp_path):
        config = config_loader.load(tmp_path / "missing", environ=ENV)

        assert config.server_port == "8443"
        assert config.server_api_route == "/api"
        assert config.client_password == "correct-horse-battery"

    @pytest.mark.parametrize("name", sorted(ENV))
    def test_missing_variable_is_not_configured(self, tmp_path, name):
        env = {k: v for k, v in ENV.items() if k != name}

        with pytest.raises(NotConfiguredError):
            config_loader.load(tmp_path / "missing", environ=env)

    def test_empty_variable_counts_as_missing(self, tmp_path):
        env = dict(ENV, SERVER_PORT="")

        with pytest.raises(NotConfiguredError):
            config_loader.load(tmp_path / "missing", environ=env)

    @pytest.mark.parametrize("value,expected", [("1", True), ("true", True), ("0", False), ("", False)])
    def test_verify_tls_variable(self, tmp_path, value, expected):
        env = dict(ENV, SERVER_VERIFY_TLS=value)
        assert config_loader.load(tmp_path / "missing", environ=env).verify_tls is expected

    def test_verify_tls_flag_overrides(self, tmp_path):
        config = config_loader.load(tmp_path / "missing", environ=ENV, verify_tls=True)
        assert config.verify_tls is True


class TestValidateConfig:

    def test_valid(self):
        config = make_config()
        assert config_loader.validate_config(config) is config

    @pytest.mark.parametrize("host", ["localhost", "", "bad host.com", "-"])
    def test_invalid_host(self, host):
        with pytest.raises(ConfigError, match="invalid server URL"):
            config_loader.validate_config(make_config(server_url=host))

    def test_ip_address_host(self):
        config_loader.validate_config(make_config(server_url="10.0.0.5"))

    @pytest.mark.parametrize("port", ["", "abc", "80a"])
    def test_invalid_port(self, port):
        with pytest.raises(ConfigError):
            config_loader.validate_config(make_config(server_port=port))

    @pytest.mark.parametrize("username", ["al", "_alice", ""])
    def test_invalid_username(self, username):
        with pytest.raises(ConfigError, match="Invalid username"):
            config_loader.validate_config(make_config(client_username=username))

    @pytest.mark.parametrize("password", ["short", "Aa1!Aa1!Aa1", "elevenchars"])
    def test_short_password_rejected_regardless_of_composition(self, password):
        with pytest.raises(ConfigError, match="at least 12 characters"):
            config_loader.validate_config(make_config(client_password=password))

    @pytest.mark.parametrize("password", ["aaaaaaaaaaaa", "Aa1!Aa1!Aa1!"])
    def test_twelve_characters_accepted(self, password):
        config_loader.validate_config(make_config(client_password=password))

    def test_config_is_frozen(self):
        config = make_config()
        with pytest.raises(Exception):
            config.server_url = "other.example.com"

    def test_password_not_in_repr(self):
        assert "correct-horse-battery" not in repr(make_config())
