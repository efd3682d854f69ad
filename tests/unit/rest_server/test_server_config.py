"""Unit tests for rest_server.config module."""

import pytest
from unittest.mock import patch

from src.rest_server.config import ServerConfig, ServerConfigLoader
from src.rest_server.errors import ConfigError


@pytest.fixture(autouse=True)
def no_dotenv():
    """Keep a developer's .env file out of these tests."""
    with patch('src.rest_server.config.load_dotenv'):
        yield


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for env_name in ServerConfigLoader.ENV_OVERRIDES.values():
        monkeypatch.delenv(env_name, raising=False)


class TestServerConfigLoader:
    """Test cases for ServerConfigLoader.load."""

    def test_defaults(self):
        """Without file or environment, defaults apply."""
        assert ServerConfigLoader.load() == ServerConfig()

    def test_load_from_file(self, tmp_path):
        """Values are read from the YAML file."""
        config_file = tmp_path / "server.yaml"
        config_file.write_text(
            "host: 0.0.0.0\nport: 9090\ncontent_path: wiki.yaml\n"
            "public_url: https://wiki.example.com/rest/\nlog_level: DEBUG\n",
            encoding="utf-8",
        )

        config = ServerConfigLoader.load(str(config_file))

        assert config == ServerConfig(
            host="0.0.0.0",
            port=9090,
            content_path="wiki.yaml",
            public_url="https://wiki.example.com/rest",
            log_level="debug",
        )

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        """Environment variables take precedence over the file."""
        config_file = tmp_path / "server.yaml"
        config_file.write_text("port: 9090\n", encoding="utf-8")
        monkeypatch.setenv("WIKI_REST_PORT", "7070")
        monkeypatch.setenv("WIKI_REST_CONTENT", "/data/wiki.yaml")

        config = ServerConfigLoader.load(str(config_file))

        assert config.port == 7070
        assert config.content_path == "/data/wiki.yaml"

    def test_unknown_keys_are_ignored(self, tmp_path):
        """Unknown keys are dropped with a warning."""
        config_file = tmp_path / "server.yaml"
        config_file.write_text("port: 9090\nworkers: 4\n", encoding="utf-8")

        with patch('src.rest_server.config.logger') as mock_logger:
            config = ServerConfigLoader.load(str(config_file))

        assert config.port == 9090
        mock_logger.warning.assert_called_once()

    def test_empty_file_uses_defaults(self, tmp_path):
        """An empty file is valid."""
        config_file = tmp_path / "server.yaml"
        config_file.write_text("", encoding="utf-8")
        assert ServerConfigLoader.load(str(config_file)) == ServerConfig()

    def test_missing_file_raises(self, tmp_path):
        """A missing configuration file is an error."""
        with pytest.raises(ConfigError, match="not found"):
            ServerConfigLoader.load(str(tmp_path / "missing.yaml"))

    def test_non_dictionary_raises(self, tmp_path):
        """The file must hold a mapping."""
        config_file = tmp_path / "server.yaml"
        config_file.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="must be a YAML dictionary"):
            ServerConfigLoader.load(str(config_file))

    @pytest.mark.parametrize("port", ["0", "65536", "http"])
    def test_invalid_port_raises(self, port, monkeypatch):
        """Ports must be integers between 1 and 65535."""
        monkeypatch.setenv("WIKI_REST_PORT", port)
        with pytest.raises(ConfigError) as exc_info:
            ServerConfigLoader.load()
        assert exc_info.value.config_field == "port"

    def test_invalid_public_url_raises(self, monkeypatch):
        """Public URLs must be http(s)."""
        monkeypatch.setenv("WIKI_REST_PUBLIC_URL", "ftp://wiki")
        with pytest.raises(ConfigError) as exc_info:
            ServerConfigLoader.load()
        assert exc_info.value.config_field == "public_url"

    def test_invalid_log_level_raises(self, monkeypatch):
        """Log levels must be known to uvicorn."""
        monkeypatch.setenv("WIKI_REST_LOG_LEVEL", "verbose")
        with pytest.raises(ConfigError, match="Unknown log level"):
            ServerConfigLoader.load()
