"""Server configuration loading and validation.

Configuration comes from an optional YAML file, overridden by environment
variables (a .env file in the working directory is honoured via
python-dotenv).

Configuration file structure:
    host: "127.0.0.1"
    port: 8080
    content_path: ./wiki.yaml     # omit to serve the bundled default wiki
    public_url: ""                # base URL used in links, "" = request URL
    log_level: info

Environment variables:
    WIKI_REST_HOST, WIKI_REST_PORT, WIKI_REST_CONTENT,
    WIKI_REST_PUBLIC_URL, WIKI_REST_LOG_LEVEL
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    """Settings of the API server.

    Attributes:
        host: Interface to bind to
        port: TCP port to listen on
        content_path: YAML seed content to serve (None for the bundled wiki)
        public_url: Base URL used when building links ("" derives it from
            each request)
        log_level: Level name passed to uvicorn
    """
    host: str = "127.0.0.1"
    port: int = 8080
    content_path: Optional[str] = None
    public_url: str = ""
    log_level: str = "info"


class ServerConfigLoader:
    """Loads ServerConfig from YAML and the environment."""

    ENV_OVERRIDES = {
        'host': 'WIKI_REST_HOST',
        'port': 'WIKI_REST_PORT',
        'content_path': 'WIKI_REST_CONTENT',
        'public_url': 'WIKI_REST_PUBLIC_URL',
        'log_level': 'WIKI_REST_LOG_LEVEL',
    }

    LOG_LEVELS = {'critical', 'error', 'warning', 'info', 'debug', 'trace'}

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> ServerConfig:
        """Load configuration.

        Args:
            config_path: Optional path to a YAML configuration file

        Returns:
            Validated ServerConfig

        Raises:
            ConfigError: If the file is unreadable or a value is invalid
        """
        load_dotenv()

        values: Dict[str, Any] = {}
        if config_path:
            values.update(cls._read_file(config_path))

        for field_name, env_name in cls.ENV_OVERRIDES.items():
            env_value = os.getenv(env_name)
            if env_value:
                values[field_name] = env_value

        return cls._parse_config(values)

    @classmethod
    def _read_file(cls, config_path: str) -> Dict[str, Any]:
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigError(f"Configuration file not found at {config_path}")
        except OSError as e:
            raise ConfigError(f"Cannot read {config_path}: {e}")

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return {}
        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        unknown = set(config_dict) - set(cls.ENV_OVERRIDES)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(sorted(unknown))}")
        return {key: value for key, value in config_dict.items() if key in cls.ENV_OVERRIDES}

    @classmethod
    def _parse_config(cls, values: Dict[str, Any]) -> ServerConfig:
        defaults = ServerConfig()

        host = str(values.get('host', defaults.host)).strip()
        if not host:
            raise ConfigError("Host cannot be empty", 'host')

        try:
            port = int(values.get('port', defaults.port))
        except (TypeError, ValueError):
            raise ConfigError(f"Port must be an integer, got {values.get('port')!r}", 'port')
        if not 0 < port < 65536:
            raise ConfigError(f"Port must be between 1 and 65535, got {port}", 'port')

        content_path = values.get('content_path', defaults.content_path)
        if content_path is not None:
            content_path = str(content_path).strip() or None

        public_url = str(values.get('public_url', defaults.public_url) or '').strip()
        if public_url and not public_url.startswith(('http://', 'https://')):
            raise ConfigError(
                f"Public URL must start with http:// or https://, got {public_url!r}",
                'public_url'
            )

        log_level = str(values.get('log_level', defaults.log_level)).lower()
        if log_level not in cls.LOG_LEVELS:
            raise ConfigError(f"Unknown log level {log_level!r}", 'log_level')

        return ServerConfig(
            host=host,
            port=port,
            content_path=content_path,
            public_url=public_url.rstrip('/'),
            log_level=log_level,
        )
