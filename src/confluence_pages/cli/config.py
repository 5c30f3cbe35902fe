"""YAML configuration loading for the confluence-pages CLI.

Configuration file structure:
    server_url: "https://your-domain.atlassian.net"
    username: "user@example.com"
    api_token: "..."            # prefer CONFLUENCE_API_TOKEN in .env
    storage_dir: "./confluence-pages"
    list:
      space_ids: [123456]
      status: [current]
      limit: 50
      fetch_mode: LIST
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from ..confluence_client.errors import ConfigurationError

DEFAULT_STORAGE_DIR = './confluence-pages'


@dataclass
class TaskConfig:
    """Values loaded from a configuration file.

    Attributes:
        server_url: Confluence site URL
        username: Account email
        api_token: API token
        storage_dir: Directory used by STREAM_TO_STORAGE
        list_defaults: Default filters for the list command
    """
    server_url: Optional[str] = None
    username: Optional[str] = None
    api_token: Optional[str] = None
    storage_dir: str = DEFAULT_STORAGE_DIR
    list_defaults: Dict[str, Any] = field(default_factory=dict)


class ConfigLoader:
    """Loads and validates TaskConfig from YAML files."""

    TOP_LEVEL_FIELDS = {'server_url', 'username', 'api_token', 'storage_dir', 'list'}

    LIST_FIELDS = {
        'space_ids', 'page_ids', 'title', 'subtype', 'sort',
        'cursor', 'status', 'limit', 'fetch_mode',
    }

    @classmethod
    def load(cls, config_path: str) -> TaskConfig:
        """Load configuration from a YAML file.

        Raises:
            ConfigurationError: If the file is unreadable or invalid
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found at {config_path}")
        except OSError as e:
            raise ConfigurationError(f"Cannot read {config_path}: {e}")

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return TaskConfig()

        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> TaskConfig:
        unknown = set(config_dict) - cls.TOP_LEVEL_FIELDS
        if unknown:
            raise ConfigurationError(f"Unknown fields: {', '.join(sorted(unknown))}")

        for key in ('server_url', 'username', 'api_token', 'storage_dir'):
            value = config_dict.get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(
                    f"must be a string, got {type(value).__name__}", key
                )

        list_defaults = config_dict.get('list') or {}
        if not isinstance(list_defaults, dict):
            raise ConfigurationError(
                f"must be a dictionary, got {type(list_defaults).__name__}", 'list'
            )
        unknown = set(list_defaults) - cls.LIST_FIELDS
        if unknown:
            raise ConfigurationError(
                f"Unknown fields: {', '.join(sorted(unknown))}", 'list'
            )
        for key in ('space_ids', 'page_ids', 'status'):
            value = list_defaults.get(key)
            if value is not None and not isinstance(value, list):
                raise ConfigurationError(
                    f"must be a list, got {type(value).__name__}", f"list.{key}"
                )

        return TaskConfig(
            server_url=config_dict.get('server_url'),
            username=config_dict.get('username'),
            api_token=config_dict.get('api_token'),
            storage_dir=config_dict.get('storage_dir') or DEFAULT_STORAGE_DIR,
            list_defaults=dict(list_defaults),
        )
