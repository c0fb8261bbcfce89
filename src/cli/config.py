"""Settings and URL mapping loading.

Settings come from the environment (optionally a .env file) and the URL
mapping for --update-urls comes from a small YAML document.
"""

import os
from typing import Any, List

import yaml
from dotenv import load_dotenv

from .errors import ConfigError
from .models import Settings, UrlMapping

ENDPOINT_VARIABLE = 'DEVPORTAL_ENDPOINT'
MAX_WORKERS_VARIABLE = 'DEVPORTAL_MAX_WORKERS'


class SettingsLoader:
    """Loads Settings from environment variables.

    Variables:
        DEVPORTAL_ENDPOINT: ARM host name (default management.azure.com)
        DEVPORTAL_MAX_WORKERS: Positive integer (default 16)
    """

    @classmethod
    def load(cls) -> Settings:
        """Load settings, reading .env first if present.

        Raises:
            ConfigError: If a variable has an invalid value
        """
        load_dotenv()
        defaults = Settings()

        endpoint = os.getenv(ENDPOINT_VARIABLE, '').strip() or defaults.endpoint
        if '/' in endpoint or ' ' in endpoint:
            raise ConfigError(
                f"Expected a host name, got '{endpoint}'",
                ENDPOINT_VARIABLE
            )

        raw_workers = os.getenv(MAX_WORKERS_VARIABLE, '').strip()
        max_workers = defaults.max_workers
        if raw_workers:
            try:
                max_workers = int(raw_workers)
            except ValueError:
                raise ConfigError(
                    f"Expected an integer, got '{raw_workers}'",
                    MAX_WORKERS_VARIABLE
                )
            if max_workers < 1:
                raise ConfigError(
                    f"Must be at least 1, got {max_workers}",
                    MAX_WORKERS_VARIABLE
                )

        return Settings(endpoint=endpoint, max_workers=max_workers)


class UrlMappingLoader:
    """Loads and validates URL mapping YAML files.

    File structure:
        existing: [<url>, ...]
        replacement: [<url>, ...]

    Both lists must have the same length; replacement[i] replaces existing[i].
    """

    @classmethod
    def load(cls, mapping_path: str) -> UrlMapping:
        """Load a URL mapping file.

        Raises:
            ConfigError: If the file is missing, unreadable, malformed or
                         its lists differ in length
        """
        try:
            with open(mapping_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigError(f"URL mapping file not found: {mapping_path}")
        except OSError as e:
            raise ConfigError(f"Cannot read URL mapping file {mapping_path}: {e}")

        try:
            mapping = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in {mapping_path}: {e}")

        if not isinstance(mapping, dict):
            raise ConfigError(
                f"URL mapping must be a YAML dictionary, got {type(mapping).__name__}"
            )

        existing = cls._url_list(mapping, 'existing')
        replacement = cls._url_list(mapping, 'replacement')
        if len(existing) != len(replacement):
            raise ConfigError(
                f"Expected {len(existing)} entries to match 'existing', got {len(replacement)}",
                'replacement',
            )
        return UrlMapping(existing=existing, replacement=replacement)

    @staticmethod
    def _url_list(mapping: dict, key: str) -> List[str]:
        value: Any = mapping.get(key)
        if value is None:
            raise ConfigError("Missing required field", key)
        if not isinstance(value, list):
            raise ConfigError(f"Must be a list, got {type(value).__name__}", key)
        for url in value:
            if not isinstance(url, str) or not url.strip():
                raise ConfigError(f"Entries must be non-empty strings, got {url!r}", key)
        return [url.strip() for url in value]
