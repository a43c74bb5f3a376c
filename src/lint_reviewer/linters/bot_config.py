"""
Bot Configuration

Reads the ``.hound.yml`` style document that switches linters on and off
and points each linter at its configuration file.
"""

import logging
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ValidationError, validator

from .errors import ConfigParseError


logger = logging.getLogger(__name__)

DEFAULT_POINTER_FILE = ".hound.yml"


def normalize_key(name: str) -> str:
    """'coffee_script', 'CoffeeScript' and 'coffee-script' all name one linter."""
    return name.lower().replace('_', '').replace('-', '')


class LinterOptions(BaseModel):
    """Options of one linter section"""
    enabled: Optional[bool] = None
    config_file: Optional[str] = None

    class Config:
        extra = 'allow'

    @validator('config_file')
    def validate_config_file(cls, v):
        if v is None:
            return v
        v = v.strip()
        return v or None


class BotConfig:
    """
    Per-linter switches and config file pointers.

    A linter without a section, or without an ``enabled`` key, is enabled.
    """

    def __init__(self, content: Optional[Dict[str, Any]] = None):
        self.content = content or {}
        self._sections: Dict[str, LinterOptions] = {}

        for key, value in self.content.items():
            if not isinstance(value, dict):
                continue
            try:
                options = LinterOptions(**{str(k): v for k, v in value.items()})
                self._sections[normalize_key(str(key))] = options
            except ValidationError as e:
                logger.warning(f"Ignoring invalid options for linter '{key}': {e}")

    @classmethod
    def from_yaml(cls, text: str) -> "BotConfig":
        """
        Parse a pointer document.

        Raises:
            ConfigParseError: When the text is not a YAML mapping
        """
        try:
            data = yaml.safe_load(text) if text else {}
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigParseError(f"Expected a mapping, got {type(data).__name__}")

        return cls(data)

    @classmethod
    def load(cls, fetcher, repository: str, ref: str, path: str = DEFAULT_POINTER_FILE) -> "BotConfig":
        """
        Load the bot config of a repository, falling back to defaults.

        Args:
            fetcher: Object providing fetch_file(repository, ref, path)
            repository: Repository in 'owner/repo' format
            ref: Commit SHA or branch
            path: Pointer document path

        Returns:
            BotConfig, empty when the document is missing or invalid
        """
        try:
            text = fetcher.fetch_file(repository, ref, path)
        except Exception as e:
            logger.warning(f"Could not fetch {path} from {repository}@{ref}: {e}")
            return cls()

        if text is None:
            return cls()

        try:
            return cls.from_yaml(text)
        except ConfigParseError as e:
            logger.warning(f"Ignoring invalid {path} in {repository}: {e}")
            return cls()

    def options_for(self, linter_name: str) -> LinterOptions:
        return self._sections.get(normalize_key(linter_name), LinterOptions())

    def linter_enabled(self, linter_name: str) -> bool:
        enabled = self.options_for(linter_name).enabled
        return True if enabled is None else enabled

    def config_file_for(self, linter_name: str) -> Optional[str]:
        return self.options_for(linter_name).config_file
