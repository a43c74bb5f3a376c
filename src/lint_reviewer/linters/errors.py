"""
Lint configuration errors.
"""

from typing import Optional


class ConfigError(Exception):
    """Base class for lint configuration errors"""
    def __init__(self, message: str, repository: Optional[str] = None, path: Optional[str] = None):
        super().__init__(message)
        self.repository = repository
        self.path = path


class ConfigFetchError(ConfigError):
    """A configuration file could not be fetched"""


class ConfigParseError(ConfigError):
    """A configuration file could not be parsed"""
