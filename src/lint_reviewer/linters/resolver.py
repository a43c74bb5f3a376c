"""
Lint Configuration Resolver

Resolves the lint configuration an owner has published in its style
repository. Lookups are an ordered list of strategies; the first one
that yields a configuration wins and the default configuration is used
when every strategy fails.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from ..models.owner import Build, Owner
from .bot_config import BotConfig, DEFAULT_POINTER_FILE
from .errors import ConfigError, ConfigFetchError, ConfigParseError


logger = logging.getLogger(__name__)


def default_config() -> Dict[str, Any]:
    return {}


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config objects; values from override win."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


def fetch_text(fetcher, repository: str, ref: str, path: str) -> str:
    """
    Fetch a file through the repository fetcher.

    Raises:
        ConfigFetchError: When the file is missing or the fetch fails
    """
    try:
        text = fetcher.fetch_file(repository, ref, path)
    except Exception as e:
        raise ConfigFetchError(f"Fetching {path} failed: {e}", repository=repository, path=path) from e

    if text is None:
        raise ConfigFetchError(f"{path} not found", repository=repository, path=path)
    return text


def parse_json_config(text: str, path: Optional[str] = None) -> Dict[str, Any]:
    """
    Parse a JSON lint configuration.

    Raises:
        ConfigParseError: When the text is not a JSON object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON in {path}: {e}", path=path) from e

    if not isinstance(data, dict):
        raise ConfigParseError(f"Expected a JSON object in {path}, got {type(data).__name__}", path=path)
    return data


def load_json_config(fetcher, repository: str, ref: str, path: str) -> Dict[str, Any]:
    text = fetch_text(fetcher, repository, ref, path)
    try:
        return parse_json_config(text, path)
    except ConfigParseError as e:
        e.repository = repository
        raise


class ConfigStrategy(ABC):
    """One way of locating a linter configuration in a repository."""

    description = "config"

    @abstractmethod
    def load(self, fetcher, repository: str, ref: str) -> Dict[str, Any]:
        """Load the configuration, raising ConfigError when it is unavailable."""


class PointerConfigStrategy(ConfigStrategy):
    """Follow the pointer document to the linter's config file."""

    def __init__(self, linter_name: str, pointer_file: str = DEFAULT_POINTER_FILE):
        self.linter_name = linter_name
        self.pointer_file = pointer_file

    @property
    def description(self) -> str:
        return f"{self.pointer_file} -> {self.linter_name}"

    def load(self, fetcher, repository: str, ref: str) -> Dict[str, Any]:
        pointer = BotConfig.from_yaml(fetch_text(fetcher, repository, ref, self.pointer_file))

        path = pointer.config_file_for(self.linter_name)
        if not path:
            raise ConfigFetchError(
                f"{self.pointer_file} names no config file for {self.linter_name}",
                repository=repository,
                path=self.pointer_file,
            )

        return load_json_config(fetcher, repository, ref, path)


class LegacyConfigStrategy(ConfigStrategy):
    """Read a fixed, linter specific config file."""

    def __init__(self, path: str):
        self.path = path

    @property
    def description(self) -> str:
        return f"legacy {self.path}"

    def load(self, fetcher, repository: str, ref: str) -> Dict[str, Any]:
        return load_json_config(fetcher, repository, ref, self.path)


class ConfigResolver:
    """
    Resolves owner level lint configuration.

    Never raises: fetch and parse failures move on to the next strategy,
    and the default configuration is returned when all of them fail.
    Nothing is retried.
    """

    def __init__(self, fetcher, pointer_file: str = DEFAULT_POINTER_FILE):
        """
        Initialize config resolver.

        Args:
            fetcher: Object providing fetch_file(repository, ref, path)
                and fetch_default_branch_head(repository)
            pointer_file: Name of the pointer document
        """
        self.fetcher = fetcher
        self.pointer_file = pointer_file

    def strategies_for(self, linter_name: str, legacy_files: Sequence[str] = ()) -> List[ConfigStrategy]:
        strategies: List[ConfigStrategy] = [PointerConfigStrategy(linter_name, self.pointer_file)]
        strategies.extend(LegacyConfigStrategy(path) for path in legacy_files)
        return strategies

    def resolve(self, owner: Owner, linter_name: str, legacy_files: Sequence[str] = ()) -> Dict[str, Any]:
        """
        Resolve the configuration an owner uses for a linter.

        Args:
            owner: Owner whose style repository is consulted
            linter_name: Linter identifier, e.g. 'coffeescript'
            legacy_files: Fallback config paths, tried in order

        Returns:
            Parsed configuration, or the default configuration
        """
        if not owner.has_config_repo:
            return default_config()

        repository = owner.config_repo
        try:
            ref = self.fetcher.fetch_default_branch_head(repository)
        except Exception as e:
            logger.warning(f"Could not resolve head of {repository}, using default {linter_name} config: {e}")
            return default_config()

        return self.resolve_from(self.strategies_for(linter_name, legacy_files), repository, ref, linter_name)

    def resolve_from(
        self,
        strategies: Sequence[ConfigStrategy],
        repository: str,
        ref: str,
        linter_name: str,
    ) -> Dict[str, Any]:
        for strategy in strategies:
            try:
                config = strategy.load(self.fetcher, repository, ref)
            except ConfigError as e:
                logger.info(f"{linter_name} config via {strategy.description} unavailable in {repository}: {e}")
                continue

            logger.debug(f"Using {linter_name} config via {strategy.description} from {repository}@{ref}")
            return config

        logger.warning(f"No usable {linter_name} config in {repository}, using default")
        return default_config()

    def resolve_repository_override(self, build: Build, bot_config: BotConfig, linter_name: str) -> Dict[str, Any]:
        """
        Load the config file the reviewed repository itself points at.

        Returns:
            Parsed configuration, or an empty override on any failure
        """
        path = bot_config.config_file_for(linter_name)
        if not path:
            return {}

        try:
            return load_json_config(self.fetcher, build.repository, build.commit_sha, path)
        except ConfigError as e:
            logger.warning(f"Ignoring {linter_name} config {path} in {build.repository}: {e}")
            return {}
