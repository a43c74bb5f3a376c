"""
Linter Adapters

This module provides the per-language linter adapters together with
config resolution, content preprocessing and lint engine invocation.
"""

from .base import Linter
from .bot_config import BotConfig
from .coffeescript import CoffeeScriptLinter
from .engine import CoffeeLintEngine, EngineInvocationError
from .errors import ConfigError, ConfigFetchError, ConfigParseError
from .registry import LinterRegistry
from .resolver import ConfigResolver

__all__ = [
    'Linter',
    'BotConfig',
    'CoffeeScriptLinter',
    'CoffeeLintEngine',
    'EngineInvocationError',
    'ConfigError',
    'ConfigFetchError',
    'ConfigParseError',
    'LinterRegistry',
    'ConfigResolver',
]
