"""
CoffeeScript linter adapter, backed by CoffeeLint.
"""

from .base import Linter
from .engine import CoffeeLintEngine


class CoffeeScriptLinter(Linter):
    """Lints .coffee files, including ERB templated and .coffee.js variants."""

    name = "coffeescript"
    FILE_SUFFIXES = (".coffee", ".coffee.erb", ".coffee.js")
    LEGACY_CONFIG_FILES = ("coffeelint.json",)

    def build_engine(self) -> CoffeeLintEngine:
        return CoffeeLintEngine(
            executable=self.lint_config.coffeelint_path,
            timeout_seconds=self.lint_config.engine_timeout_seconds,
        )
