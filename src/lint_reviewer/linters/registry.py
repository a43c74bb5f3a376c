"""
Linter Registry

Maps changed files to the linter adapters willing to claim them.
"""

import logging
from typing import Iterable, List, Optional, Type

from .base import Linter
from .coffeescript import CoffeeScriptLinter


logger = logging.getLogger(__name__)


class LinterRegistry:
    """Fixed set of linter classes, queried by filename."""

    def __init__(self, linter_classes: Optional[Iterable[Type[Linter]]] = None):
        self.linter_classes: List[Type[Linter]] = list(
            linter_classes if linter_classes is not None else [CoffeeScriptLinter]
        )

    def register(self, linter_class: Type[Linter]) -> None:
        if linter_class not in self.linter_classes:
            self.linter_classes.append(linter_class)

    def get(self, name: str) -> Optional[Type[Linter]]:
        for linter_class in self.linter_classes:
            if linter_class.name == name:
                return linter_class
        return None

    def linters_for(self, filename: str) -> List[Type[Linter]]:
        """Linter classes whose can_lint claims the file."""
        return [cls for cls in self.linter_classes if cls.can_lint(filename)]

    def build_linters(self, bot_config, build, **kwargs) -> List[Linter]:
        """Instantiate every registered linter for one build."""
        linters = [cls(bot_config=bot_config, build=build, **kwargs) for cls in self.linter_classes]
        logger.debug(f"Built {len(linters)} linters for {build.repository}@{build.commit_sha}")
        return linters
