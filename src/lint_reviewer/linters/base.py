"""
Linter Base

Shared behaviour of the per-language linter adapters: which files a
linter claims, whether it is switched on, and how a file review is
assembled from the engine's findings.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from ..config import LintConfig
from ..models.owner import Build
from ..models.pr_diff import ChangedFile
from ..models.review import FileReview, RawFinding
from ..review.store import InMemoryReviewStore
from .bot_config import BotConfig
from .preprocess import preprocess
from .resolver import ConfigResolver, merge_configs


logger = logging.getLogger(__name__)


class Linter(ABC):
    """
    Base class for linter adapters.

    Subclasses set ``name``, ``FILE_SUFFIXES`` and ``LEGACY_CONFIG_FILES``
    and provide ``build_engine``.
    """

    name: str = ""
    FILE_SUFFIXES: Sequence[str] = ()
    LEGACY_CONFIG_FILES: Sequence[str] = ()

    def __init__(
        self,
        bot_config: BotConfig,
        build: Build,
        engine=None,
        resolver: Optional[ConfigResolver] = None,
        fetcher=None,
        review_store=None,
        lint_config: Optional[LintConfig] = None,
    ):
        """
        Initialize linter adapter.

        Args:
            bot_config: Per-PR linter switches
            build: Commit being reviewed
            engine: Lint engine with lint(content, config); defaults to build_engine()
            resolver: Config resolver; built from fetcher when omitted
            fetcher: Repository fetcher used to build a resolver
            review_store: Object with save(review); defaults to in-memory
            lint_config: Engine settings used by build_engine()
        """
        self.lint_config = lint_config or LintConfig()

        if resolver is None and fetcher is not None:
            resolver = ConfigResolver(fetcher, pointer_file=self.lint_config.pointer_file)

        self.bot_config = bot_config
        self.build = build
        self.engine = engine if engine is not None else self.build_engine()
        self.resolver = resolver
        self.review_store = review_store if review_store is not None else InMemoryReviewStore()

    @classmethod
    def can_lint(cls, filename: str) -> bool:
        return any(filename.endswith(suffix) for suffix in cls.FILE_SUFFIXES)

    def is_enabled(self) -> bool:
        return self.bot_config.linter_enabled(self.name)

    @abstractmethod
    def build_engine(self):
        """Create the lint engine this linter runs by default."""

    def config(self) -> Dict[str, Any]:
        """Effective configuration: owner config overlaid with the repository's own."""
        if self.resolver is None:
            return {}

        owner_config = self.resolver.resolve(self.build.owner, self.name, self.LEGACY_CONFIG_FILES)
        repo_config = self.resolver.resolve_repository_override(self.build, self.bot_config, self.name)
        return merge_configs(owner_config, repo_config)

    def file_review(self, file: ChangedFile) -> FileReview:
        """
        Lint a changed file and collect violations on its changed lines.

        Args:
            file: Changed file claimed by this linter

        Returns:
            Completed and persisted FileReview

        Raises:
            EngineInvocationError: When the lint engine fails
        """
        review = FileReview(filename=file.filename, linter_name=self.name)

        content = preprocess(file.content, file.filename)
        findings = self.engine.lint(content, self.config())
        self.build_violations(review, file, findings)

        review.complete()
        self.review_store.save(review)

        logger.info(f"{self.name} review of {file.filename}: {len(findings)} findings, {len(review.violations)} on changed lines")
        return review

    def build_violations(self, review: FileReview, file: ChangedFile, findings: List[RawFinding]) -> FileReview:
        for finding in findings:
            position = file.patch_position_for(finding.line_number)
            if review.add_finding(finding, position) is None:
                logger.debug(f"Dropping finding on unchanged line {file.filename}:{finding.line_number}")
        return review
