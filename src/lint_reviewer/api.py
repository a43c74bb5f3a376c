"""
Main Lint Reviewer API

Main interface that runs the linter adapters over every file changed
by a pull request and collects the resulting file reviews.
"""

import logging
from typing import Dict, List, Optional
from datetime import datetime
from dataclasses import dataclass, field

from .config import AppConfig
from .github.client import GitHubClient
from .github.parser import PRDiffParser
from .linters.base import Linter
from .linters.bot_config import BotConfig
from .linters.registry import LinterRegistry
from .linters.resolver import ConfigResolver
from .models.owner import Build, Owner
from .models.pr_diff import ChangedFile
from .models.review import FileReview, FileReviewResponse
from .review.store import InMemoryReviewStore


logger = logging.getLogger(__name__)


@dataclass
class ReviewRequest:
    """Request for a pull request lint review."""
    repository: str
    pr_number: int
    owner: Owner
    options: Optional[Dict] = None


@dataclass
class ReviewRun:
    """Result of linting one pull request."""
    review_id: str
    repository: str
    pr_number: int
    status: str
    file_reviews: List[FileReview]
    processing_time: float
    created_at: datetime
    metadata: Dict = field(default_factory=dict)

    @property
    def violation_count(self) -> int:
        return sum(len(review.violations) for review in self.file_reviews)

    def to_response(self) -> List[FileReviewResponse]:
        return [FileReviewResponse.from_file_review(review) for review in self.file_reviews]


class LintReviewerAPI:
    """
    Main Lint Reviewer API interface.

    Orchestrates the review of a pull request:
    1. Collect changed files and their content at the head commit
    2. Load the repository's bot config
    3. Run every enabled linter that claims a file
    4. Collect completed file reviews
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        client=None,
        registry: Optional[LinterRegistry] = None,
        review_store=None,
        engine=None,
    ):
        """
        Initialize Lint Reviewer API.

        Args:
            config: Optional configuration object
            client: Repository client; a GitHubClient is built from config when omitted
            registry: Linter registry; defaults to all built-in linters
            review_store: Object with save(review); defaults to in-memory
            engine: Lint engine override passed to every linter
        """
        self.config = config or AppConfig.from_env()

        if client is None:
            client = GitHubClient(
                self.config.github.token,
                base_url=self.config.github.api_base_url,
                timeout_seconds=self.config.github.timeout_seconds,
                max_retries=self.config.github.max_retries,
            )

        self.client = client
        self.registry = registry or LinterRegistry()
        self.review_store = review_store if review_store is not None else InMemoryReviewStore()
        self.engine = engine
        self.pr_parser = PRDiffParser()
        self.resolver = ConfigResolver(self.client, pointer_file=self.config.lint.pointer_file)

        logger.info("Lint Reviewer API initialized")

    def build_linters(self, bot_config: BotConfig, build: Build) -> List[Linter]:
        return self.registry.build_linters(
            bot_config,
            build,
            engine=self.engine,
            resolver=self.resolver,
            review_store=self.review_store,
            lint_config=self.config.lint,
        )

    def review_file(self, file: ChangedFile, linters: List[Linter]) -> List[FileReview]:
        """
        Run every enabled linter that claims the file.

        Args:
            file: Changed file
            linters: Linter instances for the build

        Returns:
            One FileReview per applicable linter
        """
        if file.removed:
            return []

        return [
            linter.file_review(file)
            for linter in linters
            if linter.can_lint(file.filename) and linter.is_enabled()
        ]

    def load_linters(self, build: Build) -> List[Linter]:
        """Linters for a build, switched by the repository's bot config at that commit."""
        bot_config = BotConfig.load(self.client, build.repository, build.commit_sha, self.config.lint.pointer_file)
        return self.build_linters(bot_config, build)

    def review_changed_file(self, build: Build, file: ChangedFile) -> List[FileReview]:
        """
        Lint a single changed file of a build.

        Args:
            build: Commit the file belongs to
            file: Changed file with its diff chunks

        Returns:
            One FileReview per applicable linter
        """
        logger.info(f"Linting {file.filename} at {build.repository}@{build.commit_sha}")
        return self.review_file(file, self.load_linters(build))

    def review_pull_request(self, request: ReviewRequest) -> ReviewRun:
        """
        Lint every changed file of a pull request.

        Args:
            request: ReviewRequest with pull request information

        Returns:
            ReviewRun with the file reviews, or a failed run
        """
        start_time = datetime.now()
        review_id = f"{request.repository}_{request.pr_number}_{int(start_time.timestamp())}"

        logger.info(f"Starting lint review: {review_id}")

        try:
            pr_data = self.client.get_pull_request(request.repository, request.pr_number)
            head_sha = pr_data['head']['sha']

            build = Build(
                repository=request.repository,
                commit_sha=head_sha,
                owner=request.owner,
                pr_number=request.pr_number,
            )
            linters = self.load_linters(build)

            files_data = self.client.get_pull_request_files(request.repository, request.pr_number)
            file_reviews = []
            files_linted = 0

            for file_data in files_data:
                changed_file = self._load_changed_file(file_data, build, linters)
                if changed_file is None:
                    continue

                files_linted += 1
                file_reviews.extend(self.review_file(changed_file, linters))

            processing_time = (datetime.now() - start_time).total_seconds()
            run = ReviewRun(
                review_id=review_id,
                repository=request.repository,
                pr_number=request.pr_number,
                status="completed",
                file_reviews=file_reviews,
                processing_time=processing_time,
                created_at=start_time,
                metadata={
                    'head_sha': head_sha,
                    'files_changed': len(files_data),
                    'files_linted': files_linted,
                },
            )

            logger.info(f"Lint review completed: {review_id} ({run.violation_count} violations, {processing_time:.2f}s)")
            return run

        except Exception as e:
            logger.error(f"Lint review failed: {review_id} - {e}")

            processing_time = (datetime.now() - start_time).total_seconds()
            return ReviewRun(
                review_id=review_id,
                repository=request.repository,
                pr_number=request.pr_number,
                status="failed",
                file_reviews=[],
                processing_time=processing_time,
                created_at=start_time,
                metadata={"error": str(e)},
            )

    def _load_changed_file(self, file_data: Dict, build: Build, linters: List[Linter]) -> Optional[ChangedFile]:
        """Fetch content only for files some enabled linter will look at."""
        filename = file_data['filename']

        if file_data.get('status') == 'removed':
            return None

        if not any(linter.can_lint(filename) and linter.is_enabled() for linter in linters):
            logger.debug(f"No enabled linter for {filename}")
            return None

        try:
            content = self.client.fetch_file(build.repository, build.commit_sha, filename)
        except UnicodeDecodeError as e:
            logger.warning(f"Skipping {filename}: content is not valid UTF-8 ({e})")
            return None

        if content is None:
            logger.warning(f"Content of {filename} not found at {build.commit_sha}")
            return None

        return self.pr_parser.parse_changed_file(file_data, content)
