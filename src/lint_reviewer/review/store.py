"""
Review Store

Keeps completed file reviews. The default store is in-memory; callers
that persist reviews elsewhere pass their own object with ``save``.
"""

import logging
from typing import Dict, List, Tuple

from ..models.review import FileReview


logger = logging.getLogger(__name__)


class InMemoryReviewStore:
    """Stores file reviews keyed by (filename, linter name)."""

    def __init__(self):
        self._reviews: Dict[Tuple[str, str], FileReview] = {}

    def save(self, review: FileReview) -> FileReview:
        self._reviews[(review.filename, review.linter_name)] = review
        review.persisted = True
        logger.debug(f"Saved {review.linter_name} review of {review.filename} ({len(review.violations)} violations)")
        return review

    def get(self, filename: str, linter_name: str):
        return self._reviews.get((filename, linter_name))

    def all(self) -> List[FileReview]:
        return list(self._reviews.values())

    def __len__(self) -> int:
        return len(self._reviews)
