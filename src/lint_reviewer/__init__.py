"""
Lint Reviewer

Per-language linter adapters for automated pull request reviews.
"""

__version__ = "1.0.0"

from .api import LintReviewerAPI, ReviewRequest, ReviewRun

__all__ = ["LintReviewerAPI", "ReviewRequest", "ReviewRun"]
