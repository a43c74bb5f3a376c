#!/usr/bin/env python3
"""
Lint Review Demo

Lints the CoffeeScript files changed by a pull request and prints the
violations found on changed lines.

Usage:
    python examples/lint_review_demo.py <owner> <repo> <pr_number> [config_repo]

Example:
    python examples/lint_review_demo.py thoughtbot hound 1234 thoughtbot/guides
"""

import sys
import logging

from lint_reviewer.api import LintReviewerAPI, ReviewRequest
from lint_reviewer.config import AppConfig
from lint_reviewer.models.owner import Owner


def setup_logging():
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main():
    """Main demo function."""
    setup_logging()

    if len(sys.argv) not in (4, 5):
        print("Usage: python lint_review_demo.py <owner> <repo> <pr_number> [config_repo]")
        print("Example: python lint_review_demo.py thoughtbot hound 1234 thoughtbot/guides")
        sys.exit(1)

    owner_name, repo_name, pr_number = sys.argv[1], sys.argv[2], int(sys.argv[3])
    config_repo = sys.argv[4] if len(sys.argv) == 5 else None

    config = AppConfig.from_env()
    if not config.github.token:
        print("GITHUB_TOKEN is not set")
        sys.exit(1)

    api = LintReviewerAPI(config)
    owner = Owner(name=owner_name, config_enabled=config_repo is not None, config_repo=config_repo)

    run = api.review_pull_request(ReviewRequest(
        repository=f"{owner_name}/{repo_name}",
        pr_number=pr_number,
        owner=owner,
    ))

    if run.status != "completed":
        print(f"Review failed: {run.metadata.get('error')}")
        sys.exit(1)

    print(f"\nReviewed {run.metadata['files_linted']} of {run.metadata['files_changed']} changed files "
          f"in {run.processing_time:.2f}s")

    for review in run.file_reviews:
        print(f"\n{review.filename} ({review.linter_name})")
        if not review.violations:
            print("  no violations")
        for violation in review.violations:
            print(f"  line {violation.line_number} (position {violation.patch_position}):")
            for message in violation.messages:
                print(f"    - {message}")


if __name__ == "__main__":
    main()
