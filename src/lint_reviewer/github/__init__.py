"""
GitHub Integration Layer

This module provides GitHub API integration for pull request files
and repository content retrieval.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .parser import PRDiffParser

__all__ = ['GitHubClient', 'GitHubAPIError', 'RateLimitExceeded', 'PRDiffParser']
