"""
GitHub API Client

Handles GitHub API authentication, rate limiting, and communication.
Provides pull request file listing and repository content fetching
for config resolution and file reviews.
"""

import base64
import time
import logging
from typing import Dict, List, Optional
from datetime import datetime
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """GitHub API related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class RateLimitExceeded(GitHubAPIError):
    """GitHub API rate limit exceeded"""
    def __init__(self, reset_time: datetime):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}", status_code=429)
        self.reset_time = reset_time


class GitHubClient:
    """
    GitHub API client with authentication, rate limiting, and error handling.

    Provides methods for:
    - Pull request and changed file retrieval
    - Repository file content at a given ref
    - Default branch head resolution
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout_seconds: int = 30,
        max_retries: int = 3,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub personal access token
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout_seconds: Per-request timeout
            max_retries: Transport retries for 429/5xx responses
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.session = self._create_session()
        self.rate_limit_remaining = 5000
        self.rate_limit_reset = datetime.now()

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self.session.headers)

    def _create_session(self) -> requests.Session:
        """Create requests session with retry strategy and authentication."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'Lint-Reviewer/1.0'
        })

        return session

    def _check_rate_limit(self) -> None:
        """Check and handle GitHub API rate limits."""
        if self.rate_limit_remaining <= 10 and datetime.now() < self.rate_limit_reset:
            wait_time = (self.rate_limit_reset - datetime.now()).total_seconds()
            if wait_time > 0:
                logger.warning(f"Rate limit low ({self.rate_limit_remaining}), resets in {wait_time:.1f}s")
                raise RateLimitExceeded(self.rate_limit_reset)

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Update rate limit information from response headers."""
        if 'X-RateLimit-Remaining' in response.headers:
            self.rate_limit_remaining = int(response.headers['X-RateLimit-Remaining'])

        if 'X-RateLimit-Reset' in response.headers:
            reset_timestamp = int(response.headers['X-RateLimit-Reset'])
            self.rate_limit_reset = datetime.fromtimestamp(reset_timestamp)

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API with rate limiting.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            GitHubAPIError: For API errors
            RateLimitExceeded: When rate limit is exceeded
        """
        self._check_rate_limit()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout_seconds)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}")

        self._update_rate_limit(response)

        if response.status_code == 429:
            reset_time = datetime.fromtimestamp(int(response.headers.get('X-RateLimit-Reset', time.time() + 3600)))
            raise RateLimitExceeded(reset_time)

        if not response.ok:
            error_data = response.json() if response.content else {}
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    def get_pull_request(self, repository: str, pr_number: int) -> Dict:
        """
        Get pull request information.

        Args:
            repository: Repository in 'owner/repo' format
            pr_number: Pull request number

        Returns:
            Pull request data
        """
        logger.info(f"Fetching PR {repository}#{pr_number}")

        response = self._make_request('GET', f'/repos/{repository}/pulls/{pr_number}')
        return response.json()

    def get_pull_request_files(self, repository: str, pr_number: int) -> List[Dict]:
        """
        Get files changed in a pull request.

        Args:
            repository: Repository in 'owner/repo' format
            pr_number: Pull request number

        Returns:
            List of file change data
        """
        logger.info(f"Fetching PR files for {repository}#{pr_number}")

        files = []
        page = 1
        per_page = 100

        while True:
            response = self._make_request(
                'GET',
                f'/repos/{repository}/pulls/{pr_number}/files',
                params={'page': page, 'per_page': per_page}
            )

            page_files = response.json()
            if not page_files:
                break

            files.extend(page_files)

            if len(page_files) < per_page:
                break

            page += 1

        logger.info(f"Found {len(files)} changed files")
        return files

    def fetch_default_branch_head(self, repository: str) -> str:
        """
        Get the commit SHA at the tip of a repository's default branch.

        Args:
            repository: Repository in 'owner/repo' format

        Returns:
            Commit SHA
        """
        repo_data = self._make_request('GET', f'/repos/{repository}').json()
        branch = repo_data.get('default_branch', 'master')

        commit_data = self._make_request('GET', f'/repos/{repository}/commits/{branch}').json()
        logger.debug(f"Default branch head of {repository}: {branch}@{commit_data['sha']}")
        return commit_data['sha']

    def fetch_file(self, repository: str, ref: str, path: str) -> Optional[str]:
        """
        Get the text content of a file at a given ref.

        Args:
            repository: Repository in 'owner/repo' format
            ref: Commit SHA or branch name
            path: File path relative to the repository root

        Returns:
            File content, or None if the file or repository does not exist
        """
        logger.debug(f"Fetching {repository}@{ref}:{path}")

        try:
            response = self._make_request(
                'GET',
                f'/repos/{repository}/contents/{path.lstrip("/")}',
                params={'ref': ref}
            )
        except GitHubAPIError as e:
            if e.status_code == 404:
                logger.debug(f"File not found: {repository}@{ref}:{path}")
                return None
            raise

        data = response.json()
        if not isinstance(data, dict) or data.get('type', 'file') != 'file':
            # directories and submodules have no content
            return None

        content = data.get('content', '')
        if data.get('encoding') == 'base64':
            return base64.b64decode(content).decode('utf-8')
        return content
