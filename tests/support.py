"""
Test doubles shared by the test suites.

FakeCoffeeLint applies a handful of CoffeeLint's default rules to plain
text so adapter behaviour can be tested without the coffeelint binary.
"""

import re
from typing import Dict, List, Optional, Tuple, Union

from lint_reviewer.github.client import GitHubAPIError
from lint_reviewer.github.parser import PRDiffParser
from lint_reviewer.linters.bot_config import BotConfig
from lint_reviewer.linters.coffeescript import CoffeeScriptLinter
from lint_reviewer.models.owner import Build, Owner
from lint_reviewer.models.pr_diff import ChangedFile
from lint_reviewer.models.review import RawFinding


CONFIG_REPO = "organization/style"
CONFIG_SHA = "c0ffee"
REVIEWED_REPO = "organization/app"
REVIEWED_SHA = "abc123"

POINTER_DOCUMENT = """\
coffeescript:
  config_file: .coffeescript.json
"""


class FakeCoffeeLint:
    """Deterministic stand-in for the coffeelint engine."""

    def __init__(self):
        self.calls: List[Tuple[str, Dict]] = []

    def lint(self, content: str, config: Dict) -> List[RawFinding]:
        self.calls.append((content, config))
        findings = []

        max_length = config.get('max_line_length', {})
        limit = max_length.get('value', 80)
        check_length = max_length.get('level', 'error') != 'ignore'

        for number, line in enumerate(content.split('\n'), start=1):
            if check_length and len(line) > limit:
                findings.append(RawFinding(number, ["Line exceeds maximum allowed length"], rule='max_line_length'))
            if line != line.rstrip():
                findings.append(RawFinding(number, ["Line ends with trailing whitespace"], rule='no_trailing_whitespace'))
            match = re.match(r'\s*class\s+(\S+)', line)
            if match and not re.match(r'^[A-Z][a-zA-Z0-9]*$', match.group(1)):
                findings.append(RawFinding(number, ["Class name should be UpperCamelCased"], rule='camel_case_classes'))

        return findings


class StubEngine:
    """Returns fixed findings and records what it was called with."""

    def __init__(self, findings: Optional[List[RawFinding]] = None):
        self.findings = findings or []
        self.calls: List[Tuple[str, Dict]] = []

    def lint(self, content: str, config: Dict) -> List[RawFinding]:
        self.calls.append((content, config))
        return list(self.findings)


class FakeFetcher:
    """In-memory repository contents keyed by (repository, ref, path)."""

    def __init__(self, heads: Optional[Dict[str, str]] = None):
        self.heads = heads or {}
        self.files: Dict[Tuple[str, str, str], Union[str, bytes]] = {}
        self.requests: List[Tuple[str, str, str]] = []
        self.failing_paths = set()

    def add_files(self, repository: str, ref: str, files: Dict[str, Union[str, bytes]]) -> "FakeFetcher":
        for path, content in files.items():
            self.files[(repository, ref, path)] = content
        return self

    def fetch_default_branch_head(self, repository: str) -> str:
        if repository not in self.heads:
            raise GitHubAPIError(f"Not Found: {repository}", status_code=404)
        return self.heads[repository]

    def fetch_file(self, repository: str, ref: str, path: str) -> Optional[str]:
        self.requests.append((repository, ref, path))
        if path in self.failing_paths:
            raise GitHubAPIError("Server Error", status_code=502)
        content = self.files.get((repository, ref, path))
        if isinstance(content, bytes):
            # decoded the way GitHubClient.fetch_file decodes contents
            return content.decode("utf-8")
        return content


def patch_for(content: str) -> str:
    """A patch replacing one old line with every line of content."""
    lines = content.split('\n')
    body = '\n'.join(f"+{line}" for line in lines)
    return f"@@ -1 +1,{len(lines)} @@\n-old\n{body}"


def build_file(content: str, filename: str = "test.coffee", patch: Optional[str] = None) -> ChangedFile:
    """ChangedFile whose every line was added by the patch."""
    if patch is None:
        patch = patch_for(content)
    return ChangedFile(
        filename=filename,
        content=content,
        chunks=PRDiffParser().parse_patch(patch),
    )


def build_owner_fetcher(config: str = "{}", extra_files: Optional[Dict[str, str]] = None) -> FakeFetcher:
    """Fetcher serving an owner style repo whose pointer names .coffeescript.json."""
    files = {
        ".hound.yml": POINTER_DOCUMENT,
        ".coffeescript.json": config,
    }
    files.update(extra_files or {})
    return FakeFetcher(heads={CONFIG_REPO: CONFIG_SHA}).add_files(CONFIG_REPO, CONFIG_SHA, files)


def build_owner(config_enabled: bool = True) -> Owner:
    return Owner(name="organization", config_enabled=config_enabled, config_repo=CONFIG_REPO)


def build_build(owner: Optional[Owner] = None) -> Build:
    return Build(repository=REVIEWED_REPO, commit_sha=REVIEWED_SHA, owner=owner or build_owner())


def build_linter(
    engine=None,
    fetcher: Optional[FakeFetcher] = None,
    bot_config: Optional[BotConfig] = None,
    owner: Optional[Owner] = None,
) -> CoffeeScriptLinter:
    return CoffeeScriptLinter(
        bot_config=bot_config or BotConfig(),
        build=build_build(owner),
        engine=engine or FakeCoffeeLint(),
        fetcher=fetcher or build_owner_fetcher(),
    )
