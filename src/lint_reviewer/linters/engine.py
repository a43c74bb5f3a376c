"""
Lint Engine Invocation

Runs the external CoffeeLint executable and normalizes its raw
reporter output into RawFinding objects.
"""

import json
import logging
import os
import subprocess
import tempfile
from typing import Any, Dict, List, Optional

from ..models.review import RawFinding


logger = logging.getLogger(__name__)


class EngineInvocationError(Exception):
    """The lint engine could not be run or produced unusable output"""
    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ''):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def normalize_findings(entries: List[Dict[str, Any]], include_context: bool = True) -> List[RawFinding]:
    """
    Convert engine result entries into RawFindings.

    Accepts both CoffeeLint's ``lineNumber`` and the ``line`` key other
    engines use. ``context`` is appended to the message when present and
    include_context is set. Entries without a usable line number are skipped.

    Args:
        entries: Decoded result entries
        include_context: Whether to append the engine's context detail

    Returns:
        List of RawFinding objects, in engine order
    """
    findings = []

    for entry in entries:
        if not isinstance(entry, dict):
            continue

        line_number = entry.get('lineNumber', entry.get('line'))
        message = entry.get('message') or entry.get('reason')
        if not isinstance(line_number, int) or line_number <= 0 or not message:
            logger.debug(f"Skipping unusable engine entry: {entry}")
            continue

        messages = [message]
        if include_context and entry.get('context'):
            messages = [f"{message}: {entry['context']}"]

        findings.append(RawFinding(
            line_number=line_number,
            messages=messages,
            rule=entry.get('rule') or entry.get('name'),
            level=entry.get('level'),
        ))

    return findings


class CoffeeLintEngine:
    """
    Subprocess wrapper around the ``coffeelint`` command line tool.

    Content is passed on stdin and the configuration through a temporary
    JSON file, so an empty configuration selects CoffeeLint's defaults.
    Syntax errors come back as findings, not exceptions.
    """

    def __init__(self, executable: str = "coffeelint", timeout_seconds: int = 30, include_context: bool = False):
        self.executable = executable
        self.timeout_seconds = timeout_seconds
        self.include_context = include_context

    def lint(self, content: str, config: Dict[str, Any]) -> List[RawFinding]:
        """
        Lint CoffeeScript source.

        Args:
            content: Source to lint
            config: CoffeeLint configuration object

        Returns:
            List of RawFinding objects

        Raises:
            EngineInvocationError: When coffeelint cannot be run
        """
        config_fd, config_path = tempfile.mkstemp(suffix='.json', prefix='coffeelint-')
        try:
            with os.fdopen(config_fd, 'w', encoding='utf-8') as f:
                json.dump(config or {}, f)

            output = self._run(content, config_path)
        finally:
            os.unlink(config_path)

        entries = []
        for file_entries in output.values():
            if isinstance(file_entries, list):
                entries.extend(file_entries)

        findings = normalize_findings(entries, include_context=self.include_context)
        logger.debug(f"coffeelint reported {len(findings)} findings")
        return findings

    def _run(self, content: str, config_path: str) -> Dict[str, Any]:
        command = [self.executable, '--stdin', '--reporter', 'raw', '-f', config_path]

        try:
            result = subprocess.run(
                command,
                input=content,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as e:
            logger.error(f"coffeelint executable not found: {self.executable}")
            raise EngineInvocationError(f"Lint engine not found: {self.executable}") from e
        except subprocess.TimeoutExpired as e:
            logger.error(f"coffeelint timed out after {self.timeout_seconds}s")
            raise EngineInvocationError(f"Lint engine timed out after {self.timeout_seconds}s") from e

        # coffeelint exits non-zero whenever it reports errors
        try:
            output = json.loads(result.stdout) if result.stdout.strip() else {}
        except json.JSONDecodeError as e:
            raise EngineInvocationError(
                f"Unparseable lint engine output: {e}",
                returncode=result.returncode,
                stderr=result.stderr,
            ) from e

        if not isinstance(output, dict):
            raise EngineInvocationError(
                "Unexpected lint engine output",
                returncode=result.returncode,
                stderr=result.stderr,
            )

        if not output and result.returncode != 0:
            raise EngineInvocationError(
                f"Lint engine failed with exit code {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr,
            )

        return output
