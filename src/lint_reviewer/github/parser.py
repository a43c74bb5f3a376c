"""
PR Diff Parser

Parses GitHub PR file data into ChangedFile objects.
Computes the patch position of every added line so that lint
violations can be anchored to the diff.
"""

import re
import logging
from typing import Dict, List, Optional

from ..models.pr_diff import ChangedFile, DiffChunk


logger = logging.getLogger(__name__)


class PRDiffParser:
    """
    Parser for GitHub PR diff data.

    Patch positions follow GitHub's addressing: the line just below the
    first "@@" header is position 1, and every later line of the patch,
    including removed lines and further "@@" headers, adds one.
    """

    def __init__(self):
        """Initialize PR diff parser."""
        self.diff_header_pattern = re.compile(r'^@@\s*-(\d+)(?:,(\d+))?\s*\+(\d+)(?:,(\d+))?\s*@@(.*)$')
        self.binary_file_pattern = re.compile(r'Binary files? .* differ')

    def parse_changed_file(self, file_data: Dict, content: str) -> ChangedFile:
        """
        Build a ChangedFile from a GitHub pull request file entry.

        Args:
            file_data: File entry from the pull request files API
            content: Full file content at the head commit

        Returns:
            ChangedFile with its patch position lookup
        """
        filename = file_data['filename']
        logger.debug(f"Parsing file change: {filename}")

        return ChangedFile(
            filename=filename,
            content=content,
            chunks=self.parse_patch(file_data.get('patch') or ''),
            status=self._determine_status(file_data.get('status', 'modified')),
        )

    def _determine_status(self, status: str) -> str:
        """
        Normalize a GitHub file status.

        Args:
            status: GitHub file status

        Returns:
            Normalized status
        """
        status_mapping = {
            'added': 'added',
            'removed': 'removed',
            'modified': 'modified',
            'renamed': 'renamed',
            'copied': 'added',
            'changed': 'modified',
        }

        return status_mapping.get(status, 'modified')

    def parse_patch(self, patch: str) -> List[DiffChunk]:
        """
        Parse a unified diff patch into chunks.

        Args:
            patch: Raw diff patch string (GitHub "patch" field)

        Returns:
            List of DiffChunk objects
        """
        if not patch:
            return []

        if self.binary_file_pattern.search(patch):
            logger.debug("Skipping binary file diff")
            return []

        chunks = []
        current_chunk: Optional[DiffChunk] = None
        chunk_content: List[str] = []
        line_number = 0
        position = 0

        for line in patch.split('\n'):
            header_match = self.diff_header_pattern.match(line)

            if header_match:
                if current_chunk:
                    current_chunk.content = '\n'.join(chunk_content)
                    chunks.append(current_chunk)
                    # later headers occupy a position of their own
                    position += 1

                current_chunk = DiffChunk(
                    old_start=int(header_match.group(1)),
                    old_lines=int(header_match.group(2) or 1),
                    new_start=int(header_match.group(3)),
                    new_lines=int(header_match.group(4) or 1),
                )
                chunk_content = []
                line_number = current_chunk.new_start
                continue

            if current_chunk is None:
                # file headers before the first hunk
                continue

            if line.startswith('\\'):
                # "\ No newline at end of file"
                chunk_content.append(line)
                position += 1
                continue

            position += 1
            chunk_content.append(line)

            if line.startswith('+'):
                current_chunk.line_positions[line_number] = position
                line_number += 1
            elif not line.startswith('-'):
                line_number += 1

        if current_chunk:
            current_chunk.content = '\n'.join(chunk_content)
            chunks.append(current_chunk)

        logger.debug(f"Parsed {len(chunks)} diff chunks")
        return chunks
