"""
PR Diff Data Models

Changed files and diff chunks for a pull request, with the
line number -> patch position lookup used to anchor review comments.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
from pydantic import BaseModel, validator


@dataclass
class DiffChunk:
    """A single hunk of a unified diff."""
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    content: str = ''
    # absolute line number in the new file -> patch position, added lines only
    line_positions: Dict[int, int] = field(default_factory=dict)

    def __post_init__(self):
        """데이터 검증"""
        if self.old_start < 0 or self.new_start < 0:
            raise ValueError("Line numbers must be non-negative")
        if self.old_lines < 0 or self.new_lines < 0:
            raise ValueError("Line counts must be non-negative")
        if any(position <= 0 for position in self.line_positions.values()):
            raise ValueError("Patch positions must be positive")

    @property
    def changed_line_numbers(self) -> List[int]:
        """Line numbers touched by this chunk, in file order."""
        return sorted(self.line_positions)


@dataclass
class ChangedFile:
    """A file changed by a pull request, as seen at the head commit."""
    filename: str
    content: str
    chunks: List[DiffChunk] = field(default_factory=list)
    status: str = 'modified'
    _positions: Dict[int, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        """데이터 검증"""
        if not self.filename.strip():
            raise ValueError("Filename cannot be empty")

        valid_statuses = {'added', 'modified', 'renamed', 'removed'}
        if self.status not in valid_statuses:
            raise ValueError(f"Invalid status: {self.status}")

        self._positions = {}
        for chunk in self.chunks:
            self._positions.update(chunk.line_positions)

    @property
    def removed(self) -> bool:
        return self.status == 'removed'

    @property
    def has_diff(self) -> bool:
        return bool(self._positions)

    def patch_position_for(self, line_number: int) -> Optional[int]:
        """
        Get the patch position for a line of the new file.

        Args:
            line_number: 1-based line number in the file content

        Returns:
            Patch position, or None when the line was not changed
        """
        return self._positions.get(line_number)


# Pydantic models for API validation
class DiffChunkRequest(BaseModel):
    """API 요청용 DiffChunk 모델"""
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    content: str = ''
    line_positions: Dict[int, int] = {}

    @validator('old_start', 'new_start')
    def validate_line_numbers(cls, v):
        if v < 0:
            raise ValueError('Line numbers must be non-negative')
        return v

    @validator('old_lines', 'new_lines')
    def validate_line_counts(cls, v):
        if v < 0:
            raise ValueError('Line counts must be non-negative')
        return v

    @validator('line_positions')
    def validate_positions(cls, v):
        if any(position <= 0 for position in v.values()):
            raise ValueError('Patch positions must be positive')
        return v


class ChangedFileRequest(BaseModel):
    """API 요청용 ChangedFile 모델"""
    filename: str
    content: str
    status: str = 'modified'
    chunks: List[DiffChunkRequest] = []

    @validator('filename')
    def validate_filename(cls, v):
        if not v.strip():
            raise ValueError('Filename cannot be empty')
        return v

    @validator('status')
    def validate_status(cls, v):
        if v not in {'added', 'modified', 'renamed', 'removed'}:
            raise ValueError('Invalid status')
        return v

    def to_changed_file(self) -> ChangedFile:
        """Build the core ChangedFile from a validated request."""
        return ChangedFile(
            filename=self.filename,
            content=self.content,
            status=self.status,
            chunks=[
                DiffChunk(
                    old_start=chunk.old_start,
                    old_lines=chunk.old_lines,
                    new_start=chunk.new_start,
                    new_lines=chunk.new_lines,
                    content=chunk.content,
                    line_positions=dict(chunk.line_positions),
                )
                for chunk in self.chunks
            ],
        )
