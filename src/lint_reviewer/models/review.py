"""
Review Data Models

린트 결과와 파일 리뷰 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, validator


@dataclass
class RawFinding:
    """A single finding reported by a lint engine."""
    line_number: int
    messages: List[str]
    rule: Optional[str] = None
    level: Optional[str] = None

    def __post_init__(self):
        """데이터 검증"""
        if self.line_number <= 0:
            raise ValueError("Line number must be positive")
        if isinstance(self.messages, str):
            self.messages = [self.messages]
        if not self.messages:
            raise ValueError("A finding needs at least one message")


@dataclass
class Violation:
    """Lint messages attached to one changed line of a file."""
    filename: str
    line_number: int
    patch_position: int
    messages: List[str] = field(default_factory=list)

    def __post_init__(self):
        """데이터 검증"""
        if self.line_number <= 0:
            raise ValueError("Line number must be positive")
        if self.patch_position <= 0:
            raise ValueError("Patch position must be positive")

    def add_messages(self, messages: List[str]) -> None:
        """Append messages, keeping arrival order and skipping duplicates."""
        for message in messages:
            if message not in self.messages:
                self.messages.append(message)


@dataclass
class FileReview:
    """Result of running one linter over one changed file."""
    filename: str
    linter_name: str
    violations: List[Violation] = field(default_factory=list)
    completed_at: Optional[datetime] = None
    persisted: bool = False

    @property
    def completed(self) -> bool:
        return self.completed_at is not None

    def violation_at(self, line_number: int) -> Optional[Violation]:
        for violation in self.violations:
            if violation.line_number == line_number:
                return violation
        return None

    def add_finding(self, finding: RawFinding, patch_position: Optional[int]) -> Optional[Violation]:
        """
        Record a finding against the line it was reported on.

        Findings on lines without a patch position are dropped. A second
        finding on an already reported line extends that violation.

        Args:
            finding: Finding from the lint engine
            patch_position: Patch position of the finding's line, if changed

        Returns:
            The created or updated Violation, or None if dropped
        """
        if patch_position is None:
            return None

        violation = self.violation_at(finding.line_number)
        if violation is None:
            violation = Violation(
                filename=self.filename,
                line_number=finding.line_number,
                patch_position=patch_position,
            )
            self.violations.append(violation)

        violation.add_messages(finding.messages)
        return violation

    def complete(self) -> None:
        self.completed_at = datetime.now(timezone.utc)


# Pydantic models for API responses
class ViolationResponse(BaseModel):
    """API 응답용 Violation 모델"""
    filename: str
    line_number: int
    patch_position: int
    messages: List[str]

    @validator('line_number', 'patch_position')
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError('Line numbers and positions must be positive')
        return v

    class Config:
        from_attributes = True


class FileReviewResponse(BaseModel):
    """API 응답용 FileReview 모델"""
    filename: str
    linter_name: str
    completed: bool
    persisted: bool
    completed_at: Optional[datetime] = None
    violations: List[ViolationResponse] = []

    class Config:
        from_attributes = True

    @classmethod
    def from_file_review(cls, review: FileReview) -> "FileReviewResponse":
        return cls(
            filename=review.filename,
            linter_name=review.linter_name,
            completed=review.completed,
            persisted=review.persisted,
            completed_at=review.completed_at,
            violations=[
                ViolationResponse(
                    filename=v.filename,
                    line_number=v.line_number,
                    patch_position=v.patch_position,
                    messages=list(v.messages),
                )
                for v in review.violations
            ],
        )
