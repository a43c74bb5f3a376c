"""
Data Models

Lint Reviewer 시스템의 핵심 데이터 모델들
"""

from .pr_diff import ChangedFile, DiffChunk
from .owner import Owner, Build
from .review import RawFinding, Violation, FileReview

__all__ = [
    "ChangedFile",
    "DiffChunk",
    "Owner",
    "Build",
    "RawFinding",
    "Violation",
    "FileReview",
]
