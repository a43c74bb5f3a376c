"""
Owner Data Models

저장소 소유자와 빌드 관련 데이터 모델들
"""

from dataclasses import dataclass
from typing import Optional
from pydantic import BaseModel, validator

from .pr_diff import ChangedFileRequest


@dataclass
class Owner:
    """Repository owner (user or organization) and its custom config settings."""
    name: str
    config_enabled: bool = False
    config_repo: Optional[str] = None  # 'owner/repo' holding the style config

    def __post_init__(self):
        """데이터 검증"""
        if not self.name.strip():
            raise ValueError("Owner name cannot be empty")
        if self.config_repo is not None and '/' not in self.config_repo:
            raise ValueError("Config repo must be in format 'owner/repo'")

    @property
    def has_config_repo(self) -> bool:
        """커스텀 설정 저장소 사용 여부"""
        return self.config_enabled and bool(self.config_repo)


@dataclass
class Build:
    """Handle for the commit being reviewed."""
    repository: str
    commit_sha: str
    owner: Owner
    pr_number: Optional[int] = None

    def __post_init__(self):
        """데이터 검증"""
        if '/' not in self.repository:
            raise ValueError("Repository must be in format 'owner/repo'")
        if not self.commit_sha.strip():
            raise ValueError("Commit SHA cannot be empty")
        if self.pr_number is not None and self.pr_number <= 0:
            raise ValueError("PR number must be positive")


# Pydantic models for API validation
class OwnerRequest(BaseModel):
    """API 요청용 Owner 모델"""
    name: str
    config_enabled: bool = False
    config_repo: Optional[str] = None

    @validator('name')
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Owner name cannot be empty')
        return v

    @validator('config_repo')
    def validate_config_repo(cls, v):
        if v is not None and '/' not in v:
            raise ValueError("Config repo must be in format 'owner/repo'")
        return v

    def to_owner(self) -> Owner:
        return Owner(name=self.name, config_enabled=self.config_enabled, config_repo=self.config_repo)


class PullRequestLintRequest(BaseModel):
    """API 요청용 PR 린트 요청 모델"""
    repository: str
    pr_number: int
    owner: OwnerRequest

    @validator('repository')
    def validate_repository(cls, v):
        if '/' not in v:
            raise ValueError("Repository must be in format 'owner/repo'")
        return v

    @validator('pr_number')
    def validate_pr_number(cls, v):
        if v <= 0:
            raise ValueError('PR number must be positive')
        return v


class FileLintRequest(BaseModel):
    """API 요청용 단일 파일 린트 요청 모델"""
    repository: str
    commit_sha: str
    owner: OwnerRequest
    file: ChangedFileRequest

    @validator('repository')
    def validate_repository(cls, v):
        if '/' not in v:
            raise ValueError("Repository must be in format 'owner/repo'")
        return v

    @validator('commit_sha')
    def validate_commit_sha(cls, v):
        if not v.strip():
            raise ValueError('Commit SHA cannot be empty')
        return v

    def to_build(self) -> Build:
        return Build(repository=self.repository, commit_sha=self.commit_sha, owner=self.owner.to_owner())
