"""
Configuration Management

시스템 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from pathlib import Path
import logging


@dataclass
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30
    max_retries: int = 3


@dataclass
class LintConfig:
    """린터 실행 설정"""
    coffeelint_path: str = "coffeelint"
    engine_timeout_seconds: int = 30
    pointer_file: str = ".hound.yml"


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    lint: LintConfig = field(default_factory=LintConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        return cls(
            github=GitHubConfig(
                token=os.getenv("GITHUB_TOKEN"),
                api_base_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=int(os.getenv("GITHUB_TIMEOUT", "30")),
                max_retries=int(os.getenv("GITHUB_MAX_RETRIES", "3")),
            ),
            lint=LintConfig(
                coffeelint_path=os.getenv("COFFEELINT_PATH", "coffeelint"),
                engine_timeout_seconds=int(os.getenv("LINT_ENGINE_TIMEOUT", "30")),
                pointer_file=os.getenv("LINT_POINTER_FILE", ".hound.yml"),
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("LOG_FILE"),
                max_file_size=int(os.getenv("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            ),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(
            github=GitHubConfig(**config_data.get('github', {})),
            lint=LintConfig(**config_data.get('lint', {})),
            logging=LoggingConfig(**config_data.get('logging', {})),
            debug=config_data.get('debug', False),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        if self.github.timeout_seconds <= 0:
            errors.append("GitHub timeout must be positive")

        if self.github.max_retries < 0:
            errors.append("GitHub max retries must be non-negative")

        if self.lint.engine_timeout_seconds <= 0:
            errors.append("Lint engine timeout must be positive")

        if not self.lint.pointer_file.strip():
            errors.append("Pointer file name cannot be empty")

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'github': {
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
                'max_retries': self.github.max_retries,
                # 보안상 토큰은 제외
            },
            'lint': {
                'coffeelint_path': self.lint.coffeelint_path,
                'engine_timeout_seconds': self.lint.engine_timeout_seconds,
                'pointer_file': self.lint.pointer_file,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'debug': self.debug,
        }


class ConfigManager:
    """설정 관리자"""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """현재 설정 반환"""
        return self._config

    def update_config(self, **kwargs) -> None:
        """설정 업데이트"""
        config_dict = self._config.to_dict()
        config_dict['github']['token'] = self._config.github.token

        for key, value in kwargs.items():
            if '.' in key:
                # 중첩된 설정 (예: 'lint.engine_timeout_seconds')
                section, field_name = key.split('.', 1)
                if section in config_dict:
                    config_dict[section][field_name] = value
            else:
                config_dict[key] = value

        self._config = AppConfig(
            github=GitHubConfig(**config_dict['github']),
            lint=LintConfig(**config_dict['lint']),
            logging=LoggingConfig(**config_dict['logging']),
            debug=config_dict['debug'],
        )

        self._config.validate()
        self._setup_logging()

    def _setup_logging(self) -> None:
        """로깅 설정"""
        logging.basicConfig(
            level=getattr(logging, self._config.logging.level.upper()),
            format=self._config.logging.format,
        )

        # 파일 로깅이 설정된 경우 로테이션 설정
        if self._config.logging.file_path:
            from logging.handlers import RotatingFileHandler

            handler = RotatingFileHandler(
                self._config.logging.file_path,
                maxBytes=self._config.logging.max_file_size,
                backupCount=self._config.logging.backup_count,
            )
            handler.setFormatter(logging.Formatter(self._config.logging.format))

            root_logger = logging.getLogger()
            root_logger.addHandler(handler)


_config_manager: Optional[ConfigManager] = None


def get_config() -> AppConfig:
    """현재 설정 반환"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager.config


def update_config(**kwargs) -> None:
    """설정 업데이트"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    _config_manager.update_config(**kwargs)
