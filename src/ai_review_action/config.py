"""
Configuration Management

시스템 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Tuple
from pathlib import Path
import logging


def _input(name: str, default: Optional[str] = None) -> Optional[str]:
    """GitHub Actions 입력값 조회 (INPUT_<NAME>), 없으면 같은 이름의 환경 변수"""
    value = os.getenv(f"INPUT_{name.upper()}")
    if value:
        return value
    return os.getenv(name.upper(), default)


@dataclass(frozen=True)
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30
    event_path: Optional[str] = None
    event_name: Optional[str] = None


@dataclass(frozen=True)
class ModelConfig:
    """LLM 모델 설정"""
    api_key: Optional[str] = None
    model_name: str = "claude-3-5-sonnet-latest"
    api_base_url: str = "https://api.anthropic.com"
    temperature: float = 0.2
    max_tokens: int = 700
    timeout_seconds: int = 120


@dataclass(frozen=True)
class ReviewConfig:
    """리뷰 생성 설정"""
    exclude: str = ""
    language: str = "english"


@dataclass(frozen=True)
class LintConfig:
    """pylint 점수 설정"""
    enabled: bool = True
    workspace: str = "."
    excluded_dirs: Tuple[str, ...] = ('venv', 'env', '.venv', 'node_modules')
    timeout_seconds: Optional[int] = None


@dataclass(frozen=True)
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass(frozen=True)
class AppConfig:
    """전체 애플리케이션 설정 (실행 시작 시 한 번 생성, 이후 불변)"""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    review: ReviewConfig = field(default_factory=ReviewConfig)
    lint: LintConfig = field(default_factory=LintConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수(GitHub Actions 입력 포함)에서 설정 로드"""
        lint_timeout = os.getenv("LINT_TIMEOUT")
        return cls(
            github=GitHubConfig(
                token=_input("GITHUB_TOKEN"),
                api_base_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=int(os.getenv("GITHUB_TIMEOUT", "30")),
                event_path=os.getenv("GITHUB_EVENT_PATH"),
                event_name=os.getenv("GITHUB_EVENT_NAME"),
            ),
            model=ModelConfig(
                api_key=_input("ANTHROPIC_API_KEY"),
                model_name=_input("CLAUDE_MODEL") or ModelConfig.model_name,
                api_base_url=os.getenv("ANTHROPIC_BASE_URL", "https://api.anthropic.com"),
                timeout_seconds=int(os.getenv("MODEL_TIMEOUT", "120")),
            ),
            review=ReviewConfig(
                exclude=_input("EXCLUDE", "") or "",
                language=_input("REVIEW_LANGUAGE", "english") or "english",
            ),
            lint=LintConfig(
                enabled=(_input("LINT_ENABLED", "true") or "true").lower() == "true",
                workspace=os.getenv("GITHUB_WORKSPACE", "."),
                timeout_seconds=int(lint_timeout) if lint_timeout else None,
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("LOG_FILE"),
                max_file_size=int(os.getenv("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            ),
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        lint_data = dict(config_data.get('lint', {}))
        if 'excluded_dirs' in lint_data:
            excluded_dirs = lint_data['excluded_dirs']
            if isinstance(excluded_dirs, str):
                excluded_dirs = [excluded_dirs]
            lint_data['excluded_dirs'] = tuple(excluded_dirs)

        return cls(
            github=GitHubConfig(**config_data.get('github', {})),
            model=ModelConfig(**config_data.get('model', {})),
            review=ReviewConfig(**config_data.get('review', {})),
            lint=LintConfig(**lint_data),
            logging=LoggingConfig(**config_data.get('logging', {})),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        # 필수 인증 정보 확인
        if not self.github.token:
            errors.append("GitHub token is required")

        if not self.model.api_key:
            errors.append("Anthropic API key is required")

        if not self.model.model_name:
            errors.append("Model name is required")

        if not 0.0 <= self.model.temperature <= 1.0:
            errors.append("Temperature must be between 0.0 and 1.0")

        if self.model.max_tokens <= 0:
            errors.append("max_tokens must be positive")

        if self.review.language not in {'english', 'spanish'}:
            errors.append(f"Unsupported review language: {self.review.language}")

        # 로그 레벨 검증
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
                'event_path': self.github.event_path,
                'event_name': self.github.event_name,
                # 보안상 토큰은 제외
            },
            'model': {
                'model_name': self.model.model_name,
                'api_base_url': self.model.api_base_url,
                'temperature': self.model.temperature,
                'max_tokens': self.model.max_tokens,
                'timeout_seconds': self.model.timeout_seconds,
            },
            'review': {
                'exclude': self.review.exclude,
                'language': self.review.language,
            },
            'lint': {
                'enabled': self.lint.enabled,
                'workspace': self.lint.workspace,
                'excluded_dirs': list(self.lint.excluded_dirs),
                'timeout_seconds': self.lint.timeout_seconds,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
        }


class ConfigManager:
    """설정 관리자: 검증 후 로깅 구성"""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """현재 설정 반환"""
        return self._config

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

            # 루트 로거에 핸들러 추가
            root_logger = logging.getLogger()
            root_logger.addHandler(handler)
