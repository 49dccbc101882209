"""
Review Data Models

코드 리뷰 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


@dataclass(frozen=True)
class PullRequestContext:
    """리뷰 대상 Pull Request 정보"""
    owner: str
    repository: str
    pull_number: int
    title: str = ""
    description: str = ""

    def __post_init__(self):
        """데이터 검증"""
        if self.pull_number <= 0:
            raise ValueError("PR number must be positive")
        if not self.owner or not self.repository:
            raise ValueError("Owner and repository are required")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repository}"


@dataclass(frozen=True)
class ReviewFinding:
    """모델이 제안한 개별 리뷰 항목 (라인 번호는 모델이 준 텍스트 그대로)"""
    line_number: str
    review_comment: str


@dataclass(frozen=True)
class ReviewComment:
    """GitHub 리뷰 API에 제출되는 라인 코멘트"""
    body: str
    path: str
    line: int

    def __post_init__(self):
        """데이터 검증"""
        if not self.path:
            raise ValueError("Comment path cannot be empty")
        if self.line <= 0:
            raise ValueError("Line number must be positive")

    def to_payload(self) -> Dict[str, Any]:
        return {'body': self.body, 'path': self.path, 'line': self.line}


@dataclass
class ReviewOutcome:
    """청크 하나에 대한 모델 호출 결과

    호출 실패와 "지적 사항 없음"을 구분할 수 있도록 error를 함께 담는다.
    """
    findings: List[ReviewFinding] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def success(cls, findings: List[ReviewFinding]) -> "ReviewOutcome":
        return cls(findings=list(findings))

    @classmethod
    def failure(cls, error: str) -> "ReviewOutcome":
        return cls(findings=[], error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


# Pydantic models for model response validation
class ModelReviewItem(BaseModel):
    """모델 응답의 reviews 배열 항목"""
    line_number: str = Field(alias='lineNumber')
    review_comment: str = Field(alias='reviewComment')

    @field_validator('line_number', mode='before')
    @classmethod
    def validate_line_number(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, str)):
            raise ValueError('lineNumber must be an integer')
        text = str(v).strip()
        if not text.isdigit() or int(text) <= 0:
            raise ValueError('lineNumber must be a positive integer')
        return text

    @field_validator('review_comment', mode='before')
    @classmethod
    def validate_review_comment(cls, v):
        if not isinstance(v, str):
            raise ValueError('reviewComment must be a string')
        return v

    def to_finding(self) -> ReviewFinding:
        return ReviewFinding(line_number=self.line_number, review_comment=self.review_comment)
