"""
Event Data Models

GitHub Actions가 전달하는 pull_request 이벤트 페이로드 모델
"""

from typing import Optional
from pydantic import BaseModel, field_validator


SUPPORTED_ACTIONS = {'opened', 'synchronize'}


class RepositoryOwner(BaseModel):
    """저장소 소유자"""
    login: str


class EventRepository(BaseModel):
    """이벤트 페이로드의 저장소 정보"""
    name: str
    owner: RepositoryOwner


class PullRequestEvent(BaseModel):
    """pull_request 이벤트 페이로드 (필요한 필드만 사용)"""
    action: str = ""
    number: int
    before: Optional[str] = None
    after: Optional[str] = None
    repository: EventRepository

    @field_validator('number')
    @classmethod
    def validate_number(cls, v):
        if v <= 0:
            raise ValueError('PR number must be positive')
        return v

    @property
    def owner(self) -> str:
        return self.repository.owner.login

    @property
    def repo(self) -> str:
        return self.repository.name

    @property
    def is_supported(self) -> bool:
        return self.action in SUPPORTED_ACTIONS
