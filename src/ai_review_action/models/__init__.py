"""
Data Models

AI Review Action의 핵심 데이터 모델들
"""

from .pr_diff import DELETED_FILE_PATH, Change, Chunk, DiffFile
from .review import (
    PullRequestContext,
    ReviewFinding,
    ReviewComment,
    ReviewOutcome,
    ModelReviewItem,
)
from .event import PullRequestEvent

__all__ = [
    "DELETED_FILE_PATH",
    "Change",
    "Chunk",
    "DiffFile",
    "PullRequestContext",
    "ReviewFinding",
    "ReviewComment",
    "ReviewOutcome",
    "ModelReviewItem",
    "PullRequestEvent",
]
