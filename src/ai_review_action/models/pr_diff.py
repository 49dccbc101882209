"""
PR Diff Data Models

Unified diff 파싱 결과를 담는 데이터 모델들
"""

from dataclasses import dataclass, field
from typing import List, Optional


# Target path git uses for files that no longer exist after the change
DELETED_FILE_PATH = "/dev/null"

CHANGE_TYPES = {'add', 'del', 'normal'}


@dataclass
class Change:
    """Hunk 안의 개별 라인 변경"""
    type: str  # 'add', 'del', 'normal'
    content: str
    old_line_number: Optional[int] = None
    new_line_number: Optional[int] = None

    def __post_init__(self):
        """데이터 검증"""
        if self.type not in CHANGE_TYPES:
            raise ValueError(f"Invalid change type: {self.type}")
        if self.type == 'add' and self.new_line_number is None:
            raise ValueError("Added lines need a new-file line number")
        if self.type == 'del' and self.old_line_number is None:
            raise ValueError("Deleted lines need an old-file line number")

    @property
    def line_number(self) -> int:
        """코멘트 앵커로 쓰는 라인 번호 (삭제 라인은 이전 파일 기준)"""
        if self.type == 'del':
            return self.old_line_number
        return self.new_line_number


@dataclass
class Chunk:
    """Diff hunk"""
    content: str  # hunk header, e.g. "@@ -1,3 +1,4 @@ def main():"
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    changes: List[Change] = field(default_factory=list)

    def __post_init__(self):
        """데이터 검증"""
        if self.old_start < 0 or self.new_start < 0:
            raise ValueError("Line numbers must be non-negative")
        if self.old_lines < 0 or self.new_lines < 0:
            raise ValueError("Line counts must be non-negative")

    @property
    def added_lines(self) -> List[Change]:
        return [c for c in self.changes if c.type == 'add']

    @property
    def removed_lines(self) -> List[Change]:
        return [c for c in self.changes if c.type == 'del']


@dataclass
class DiffFile:
    """Diff 안의 파일 하나"""
    source_path: Optional[str]
    target_path: Optional[str]
    chunks: List[Chunk] = field(default_factory=list)
    is_new: bool = False
    is_binary: bool = False

    @property
    def is_deleted(self) -> bool:
        """삭제된 파일 여부"""
        return self.target_path == DELETED_FILE_PATH

    @property
    def reviewable_path(self) -> Optional[str]:
        """리뷰 코멘트를 달 수 있는 경로, 없으면 None"""
        if not self.target_path or self.is_deleted:
            return None
        return self.target_path

    @property
    def additions(self) -> int:
        return sum(len(chunk.added_lines) for chunk in self.chunks)

    @property
    def deletions(self) -> int:
        return sum(len(chunk.removed_lines) for chunk in self.chunks)
