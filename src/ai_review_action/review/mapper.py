"""
Comment Mapper

Turns model findings for a hunk into line-anchored review comments.
"""

import logging
from typing import List

from ..models.pr_diff import Chunk, DiffFile
from ..models.review import ReviewComment, ReviewFinding


logger = logging.getLogger(__name__)


class CommentMapper:
    """
    Maps ReviewFinding records onto the reviewed file.

    Line numbers are taken from the model as-is; they are not checked
    against the hunk's line range.
    """

    def map(self, diff_file: DiffFile, chunk: Chunk, findings: List[ReviewFinding]) -> List[ReviewComment]:
        path = diff_file.reviewable_path
        if path is None:
            return []

        comments = []
        for finding in findings:
            comments.append(ReviewComment(
                body=finding.review_comment,
                path=path,
                line=int(finding.line_number),
            ))

        if comments:
            logger.debug(f"Mapped {len(comments)} comments for {path} {chunk.content}")
        return comments
