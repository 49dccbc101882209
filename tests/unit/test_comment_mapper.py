"""
Unit tests for mapping findings onto review comments.
"""

from ai_review_action.models.pr_diff import DELETED_FILE_PATH, Chunk, DiffFile
from ai_review_action.models.review import ReviewComment, ReviewFinding
from ai_review_action.review.mapper import CommentMapper


CHUNK = Chunk(content='@@ -1 +1 @@', old_start=1, old_lines=1, new_start=1, new_lines=1)


class TestCommentMapper:
    """Unit tests for CommentMapper."""

    def test_maps_each_finding(self):
        findings = [
            ReviewFinding(line_number='3', review_comment='First'),
            ReviewFinding(line_number='12', review_comment='Second'),
        ]

        comments = CommentMapper().map(DiffFile('a.py', 'a.py'), CHUNK, findings)

        assert comments == [
            ReviewComment(body='First', path='a.py', line=3),
            ReviewComment(body='Second', path='a.py', line=12),
        ]

    def test_line_outside_hunk_is_kept(self):
        findings = [ReviewFinding(line_number='999', review_comment='Far away')]

        comments = CommentMapper().map(DiffFile('a.py', 'a.py'), CHUNK, findings)

        assert comments[0].line == 999

    def test_no_findings(self):
        assert CommentMapper().map(DiffFile('a.py', 'a.py'), CHUNK, []) == []

    def test_deleted_or_pathless_files_produce_nothing(self):
        findings = [ReviewFinding(line_number='1', review_comment='x')]

        assert CommentMapper().map(DiffFile('a.py', DELETED_FILE_PATH), CHUNK, findings) == []
        assert CommentMapper().map(DiffFile('a.py', None), CHUNK, findings) == []
