"""
GitHub Comment Formatter

Formats the lint score comment and groups review comments for
logging and submission.
"""

import logging
from typing import Dict, List

from ..models.review import ReviewComment


logger = logging.getLogger(__name__)

LINT_SCORE_TEMPLATE = "The pylint score for this pull request is: {score:.2f}/10"


class GitHubCommentFormatter:
    """
    Formats review output for GitHub PR comments.
    """

    def format_lint_score(self, score: float) -> str:
        """PR-level comment body for the lint score, two decimals."""
        return LINT_SCORE_TEMPLATE.format(score=score)

    def group_by_file(self, comments: List[ReviewComment]) -> Dict[str, List[ReviewComment]]:
        """Group comments by path, keeping first-seen file order."""
        grouped: Dict[str, List[ReviewComment]] = {}
        for comment in comments:
            grouped.setdefault(comment.path, []).append(comment)
        return grouped

    def summarize(self, comments: List[ReviewComment]) -> str:
        """One-line summary used in run logs."""
        grouped = self.group_by_file(comments)
        if not grouped:
            return "no review comments"
        parts = [f"{path} ({len(items)})" for path, items in grouped.items()]
        return f"{len(comments)} review comments: " + ", ".join(parts)
