"""
Review Formatter

This module provides formatting for the lint score comment and the
review comment summary.
"""

from .github import GitHubCommentFormatter

__all__ = ['GitHubCommentFormatter']
