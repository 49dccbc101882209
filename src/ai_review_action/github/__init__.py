"""
GitHub Integration Layer

This module provides GitHub API integration for pull request diff
retrieval, unified diff parsing and review submission.
"""

from .client import GitHubClient, GitHubAPIError, HostSubmissionError
from .parser import UnifiedDiffParser, ParseError
from .event import load_event

__all__ = [
    'GitHubClient',
    'GitHubAPIError',
    'HostSubmissionError',
    'UnifiedDiffParser',
    'ParseError',
    'load_event',
]
