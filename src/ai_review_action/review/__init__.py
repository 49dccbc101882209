"""
Review Pipeline Helpers

This module provides exclusion filtering of parsed diff files and
mapping of model findings to review comments.
"""

from .filter import ExclusionFilter, parse_patterns
from .mapper import CommentMapper

__all__ = ['ExclusionFilter', 'parse_patterns', 'CommentMapper']
