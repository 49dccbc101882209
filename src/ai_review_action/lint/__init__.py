"""
Lint Scoring

This module provides the best-effort pylint quality score reported on
each pull request.
"""

from .pylint_score import PylintScoreCollector, LinterExecutionError, parse_score

__all__ = ['PylintScoreCollector', 'LinterExecutionError', 'parse_score']
