"""
AI Review Action

GitHub Pull Request 자동 코드 리뷰 및 pylint 점수 리포트 액션
"""

__version__ = "1.0.0"

from .api import AIReviewerAPI, RunResult, RunStatus

__all__ = ["AIReviewerAPI", "RunResult", "RunStatus"]
