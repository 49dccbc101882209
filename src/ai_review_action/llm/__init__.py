"""
LLM Review Engine

This module provides the review prompt, the Anthropic chat client and
the resilient model-reply parsing used for per-hunk reviews.
"""

from .prompts import PromptBuilder
from .client import AnthropicClient, LLMError
from .generator import ReviewGenerator, GenerationConfig, ModelResponseError

__all__ = [
    'PromptBuilder',
    'AnthropicClient',
    'LLMError',
    'ReviewGenerator',
    'GenerationConfig',
    'ModelResponseError',
]
