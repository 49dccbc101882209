"""
Anthropic Messages API Client

Minimal chat-completion client over a requests session.
"""

import logging
from typing import Any, Dict, List, Optional
import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_VERSION = "2023-06-01"


class LLMError(Exception):
    """Model API call failed or returned an unusable payload"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AnthropicClient:
    """
    Sends chat messages to the Anthropic Messages API and returns the
    text of the reply.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 120.0,
        session: Optional[requests.Session] = None
    ):
        if not api_key:
            raise ValueError("Anthropic API key is required")

        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request_url(self) -> str:
        if self.base_url.endswith("/v1"):
            return f"{self.base_url}/messages"
        return f"{self.base_url}/v1/messages"

    def _build_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }

    def complete(
        self,
        model: str,
        messages: List[Dict[str, str]],
        temperature: float,
        max_tokens: int
    ) -> str:
        """
        Run one chat completion.

        Args:
            model: Model identifier
            messages: [{"role": ..., "content": ...}] in conversation order
            temperature: Sampling temperature
            max_tokens: Upper bound on the reply length

        Returns:
            Text of the first content block, or "" when it is not text

        Raises:
            LLMError: On transport errors, non-2xx responses or malformed payloads
        """
        payload: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        try:
            response = self.session.post(
                self._request_url(),
                json=payload,
                headers=self._build_headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise LLMError(f"Request to model API failed: {e}")

        if not response.ok:
            raise LLMError(
                f"Model API error: {response.status_code} - {response.text[:500]}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise LLMError(f"Model API returned invalid JSON: {e}")

        content_blocks = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content_blocks, list) or not content_blocks:
            raise LLMError(f"Unexpected model response structure: {data}")

        first = content_blocks[0]
        if isinstance(first, dict) and first.get("type") == "text":
            return first.get("text", "")
        return ""
