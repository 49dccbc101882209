"""
Review Generator

Sends a review prompt to the chat model and coerces the free-form
reply into review findings. A bad reply or a failed call never
raises; it becomes a failed ReviewOutcome with no findings.
"""

import json
import logging
import re
from typing import Any, List, Optional
from dataclasses import dataclass, replace

from pydantic import ValidationError

from ..models.review import ModelReviewItem, ReviewFinding, ReviewOutcome
from .client import AnthropicClient


logger = logging.getLogger(__name__)

CONTROL_CHARACTERS = re.compile('[\u0000-\u001f\u007f-\u009f]')


class ModelResponseError(Exception):
    """Model reply could not be parsed, even after the recovery pass"""


@dataclass(frozen=True)
class GenerationConfig:
    """Sampling configuration for review generation."""
    temperature: float = 0.2
    max_tokens: int = 700


def clean_model_output(content: str) -> str:
    """
    Recovery pass applied to a reply that is not valid JSON.

    Strips C0/C1 control characters, then escapes newline, carriage
    return, tab, form feed and double quotes, and unescapes \\'.
    """
    cleaned = CONTROL_CHARACTERS.sub('', content)
    cleaned = (
        cleaned
        .replace('\n', '\\n')
        .replace('\r', '\\r')
        .replace('\t', '\\t')
        .replace('\f', '\\f')
        .replace('"', '\\"')
        .replace("\\'", "'")
    )
    return cleaned


def sanitize_comment(comment: str) -> str:
    """Round-trip a comment through JSON before it goes to the host API."""
    return json.loads(json.dumps(comment))


def load_model_json(content: str) -> Any:
    """
    Parse the model reply, retrying once after the recovery pass.

    Raises:
        ModelResponseError: If both attempts fail
    """
    try:
        return json.loads(content)
    except ValueError as first_error:
        logger.warning(f"Error parsing model JSON: {first_error}")

    cleaned = clean_model_output(content)
    logger.debug(f"Cleaned content: {cleaned}")
    try:
        return json.loads(cleaned)
    except ValueError as second_error:
        logger.error(f"Error parsing cleaned JSON: {second_error}")
        raise ModelResponseError(f"Unparseable model reply: {second_error}") from second_error


def parse_findings(content: str) -> List[ReviewFinding]:
    """
    Turn a model reply into findings.

    A reply that parses but has no "reviews" array means no findings.
    Records failing validation are dropped one by one.

    Raises:
        ModelResponseError: If the reply is not JSON even after recovery
    """
    data = load_model_json(content)

    reviews = data.get('reviews') if isinstance(data, dict) else None
    if not isinstance(reviews, list):
        logger.warning(f"Parsed content does not contain a 'reviews' array: {data!r}")
        return []

    findings = []
    for index, item in enumerate(reviews):
        if not isinstance(item, dict):
            logger.warning(f"Skipping review #{index}: not an object")
            continue
        try:
            record = ModelReviewItem(**item)
        except ValidationError as e:
            logger.warning(f"Skipping review #{index}: {e}")
            continue
        finding = record.to_finding()
        findings.append(replace(finding, review_comment=sanitize_comment(finding.review_comment)))

    return findings


class ReviewGenerator:
    """
    Model client adapter for per-hunk reviews.

    Uses fixed low-temperature sampling and a bounded reply length.
    """

    def __init__(
        self,
        client: AnthropicClient,
        model_name: str,
        generation_config: Optional[GenerationConfig] = None
    ):
        """
        Initialize review generator.

        Args:
            client: Chat-completion client
            model_name: Model identifier sent with every request
            generation_config: Sampling settings
        """
        self.client = client
        self.model_name = model_name
        self.generation_config = generation_config or GenerationConfig()

    def review(self, prompt: str) -> ReviewOutcome:
        """
        Review one prompt.

        Args:
            prompt: Complete review prompt

        Returns:
            ReviewOutcome; failed calls and unparseable replies carry
            an error and no findings
        """
        try:
            content = self.client.complete(
                model=self.model_name,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.generation_config.temperature,
                max_tokens=self.generation_config.max_tokens,
            )
        except Exception as e:
            logger.error(f"Error in model API call: {e}")
            return ReviewOutcome.failure(str(e))

        try:
            findings = parse_findings(content)
        except ModelResponseError as e:
            logger.error(f"Discarding model reply: {e}")
            return ReviewOutcome.failure(str(e))

        logger.debug(f"Model returned {len(findings)} findings")
        return ReviewOutcome.success(findings)
