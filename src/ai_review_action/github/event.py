"""
Event Payload Loader

Reads the pull_request event payload GitHub Actions writes to
GITHUB_EVENT_PATH.
"""

import json
import logging
from pathlib import Path

from ..models.event import PullRequestEvent


logger = logging.getLogger(__name__)


def load_event(event_path: str) -> PullRequestEvent:
    """
    Load and validate the triggering event payload.

    Args:
        event_path: Path of the JSON event file

    Returns:
        Validated PullRequestEvent

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the payload is not valid JSON or lacks required fields
    """
    path = Path(event_path)
    if not event_path or not path.is_file():
        raise FileNotFoundError(f"Event payload not found: {event_path!r}")

    with open(path, 'r', encoding='utf-8') as f:
        payload = json.load(f)

    event = PullRequestEvent(**payload)
    logger.info(f"Loaded '{event.action}' event for {event.owner}/{event.repo}#{event.number}")
    return event
