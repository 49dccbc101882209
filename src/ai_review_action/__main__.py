"""
AI Review Action entry point

Runs one review for the pull request event GitHub Actions provides.

Usage:
    python -m ai_review_action [--config config.yaml] [--event-path event.json]
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .api import AIReviewerAPI
from .config import AppConfig, ConfigManager
from .github.event import load_event


logger = logging.getLogger("ai_review_action")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-review-action",
        description="Review a pull request with an LLM and report its pylint score."
    )
    parser.add_argument("--config", help="YAML config file (default: environment / action inputs)")
    parser.add_argument("--event-path", help="Event payload JSON (default: $GITHUB_EVENT_PATH)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the action; returns the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = AppConfig.from_yaml(args.config) if args.config else AppConfig.from_env()
        ConfigManager(config)
    except (ValueError, FileNotFoundError) as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Error: {e}")
        return 1

    try:
        event = load_event(args.event_path or config.github.event_path or "")
        api = AIReviewerAPI.from_config(config)
        result = asyncio.run(api.run(event))
    except Exception as e:
        logger.exception(f"Error: {e}")
        return 1

    logger.info(f"Run finished with status '{result.status.value}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
