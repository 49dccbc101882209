"""
Main AI Reviewer API

Main interface that orchestrates one review run: from the pull request
event to the posted lint score comment and the batched review.
"""

import logging
import asyncio
from typing import List, Optional, Tuple
from datetime import datetime
from dataclasses import dataclass, field
from enum import Enum

from .config import AppConfig
from .github.client import GitHubClient
from .github.parser import UnifiedDiffParser
from .lint.pylint_score import PylintScoreCollector
from .llm.client import AnthropicClient
from .llm.generator import GenerationConfig, ReviewGenerator
from .llm.prompts import PromptBuilder
from .formatting.github import GitHubCommentFormatter
from .models.event import PullRequestEvent
from .models.pr_diff import DiffFile
from .models.review import PullRequestContext, ReviewComment
from .review.filter import ExclusionFilter
from .review.mapper import CommentMapper


logger = logging.getLogger(__name__)

REVIEW_EVENT = 'COMMENT'


class UnsupportedEventError(Exception):
    """Event action other than opened/synchronize"""
    def __init__(self, action: str, event_name: Optional[str] = None):
        super().__init__(f"Unsupported event: {event_name or 'pull_request'} (action '{action}')")
        self.action = action
        self.event_name = event_name


class EmptyDiffError(Exception):
    """GitHub returned no diff content"""


class RunStatus(str, Enum):
    """Review run states"""
    IDLE = 'idle'
    FETCHED_CONTEXT = 'fetched_context'
    EVENT_DISPATCHED = 'event_dispatched'
    DIFF_OBTAINED = 'diff_obtained'
    FILTERED = 'filtered'
    REVIEWED = 'reviewed'
    LINT_SCORED = 'lint_scored'
    SUBMITTED = 'submitted'
    DONE = 'done'
    ABORTED = 'aborted'


@dataclass
class RunResult:
    """Result of one review run."""
    status: RunStatus
    context: Optional[PullRequestContext] = None
    comments: List[ReviewComment] = field(default_factory=list)
    lint_score: Optional[float] = None
    files_reviewed: int = 0
    chunks_reviewed: int = 0
    failed_chunks: int = 0
    abort_reason: Optional[str] = None
    processing_time: float = 0.0


class AIReviewerAPI:
    """
    Main AI Reviewer API interface.

    Orchestrates the review run:
    1. Fetch PR context and pick the diff source from the event action
    2. Parse the diff and drop excluded files
    3. Review every hunk with the model and map findings to comments
    4. Score the working tree with pylint (concurrently with 3)
    5. Post the lint score and submit the batched review
    """

    def __init__(
        self,
        github_client: GitHubClient,
        review_generator: ReviewGenerator,
        lint_collector: Optional[PylintScoreCollector] = None,
        exclusion_filter: Optional[ExclusionFilter] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        comment_mapper: Optional[CommentMapper] = None,
        diff_parser: Optional[UnifiedDiffParser] = None,
        formatter: Optional[GitHubCommentFormatter] = None,
        event_name: Optional[str] = None
    ):
        self.github_client = github_client
        self.review_generator = review_generator
        self.lint_collector = lint_collector
        self.exclusion_filter = exclusion_filter or ExclusionFilter([])
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.comment_mapper = comment_mapper or CommentMapper()
        self.diff_parser = diff_parser or UnifiedDiffParser()
        self.formatter = formatter or GitHubCommentFormatter()
        self.event_name = event_name
        self.status = RunStatus.IDLE

    @classmethod
    def from_config(cls, config: AppConfig) -> "AIReviewerAPI":
        """Wire every component from the validated configuration."""
        github_client = GitHubClient(
            config.github.token,
            base_url=config.github.api_base_url,
            timeout=config.github.timeout_seconds
        )
        model_client = AnthropicClient(
            config.model.api_key,
            base_url=config.model.api_base_url,
            timeout=config.model.timeout_seconds
        )
        review_generator = ReviewGenerator(
            model_client,
            model_name=config.model.model_name,
            generation_config=GenerationConfig(
                temperature=config.model.temperature,
                max_tokens=config.model.max_tokens
            )
        )

        lint_collector = None
        if config.lint.enabled:
            lint_collector = PylintScoreCollector(
                root=config.lint.workspace,
                excluded_dirs=config.lint.excluded_dirs,
                timeout=config.lint.timeout_seconds
            )

        return cls(
            github_client=github_client,
            review_generator=review_generator,
            lint_collector=lint_collector,
            exclusion_filter=ExclusionFilter.from_config(config.review.exclude),
            prompt_builder=PromptBuilder(language=config.review.language),
            event_name=config.github.event_name,
        )

    def _transition(self, status: RunStatus) -> None:
        logger.debug(f"Run state: {self.status.value} -> {status.value}")
        self.status = status

    async def run(self, event: PullRequestEvent) -> RunResult:
        """
        Execute one review run for a pull request event.

        Args:
            event: Triggering pull_request event

        Returns:
            RunResult; ABORTED for unsupported events and empty diffs

        Raises:
            ParseError: If the diff cannot be parsed
            GitHubAPIError: If fetching or submitting fails
        """
        start_time = datetime.now()
        self.status = RunStatus.IDLE

        context = self.github_client.get_pull_request_context(event.owner, event.repo, event.number)
        self._transition(RunStatus.FETCHED_CONTEXT)

        try:
            diff_text = self._obtain_diff(event, context)
        except (UnsupportedEventError, EmptyDiffError) as e:
            logger.info(str(e))
            self._transition(RunStatus.ABORTED)
            return RunResult(
                status=RunStatus.ABORTED,
                context=context,
                abort_reason=str(e),
                processing_time=(datetime.now() - start_time).total_seconds()
            )

        files = self.exclusion_filter.filter(self.diff_parser.parse(diff_text))
        self._transition(RunStatus.FILTERED)

        (comments, chunks_reviewed, failed_chunks), lint_score = await asyncio.gather(
            asyncio.to_thread(self._review_files, files, context),
            asyncio.to_thread(self._collect_lint_score),
        )
        self._transition(RunStatus.REVIEWED)
        self._transition(RunStatus.LINT_SCORED)

        self._submit(context, comments, lint_score)
        self._transition(RunStatus.SUBMITTED)

        processing_time = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"Review run completed for {context.full_name}#{context.pull_number}: "
            f"{self.formatter.summarize(comments)} ({processing_time:.2f}s)"
        )
        self._transition(RunStatus.DONE)

        return RunResult(
            status=RunStatus.DONE,
            context=context,
            comments=comments,
            lint_score=lint_score,
            files_reviewed=sum(1 for f in files if f.reviewable_path is not None),
            chunks_reviewed=chunks_reviewed,
            failed_chunks=failed_chunks,
            processing_time=processing_time
        )

    def _obtain_diff(self, event: PullRequestEvent, context: PullRequestContext) -> str:
        """Pick the diff source from the event action."""
        if not event.is_supported:
            raise UnsupportedEventError(event.action, self.event_name)
        self._transition(RunStatus.EVENT_DISPATCHED)

        if event.action == 'synchronize':
            if not event.before or not event.after:
                raise EmptyDiffError("Synchronize event without before/after commits")
            diff_text = self.github_client.compare_commits(
                context.owner, context.repository, event.before, event.after
            )
        else:
            diff_text = self.github_client.get_pull_request_diff(
                context.owner, context.repository, context.pull_number
            )

        if not diff_text or not diff_text.strip():
            raise EmptyDiffError("No diff found")

        self._transition(RunStatus.DIFF_OBTAINED)
        return diff_text

    def _review_files(
        self,
        files: List[DiffFile],
        context: PullRequestContext
    ) -> Tuple[List[ReviewComment], int, int]:
        """Review every hunk of every reviewable file, in diff order."""
        comments: List[ReviewComment] = []
        chunks_reviewed = 0
        failed_chunks = 0

        for diff_file in files:
            if diff_file.reviewable_path is None:
                logger.debug(f"Skipping deleted file {diff_file.source_path}")
                continue

            logger.debug(
                f"Reviewing {diff_file.target_path} "
                f"(+{diff_file.additions}/-{diff_file.deletions}, {len(diff_file.chunks)} hunks)"
            )
            for chunk in diff_file.chunks:
                prompt = self.prompt_builder.build_review_prompt(diff_file, chunk, context)
                outcome = self.review_generator.review(prompt)
                chunks_reviewed += 1
                if not outcome.ok:
                    failed_chunks += 1
                    logger.warning(f"No review for {diff_file.target_path} {chunk.content}: {outcome.error}")
                comments.extend(self.comment_mapper.map(diff_file, chunk, outcome.findings))

        logger.info(f"Reviewed {chunks_reviewed} hunks ({failed_chunks} failed), {len(comments)} comments")
        return comments, chunks_reviewed, failed_chunks

    def _collect_lint_score(self) -> Optional[float]:
        if self.lint_collector is None:
            return None
        try:
            return self.lint_collector.collect()
        except Exception as e:
            logger.error(f"Lint scoring failed: {e}")
            return None

    def _submit(
        self,
        context: PullRequestContext,
        comments: List[ReviewComment],
        lint_score: Optional[float]
    ) -> None:
        """Post the lint score comment and the batched review."""
        if lint_score is not None:
            self.github_client.create_issue_comment(
                context.owner,
                context.repository,
                context.pull_number,
                self.formatter.format_lint_score(lint_score)
            )
        else:
            logger.warning("No lint score available; skipping lint comment")

        if comments:
            self.github_client.create_review(
                context.owner,
                context.repository,
                context.pull_number,
                comments,
                event=REVIEW_EVENT
            )
