"""Reviewer service - orchestration layer."""

import asyncio

from src.config import settings
from src.core.logging import get_logger
from src.services.github.client import split_repo
from src.services.github.comment import render_review_comment
from src.services.github.service import GitHubService
from src.services.reviewer.aggregator import aggregate
from src.services.reviewer.orchestrator import AnalysisOrchestrator, CodeAnalyzer
from src.services.reviewer.schemas import ReviewResult

logger = get_logger("reviewer.service")


async def review_pull_request(
    repo: str,
    pr_number: int,
    *,
    github: GitHubService,
    analyzer: CodeAnalyzer,
    publish: bool = True,
    cancel_event: asyncio.Event | None = None,
) -> ReviewResult:
    """Review a pull request and optionally publish the summary comment.

    An invalid ``repo`` raises ``ValidationError`` before anything is
    fetched. Fetch failures propagate to the caller. Per-file failures end up as
    placeholder results. A publish failure is logged and reported through
    ``ReviewResult.published``.
    """
    split_repo(repo)
    logger.info(f"Starting review: {repo}#{pr_number}")

    change_set = await github.fetch_changed_files(repo, pr_number)
    pr = change_set.pull_request
    files = change_set.files

    orchestrator = AnalysisOrchestrator(
        analyzer,
        github,
        pacing_interval=settings.pacing_interval_seconds,
        max_content_chars=settings.max_content_chars,
        max_files=settings.max_files_per_review,
        cancel_event=cancel_event,
    )
    results = await orchestrator.run(repo, files, context_prefix=f"PR #{pr.number}")

    verdict = aggregate(results, orchestrator.over_limit)
    logger.info(
        f"Review computed for {repo}#{pr_number}: score={verdict.overall_score}, "
        f"issues={verdict.total_issues}, failed={len(verdict.failed_files)}"
    )

    published = False
    if publish:
        body = render_review_comment(
            verdict,
            settings.summary_marker,
            pull_request=pr,
            patches={f.path: f.patch for f in files},
        )
        try:
            await github.publish(repo, pr_number, body)
            published = True
        except Exception as e:
            logger.error(f"Failed to publish review summary: {e}")

    return ReviewResult(
        repo=repo,
        pr_number=pr_number,
        verdict=verdict,
        published=published,
        cancelled=orchestrator.cancelled,
    )
