"""GitHub webhook and manual review routes."""

import asyncio

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from src.core.logging import get_logger
from src.core.schemas.responses import ApiResponse
from src.core.security import require_github_signature
from src.dependencies import get_code_analyzer, get_github_service
from src.services.github.schemas import (
    REVIEWED_ACTIONS,
    ManualReviewRequest,
    PingResponse,
    WebhookResponse,
)
from src.services.github.service import GitHubService
from src.services.reviewer.analyzer import LLMCodeAnalyzer
from src.services.reviewer.schemas import ReviewResult
from src.services.reviewer.service import review_pull_request

logger = get_logger("github.routes")

router = APIRouter()


@router.post("/webhook/github")
async def github_webhook(request: Request, background_tasks: BackgroundTasks):
    """Handle GitHub webhook events."""
    event = request.headers.get("X-GitHub-Event")
    signature = request.headers.get("X-Hub-Signature-256", "")
    delivery_id = request.headers.get("X-GitHub-Delivery")

    logger.info(f"Webhook received: event={event}, delivery={delivery_id}")

    body = await request.body()
    require_github_signature(body, signature)

    payload = await request.json()

    if event == "pull_request":
        return await handle_pull_request(payload, background_tasks)
    elif event == "ping":
        return PingResponse(zen=payload.get("zen", ""))
    else:
        logger.info(f"Unhandled event type: {event}")
        return WebhookResponse(message=f"Event {event} not handled")


async def handle_pull_request(payload: dict, background_tasks: BackgroundTasks) -> WebhookResponse:
    """Handle pull_request events.

    Building the GitHub client may exchange App credentials for a token over
    HTTP, so the providers run in a worker thread.
    """
    action = payload.get("action")
    pr = payload.get("pull_request", {})
    repo = payload.get("repository", {}).get("full_name")
    pr_number = pr.get("number")

    logger.info(f"PR event: {action} on {repo}#{pr_number}")

    if action not in REVIEWED_ACTIONS:
        return WebhookResponse(
            message=f"Action {action} not reviewed",
            action=action,
            supported_actions=REVIEWED_ACTIONS,
        )

    github = await asyncio.to_thread(get_github_service)
    analyzer = await asyncio.to_thread(get_code_analyzer)
    background_tasks.add_task(
        run_review,
        repo=repo,
        pr_number=pr_number,
        github=github,
        analyzer=analyzer,
    )

    return WebhookResponse(
        message="Review started",
        pr=f"{repo}#{pr_number}",
        action=action,
    )


async def run_review(
    repo: str,
    pr_number: int,
    github: GitHubService,
    analyzer: LLMCodeAnalyzer,
) -> ReviewResult | None:
    """Run the review in background."""
    try:
        result = await review_pull_request(repo, pr_number, github=github, analyzer=analyzer)
        logger.info(
            f"Review completed: {repo}#{pr_number} score={result.verdict.overall_score} "
            f"published={result.published}"
        )
        return result
    except Exception as e:
        logger.error(f"Review failed for {repo}#{pr_number}: {e}")
        return None


@router.post("/review", response_model=ApiResponse[ReviewResult])
async def manual_review(
    request: ManualReviewRequest,
    github: GitHubService = Depends(get_github_service),
    analyzer: LLMCodeAnalyzer = Depends(get_code_analyzer),
) -> ApiResponse[ReviewResult]:
    """Review a PR on demand and return the verdict."""
    result = await review_pull_request(
        request.repo,
        request.pr_number,
        github=github,
        analyzer=analyzer,
        publish=request.publish,
    )
    return ApiResponse(data=result)
