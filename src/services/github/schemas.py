"""Pydantic schemas for GitHub routes."""

from pydantic import BaseModel, Field

REVIEWED_ACTIONS = ["opened", "synchronize", "reopened"]


class ManualReviewRequest(BaseModel):
    """Request schema for manual PR review trigger."""

    repo: str = Field(pattern=r"^[\w.-]+/[\w.-]+$")
    pr_number: int = Field(gt=0)
    publish: bool = True


class WebhookResponse(BaseModel):
    """Response schema for webhook events."""

    message: str
    pr: str | None = None
    action: str | None = None
    supported_actions: list[str] | None = None


class PingResponse(BaseModel):
    """Response schema for GitHub ping event."""

    message: str = "pong"
    zen: str = ""
