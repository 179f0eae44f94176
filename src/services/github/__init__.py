"""GitHub service."""

from src.services.github.client import create_github_client
from src.services.github.comment import render_review_comment
from src.services.github.service import GitHubService

__all__ = [
    "GitHubService",
    "create_github_client",
    "render_review_comment",
]
