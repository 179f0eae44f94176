"""GitHub service - business logic layer."""

import asyncio

from github import Github

from src.core.logging import get_logger
from src.services.github.client import (
    fetch_change_set,
    fetch_file_contents,
    upsert_issue_comment,
)
from src.services.reviewer.schemas import ChangeSet

logger = get_logger("github.service")


class GitHubService:
    """Async facade over a PyGithub client.

    PyGithub is blocking, so every call runs in a worker thread to keep the
    event loop free.
    """

    def __init__(self, client: Github, summary_marker: str) -> None:
        self.client = client
        self.summary_marker = summary_marker

    async def fetch_changed_files(self, repo: str, pr_number: int) -> ChangeSet:
        """Get PR metadata and changed files."""
        logger.info(f"Fetching PR: {repo}#{pr_number}")
        change_set = await asyncio.to_thread(fetch_change_set, self.client, repo, pr_number)
        logger.info(f"Found {len(change_set.files)} files in PR")
        return change_set

    async def fetch_file_content(self, repo: str, path: str, ref: str) -> str:
        """Get full file contents at a ref."""
        logger.debug(f"Fetching file: {repo}/{path}@{ref}")
        return await asyncio.to_thread(fetch_file_contents, self.client, repo, path, ref)

    async def publish(self, repo: str, pr_number: int, body: str) -> str:
        """Post or update the single summary comment for this PR."""
        if self.summary_marker not in body:
            body = f"{self.summary_marker}\n{body}"
        return await asyncio.to_thread(
            upsert_issue_comment, self.client, repo, pr_number, body, self.summary_marker
        )
