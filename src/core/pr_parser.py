"""Parse PR references from command-line text."""

import re
from dataclasses import dataclass
from typing import Optional

from src.config import settings


@dataclass
class PRReference:
    """Parsed PR reference."""

    owner: str
    repo: str
    pr_number: int

    @property
    def full_name(self) -> str:
        """Repository identifier in ``owner/repo`` form."""
        return f"{self.owner}/{self.repo}"


def _with_default_repo(pr_number: str) -> Optional[PRReference]:
    if not settings.default_repo_owner or not settings.default_repo_name:
        return None
    return PRReference(
        owner=settings.default_repo_owner,
        repo=settings.default_repo_name,
        pr_number=int(pr_number),
    )


def parse_pr_reference(text: str) -> Optional[PRReference]:
    """
    Parse PR reference from text.

    Supported formats:
    - https://github.com/owner/repo/pull/123 -> full URL
    - owner/repo#123 -> specific repo
    - #123, "review 123", "PR 123" -> uses default owner/repo from settings
    """
    url_match = re.search(r"https?://github\.com/([^/\s]+)/([^/\s]+)/pull/(\d+)", text)
    if url_match:
        return PRReference(
            owner=url_match.group(1),
            repo=url_match.group(2),
            pr_number=int(url_match.group(3)),
        )

    full_ref_match = re.search(r"([a-zA-Z0-9_-]+)/([a-zA-Z0-9_.-]+)#(\d+)", text)
    if full_ref_match:
        return PRReference(
            owner=full_ref_match.group(1),
            repo=full_ref_match.group(2),
            pr_number=int(full_ref_match.group(3)),
        )

    short_match = re.search(r"(?:^|\s)#(\d+)(?:\s|$)", text)
    if short_match:
        return _with_default_repo(short_match.group(1))

    number_match = re.search(r"(?:review|pr|pull\s*request)\s+(\d+)", text, re.IGNORECASE)
    if number_match:
        return _with_default_repo(number_match.group(1))

    return None
