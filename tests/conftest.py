"""Shared fixtures and test doubles."""

import asyncio

import pytest

from src.core.exceptions import FileContentNotFoundError
from src.schemas.review import CodeAnalysis
from src.services.reviewer.schemas import ChangedFile, ChangeStatus


def make_file(path: str, status: ChangeStatus = ChangeStatus.MODIFIED, patch: str | None = None) -> ChangedFile:
    return ChangedFile(path=path, status=status, additions=1, deletions=0, changes=1, patch=patch, ref="abc123")


class StubAnalyzer:
    """Returns canned analyses keyed by the path found in the context label."""

    def __init__(self, responses: dict | None = None, default_score: float = 80):
        self.responses = responses or {}
        self.default_score = default_score
        self.calls: list[tuple[str, str, str]] = []
        self.call_times: list[float] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def analyze(self, code: str, language: str, context: str) -> CodeAnalysis:
        self.calls.append((code, language, context))
        self.call_times.append(asyncio.get_running_loop().time())
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            for path, response in self.responses.items():
                if path in context:
                    if isinstance(response, Exception):
                        raise response
                    return response
            return CodeAnalysis(score=self.default_score, summary="Looks fine")
        finally:
            self.in_flight -= 1


class StubFetcher:
    """In-memory file contents; missing paths raise FileContentNotFoundError."""

    def __init__(self, contents: dict[str, str]):
        self.contents = contents
        self.requests: list[tuple[str, str, str]] = []

    async def fetch_file_content(self, repo: str, path: str, ref: str) -> str:
        self.requests.append((repo, path, ref))
        if path not in self.contents:
            raise FileContentNotFoundError(path, ref)
        return self.contents[path]


@pytest.fixture
def stub_analyzer():
    return StubAnalyzer()
