"""FastAPI dependency providers for external collaborators."""

from src.config import settings
from src.core.exceptions import ApiException
from src.core.llm import create_chat_llm
from src.services.github.client import create_github_client
from src.services.github.service import GitHubService
from src.services.reviewer.analyzer import LLMCodeAnalyzer


def get_github_service() -> GitHubService:
    """Build a GitHub service for one request."""
    return GitHubService(create_github_client(settings), settings.summary_marker)


def get_code_analyzer() -> LLMCodeAnalyzer:
    """Build the LLM analyzer for one request."""
    try:
        llm = create_chat_llm(settings)
    except ValueError as e:
        raise ApiException(503, str(e)) from e
    return LLMCodeAnalyzer(llm)
