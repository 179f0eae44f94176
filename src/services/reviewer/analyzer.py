"""LLM-backed code analysis capability."""

import json
from typing import TypeVar

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.core.exceptions import AnalysisError
from src.core.logging import get_logger
from src.core.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    DOCUMENTATION_SYSTEM_PROMPT,
    TEST_GENERATION_SYSTEM_PROMPT,
    render_code_analysis_prompt,
    render_documentation_prompt,
    render_test_generation_prompt,
)
from src.schemas.review import CodeAnalysis, GeneratedDocumentation, GeneratedTests

logger = get_logger("reviewer.analyzer")

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_json_reply(content: str, schema: type[ModelT], label: str) -> ModelT:
    """Extract the JSON object in an LLM reply and validate it against ``schema``.

    Raises:
        AnalysisError: If the reply is empty, has no JSON object, or the
            object doesn't match the expected shape
    """
    if not content or not content.strip():
        raise AnalysisError("empty response from model")

    json_start = content.find("{")
    json_end = content.rfind("}") + 1
    if json_start == -1 or json_end <= json_start:
        raise AnalysisError("no JSON object in model response")

    try:
        payload = json.loads(content[json_start:json_end])
    except json.JSONDecodeError as e:
        raise AnalysisError(f"invalid JSON in model response: {e}") from e

    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise AnalysisError(f"malformed {label}: {e.error_count()} validation error(s)") from e


def parse_analysis_response(content: str) -> CodeAnalysis:
    return parse_json_reply(content, CodeAnalysis, "analysis")


class LLMCodeAnalyzer:
    """Snippet-level LLM capabilities with an explicitly provided chat model.

    ``analyze`` is the per-file call the review pipeline makes; the
    generators back the ad-hoc endpoints.
    """

    def __init__(self, llm: BaseChatModel) -> None:
        self.llm = llm

    async def _complete(self, system_prompt: str, prompt: str) -> str:
        messages = [SystemMessage(content=system_prompt), HumanMessage(content=prompt)]
        response = await self.llm.ainvoke(messages)
        return response.content if isinstance(response.content, str) else str(response.content)

    async def analyze(self, code: str, language: str, context: str | None = None) -> CodeAnalysis:
        content = await self._complete(ANALYSIS_SYSTEM_PROMPT, render_code_analysis_prompt(code, language, context))

        analysis = parse_analysis_response(content)
        logger.debug(f"Analysis for {context or language}: score={analysis.score}, issues={len(analysis.issues)}")
        return analysis

    async def generate_documentation(
        self, code: str, language: str, file_path: str | None = None
    ) -> GeneratedDocumentation:
        content = await self._complete(
            DOCUMENTATION_SYSTEM_PROMPT, render_documentation_prompt(code, language, file_path)
        )
        return parse_json_reply(content, GeneratedDocumentation, "documentation")

    async def generate_tests(self, code: str, language: str, framework: str | None = None) -> GeneratedTests:
        content = await self._complete(
            TEST_GENERATION_SYSTEM_PROMPT, render_test_generation_prompt(code, language, framework)
        )
        tests = parse_json_reply(content, GeneratedTests, "test suggestions")
        logger.debug(f"Generated {len(tests.test_cases)} test cases for {language} snippet")
        return tests
