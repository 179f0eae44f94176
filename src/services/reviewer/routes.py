"""Ad-hoc snippet routes: analysis, documentation and test generation."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from src.core.logging import get_logger
from src.core.schemas.responses import ApiResponse
from src.dependencies import get_code_analyzer
from src.schemas.review import CodeAnalysis, GeneratedDocumentation, GeneratedTests
from src.services.reviewer.analyzer import LLMCodeAnalyzer

logger = get_logger("reviewer.routes")

router = APIRouter()


class AnalyzeCodeRequest(BaseModel):
    """Request schema for single snippet analysis."""

    code: str = Field(min_length=1)
    language: str = Field(min_length=1)
    context: str | None = None


@router.post("/analyze/code", response_model=ApiResponse[CodeAnalysis], response_model_by_alias=False)
async def analyze_code(
    request: AnalyzeCodeRequest,
    analyzer: LLMCodeAnalyzer = Depends(get_code_analyzer),
) -> ApiResponse[CodeAnalysis]:
    """Analyze one code snippet."""
    logger.info(f"Analyzing {request.language} snippet ({len(request.code)} chars)")
    analysis = await analyzer.analyze(request.code, request.language, request.context)
    return ApiResponse(data=analysis)


class GenerateDocumentationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(min_length=1)
    language: str = Field(min_length=1)
    file_path: str | None = Field(default=None, alias="filePath")


class GenerateTestsRequest(BaseModel):
    code: str = Field(min_length=1)
    language: str = Field(min_length=1)
    framework: str | None = None


@router.post(
    "/documentation/generate",
    response_model=ApiResponse[GeneratedDocumentation],
)
async def generate_documentation(
    request: GenerateDocumentationRequest,
    analyzer: LLMCodeAnalyzer = Depends(get_code_analyzer),
) -> ApiResponse[GeneratedDocumentation]:
    """Generate documentation for one code snippet."""
    logger.info(f"Generating documentation for {request.file_path or request.language + ' snippet'}")
    docs = await analyzer.generate_documentation(request.code, request.language, request.file_path)
    return ApiResponse(data=docs)


@router.post(
    "/tests/generate",
    response_model=ApiResponse[GeneratedTests],
    response_model_by_alias=False,
)
async def generate_tests(
    request: GenerateTestsRequest,
    analyzer: LLMCodeAnalyzer = Depends(get_code_analyzer),
) -> ApiResponse[GeneratedTests]:
    """Generate test cases for one code snippet."""
    logger.info(f"Generating {request.framework or 'default'} tests for {request.language} snippet")
    tests = await analyzer.generate_tests(request.code, request.language, request.framework)
    return ApiResponse(data=tests)
