"""Schemas for the LLM capabilities' responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CodeAnalysisIssue(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    severity: Literal["critical", "warning", "info"]
    category: str = Field(default="general", alias="type")
    message: str
    line: int | None = None
    suggestion: str | None = None

    @field_validator("severity", mode="before")
    @classmethod
    def _lower_severity(cls, value):
        return value.lower() if isinstance(value, str) else value


class CodeAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    issues: list[CodeAnalysisIssue] = []
    score: float = Field(alias="qualityScore", ge=0, le=100)
    summary: str = ""
    improvements: list[str] = []


class DocumentedParameter(BaseModel):
    name: str
    type: str = ""
    description: str = ""


class GeneratedDocumentation(BaseModel):
    description: str
    parameters: list[DocumentedParameter] = []
    returns: str | None = None
    examples: list[str] = []
    comments: str = ""


class GeneratedTestCase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    test_code: str = Field(alias="testCode")
    expected_result: str = Field(default="", alias="expectedResult")


class CoverageEstimate(BaseModel):
    """Estimated coverage percentages reported by the model."""

    model_config = ConfigDict(populate_by_name=True)

    unit: float = Field(default=0, ge=0, le=100)
    integration: float = Field(default=0, ge=0, le=100)
    edge_cases: float = Field(default=0, ge=0, alias="edgeCases")


class GeneratedTests(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    test_cases: list[GeneratedTestCase] = Field(default=[], alias="testCases")
    coverage: CoverageEstimate = CoverageEstimate()
