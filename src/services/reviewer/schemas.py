"""Pydantic schemas for the review pipeline."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.review import CodeAnalysisIssue


class ChangeStatus(str, Enum):
    """Change status of a file in a pull request."""

    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
    RENAMED = "renamed"


class ChangedFile(BaseModel):
    """One file touched by a pull request."""

    model_config = ConfigDict(frozen=True)

    path: str
    status: ChangeStatus
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: str | None = None
    ref: str
    previous_path: str | None = None


class PullRequestInfo(BaseModel):
    """Pull request metadata."""

    number: int
    title: str
    body: str = ""
    state: str = "open"
    author: str | None = None
    html_url: str | None = None
    head_ref: str
    head_sha: str
    base_ref: str
    base_sha: str


class ChangeSet(BaseModel):
    """Pull request metadata plus its changed files, in fetch order."""

    pull_request: PullRequestInfo
    files: list[ChangedFile] = []


class DiffLineKind(str, Enum):
    """Kind of a line inside a diff hunk."""

    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


class DiffLine(BaseModel):
    """A single line of a parsed patch.

    ``line`` is the new-file number for added and context lines and the
    old-file number for removed lines. ``old_line`` is set for context and
    removed lines.
    """

    model_config = ConfigDict(frozen=True)

    line: int
    old_line: int | None = None
    kind: DiffLineKind
    content: str


class Severity(str, Enum):
    """Issue severity."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class Issue(BaseModel):
    """A problem reported for a file."""

    severity: Severity
    category: str = "general"
    message: str
    line: int | None = None
    suggestion: str | None = None

    @classmethod
    def from_analysis(cls, issue: CodeAnalysisIssue) -> "Issue":
        return cls(
            severity=Severity(issue.severity),
            category=issue.category,
            message=issue.message,
            line=issue.line,
            suggestion=issue.suggestion,
        )


class FileAnalysisResult(BaseModel):
    """Outcome of analyzing one file, or the placeholder for a failed one."""

    path: str
    language: str
    status: ChangeStatus
    issues: list[Issue] = []
    score: int = Field(ge=0, le=100)
    summary: str = ""
    failed: bool = False

    @classmethod
    def placeholder(
        cls,
        path: str,
        language: str,
        status: ChangeStatus,
        reason: str,
    ) -> "FileAnalysisResult":
        """Build the stand-in result for a file that could not be analyzed."""
        return cls(
            path=path,
            language=language,
            status=status,
            issues=[],
            score=0,
            summary=f"Analysis failed: {reason}",
            failed=True,
        )


class AggregateVerdict(BaseModel):
    """Combined verdict over every file in one run."""

    overall_score: int
    total_issues: int
    critical_count: int
    warning_count: int
    info_count: int = 0
    files: list[FileAnalysisResult] = []
    failed_files: list[str] = []
    over_limit_files: list[str] = []
    summary: str


class ReviewResult(BaseModel):
    """Result of a PR review run."""

    success: bool = True
    repo: str
    pr_number: int
    verdict: AggregateVerdict
    published: bool = False
    cancelled: bool = False
