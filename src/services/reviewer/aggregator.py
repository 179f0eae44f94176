"""Fold per-file results into one verdict."""

from typing import Sequence

from src.services.reviewer.schemas import AggregateVerdict, FileAnalysisResult, Severity


def round_half_up(value: float) -> int:
    """Round non-negative scores with .5 going up, unlike round()."""
    return int(value + 0.5)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def build_summary(file_count: int, critical: int, warnings: int, failed: int, over_limit: int = 0) -> str:
    limit_note = f" {_plural(over_limit, 'file')} over the review limit not analyzed." if over_limit else ""
    if file_count == 0:
        return "No analyzable files changed." + limit_note

    summary = (
        f"Analyzed {_plural(file_count, 'file')}. "
        f"Found {_plural(critical, 'critical issue')} and {_plural(warnings, 'warning')}."
    )
    if failed:
        summary += f" {_plural(failed, 'file')} could not be analyzed."
    return summary + limit_note


def aggregate(
    results: Sequence[FileAnalysisResult],
    over_limit_files: Sequence[str] = (),
) -> AggregateVerdict:
    """Compute the aggregate verdict; input order is preserved.

    The overall score is the unweighted mean of file scores, or 100 when
    nothing was analyzed. Files left out by the per-review cap don't count
    toward the score but are named in the verdict.
    """
    files = list(results)
    issues = [issue for result in files for issue in result.issues]

    critical = sum(1 for issue in issues if issue.severity == Severity.CRITICAL)
    warnings = sum(1 for issue in issues if issue.severity == Severity.WARNING)
    info = sum(1 for issue in issues if issue.severity == Severity.INFO)
    failed_files = [result.path for result in files if result.failed]

    if files:
        overall = round_half_up(sum(result.score for result in files) / len(files))
    else:
        overall = 100

    return AggregateVerdict(
        overall_score=overall,
        total_issues=len(issues),
        critical_count=critical,
        warning_count=warnings,
        info_count=info,
        files=files,
        failed_files=failed_files,
        over_limit_files=list(over_limit_files),
        summary=build_summary(len(files), critical, warnings, len(failed_files), len(over_limit_files)),
    )
