"""Render the aggregate verdict as a PR comment body."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from src.services.reviewer.patch_parser import filter_issues_by_valid_lines
from src.services.reviewer.schemas import AggregateVerdict, PullRequestInfo

TEMPLATES_DIR = Path(__file__).parent / "templates"
_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

MAX_ISSUES_PER_FILE = 5

SEVERITY_EMOJI = {"critical": "🔴", "warning": "⚠️", "info": "ℹ️"}
STATUS_EMOJI = {"added": "➕", "modified": "📝", "renamed": "🔀", "removed": "🗑️"}


def render_review_comment(
    verdict: AggregateVerdict,
    marker: str,
    pull_request: PullRequestInfo | None = None,
    patches: dict[str, str | None] | None = None,
) -> str:
    """Render the summary comment.

    Args:
        verdict: Aggregate verdict for the run
        marker: Hidden marker the publisher uses to find this comment again
        pull_request: Optional PR metadata for the header
        patches: Optional path -> patch map; issues on added lines are flagged
            and counted

    Returns:
        Markdown comment body
    """
    anchored, _ = filter_issues_by_valid_lines(verdict.files, patches or {})
    on_changed_lines = {(path, issue.line) for path, issue in anchored}

    template = _env.get_template("review_comment.md.jinja2")
    return template.render(
        marker=marker,
        verdict=verdict,
        pull_request=pull_request,
        on_changed_lines=on_changed_lines,
        has_patches=bool(patches),
        changed_issue_count=len(anchored),
        max_issues=MAX_ISSUES_PER_FILE,
        severity_emoji=SEVERITY_EMOJI,
        status_emoji=STATUS_EMOJI,
    )
