"""Unified diff parser that recovers source line numbers for each patch line."""

import re
from typing import Iterable

from src.core.logging import get_logger
from src.services.reviewer.schemas import DiffLine, DiffLineKind, FileAnalysisResult, Issue

logger = get_logger("reviewer.patch_parser")

# @@ -old_start[,old_count] +new_start[,new_count] @@
HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def parse_patch(patch: str | None) -> list[DiffLine]:
    """Parse a unified diff patch into line records.

    Added and context lines are numbered in the new file, removed lines in
    the old file. Lines before the first hunk header are ignored. A malformed
    hunk header is skipped together with its body; the rest of the patch is
    still parsed.

    Args:
        patch: Unified diff patch string (may be empty or None)

    Returns:
        Ordered list of DiffLine records
    """
    records: list[DiffLine] = []

    if not patch:
        return records

    old_line = 0
    new_line = 0
    in_hunk = False

    for line in patch.split("\n"):
        if line.startswith("@@"):
            hunk_match = HUNK_HEADER.match(line)
            if hunk_match:
                old_line = int(hunk_match.group(1))
                new_line = int(hunk_match.group(3))
                in_hunk = True
            else:
                logger.debug(f"Skipping malformed hunk header: {line[:80]}")
                in_hunk = False
            continue

        if not in_hunk:
            continue

        if line.startswith("+") and not line.startswith("+++"):
            records.append(DiffLine(line=new_line, kind=DiffLineKind.ADDED, content=line[1:]))
            new_line += 1
        elif line.startswith("-") and not line.startswith("---"):
            records.append(
                DiffLine(line=old_line, old_line=old_line, kind=DiffLineKind.REMOVED, content=line[1:])
            )
            old_line += 1
        elif line.startswith(" "):
            records.append(
                DiffLine(line=new_line, old_line=old_line, kind=DiffLineKind.CONTEXT, content=line[1:])
            )
            old_line += 1
            new_line += 1
        # "\ No newline at end of file" and anything else carries no position

    return records


def parse_patch_line_numbers(patch: str | None) -> set[int]:
    """Extract new-file line numbers of added lines.

    GitHub PR review comments are anchored to lines of the new file, so
    these are the lines an issue can be pinned to.
    """
    return {record.line for record in parse_patch(patch) if record.kind == DiffLineKind.ADDED}


def filter_issues_by_valid_lines(
    results: Iterable[FileAnalysisResult],
    patches: dict[str, str | None],
) -> tuple[list[tuple[str, Issue]], list[tuple[str, Issue]]]:
    """Split issues by whether they point at a changed line.

    Args:
        results: Per-file analysis results
        patches: Dict mapping file path to patch content

    Returns:
        Tuple of (anchored, unanchored) ``(path, issue)`` pairs
    """
    valid_lines_by_file = {path: parse_patch_line_numbers(patch) for path, patch in patches.items()}

    anchored = []
    unanchored = []

    for result in results:
        file_valid_lines = valid_lines_by_file.get(result.path, set())
        for issue in result.issues:
            if isinstance(issue.line, int) and issue.line in file_valid_lines:
                anchored.append((result.path, issue))
            else:
                unanchored.append((result.path, issue))

    return anchored, unanchored
