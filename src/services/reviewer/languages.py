"""File eligibility and language detection by extension."""

from pathlib import PurePosixPath

from src.services.reviewer.schemas import ChangedFile, ChangeStatus

LANGUAGE_BY_EXTENSION = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".py": "python",
    ".java": "java",
    ".go": "go",
    ".rs": "rust",
    ".cpp": "cpp",
    ".c": "c",
    ".cs": "csharp",
    ".php": "php",
    ".rb": "ruby",
    ".swift": "swift",
    ".kt": "kotlin",
    ".vue": "vue",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".less": "less",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def detect_language(path: str) -> str | None:
    """Return the language tag for a path, or None if it isn't recognized."""
    return LANGUAGE_BY_EXTENSION.get(PurePosixPath(path).suffix.lower())


def is_reviewable(changed_file: ChangedFile) -> bool:
    """Removed files and unrecognized extensions are never analyzed."""
    if changed_file.status == ChangeStatus.REMOVED:
        return False
    return detect_language(changed_file.path) is not None
