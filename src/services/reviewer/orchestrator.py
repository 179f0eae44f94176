"""Sequential, paced per-file analysis with per-file failure isolation."""

import asyncio
from typing import Protocol

from src.core.exceptions import AnalysisError
from src.core.logging import get_logger
from src.schemas.review import CodeAnalysis
from src.services.reviewer.aggregator import round_half_up
from src.services.reviewer.languages import detect_language, is_reviewable
from src.services.reviewer.schemas import ChangedFile, FileAnalysisResult, Issue

logger = get_logger("reviewer.orchestrator")


class CodeAnalyzer(Protocol):
    async def analyze(self, code: str, language: str, context: str) -> CodeAnalysis: ...


class ContentFetcher(Protocol):
    async def fetch_file_content(self, repo: str, path: str, ref: str) -> str: ...


def build_context_label(changed_file: ChangedFile, prefix: str | None = None) -> str:
    """Deterministic context string sent along with the code."""
    label = f"{changed_file.path} ({changed_file.status.value})"
    return f"{prefix}: {label}" if prefix else label


class AnalysisOrchestrator:
    """Runs one analysis call per eligible file, strictly one at a time.

    An instance owns the accumulating result list for exactly one run.
    The optional ``max_files`` cap applies to eligible files only; paths past
    it are kept in ``over_limit``.
    Between files it waits ``pacing_interval`` seconds; the wait and the
    loop both stop as soon as the cancel token is set.
    """

    def __init__(
        self,
        analyzer: CodeAnalyzer,
        content_fetcher: ContentFetcher,
        *,
        pacing_interval: float = 0.5,
        max_content_chars: int = 50_000,
        max_files: int | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        self.analyzer = analyzer
        self.content_fetcher = content_fetcher
        self.pacing_interval = pacing_interval
        self.max_content_chars = max_content_chars
        self.max_files = max_files
        self.cancel_event = cancel_event or asyncio.Event()
        self.cancelled = False
        self.over_limit: list[str] = []
        self._results: list[FileAnalysisResult] = []
        self._started = False

    @property
    def results(self) -> list[FileAnalysisResult]:
        """Copy of the results accumulated so far."""
        return list(self._results)

    def cancel(self) -> None:
        """Stop submitting files; the current call finishes."""
        self.cancel_event.set()

    async def run(
        self,
        repo: str,
        files: list[ChangedFile],
        *,
        context_prefix: str | None = None,
    ) -> list[FileAnalysisResult]:
        """Analyze eligible files in order and return one result per file."""
        if self._started:
            raise RuntimeError("AnalysisOrchestrator instances are single-use")
        self._started = True

        eligible = [f for f in files if is_reviewable(f)]
        skipped = len(files) - len(eligible)
        if skipped:
            logger.info(f"Skipping {skipped} removed or non-code files")

        if self.max_files is not None and len(eligible) > self.max_files:
            self.over_limit = [f.path for f in eligible[self.max_files :]]
            eligible = eligible[: self.max_files]
            logger.warning(
                f"Limiting review to {self.max_files} files, {len(self.over_limit)} left unanalyzed"
            )

        for index, changed_file in enumerate(eligible):
            if index > 0:
                await self._pace()
            if self.cancel_event.is_set():
                self.cancelled = True
                logger.warning(
                    f"Run cancelled after {len(self._results)}/{len(eligible)} files"
                )
                break

            logger.info(f"[{index + 1}/{len(eligible)}] Analyzing {changed_file.path}...")
            result = await self._analyze_file(repo, changed_file, context_prefix)
            self._results.append(result)

        logger.info(f"Analysis finished: {len(self._results)} results")
        return self.results

    async def _pace(self) -> None:
        if self.pacing_interval <= 0:
            return
        try:
            await asyncio.wait_for(self.cancel_event.wait(), timeout=self.pacing_interval)
        except asyncio.TimeoutError:
            pass

    async def _analyze_file(
        self,
        repo: str,
        changed_file: ChangedFile,
        context_prefix: str | None,
    ) -> FileAnalysisResult:
        language = detect_language(changed_file.path) or "text"

        try:
            code = await self.content_fetcher.fetch_file_content(
                repo, changed_file.path, changed_file.ref
            )
            if len(code) > self.max_content_chars:
                logger.debug(
                    f"Truncating {changed_file.path} from {len(code)} to {self.max_content_chars} chars"
                )
                code = code[: self.max_content_chars]

            analysis = await self.analyzer.analyze(
                code,
                language,
                build_context_label(changed_file, context_prefix),
            )
            if analysis is None:
                raise AnalysisError("empty response")
            if isinstance(analysis, dict):
                analysis = CodeAnalysis.model_validate(analysis)

            return FileAnalysisResult(
                path=changed_file.path,
                language=language,
                status=changed_file.status,
                issues=[Issue.from_analysis(issue) for issue in analysis.issues],
                score=round_half_up(analysis.score),
                summary=analysis.summary,
            )
        except Exception as e:
            reason = str(e) or type(e).__name__
            logger.warning(f"Failed to analyze {changed_file.path}: {reason}")
            return FileAnalysisResult.placeholder(
                changed_file.path, language, changed_file.status, reason
            )
