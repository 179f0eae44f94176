"""Tests for the analysis orchestrator."""

import asyncio

import pytest

from src.core.exceptions import AnalysisError
from src.schemas.review import CodeAnalysis, CodeAnalysisIssue
from src.services.reviewer.orchestrator import AnalysisOrchestrator, build_context_label
from src.services.reviewer.schemas import ChangeStatus, Severity

from conftest import StubAnalyzer, StubFetcher, make_file

REPO = "acme/widgets"


def orchestrator(analyzer, fetcher, **kwargs) -> AnalysisOrchestrator:
    kwargs.setdefault("pacing_interval", 0)
    return AnalysisOrchestrator(analyzer, fetcher, **kwargs)


class TestEligibility:
    """Which files get analyzed."""

    @pytest.mark.asyncio
    async def test_skips_removed_and_unknown_extensions(self):
        """Removed files and non-code files are excluded."""
        files = [
            make_file("app.py"),
            make_file("gone.py", ChangeStatus.REMOVED),
            make_file("logo.png"),
            make_file("README"),
            make_file("config.yml", ChangeStatus.ADDED),
        ]
        fetcher = StubFetcher({"app.py": "x = 1", "config.yml": "a: 1"})
        analyzer = StubAnalyzer()

        results = await orchestrator(analyzer, fetcher).run(REPO, files)

        assert [r.path for r in results] == ["app.py", "config.yml"]
        assert [path for _, path, _ in fetcher.requests] == ["app.py", "config.yml"]

    @pytest.mark.asyncio
    async def test_language_detected_from_extension(self):
        """Language tag comes from the extension."""
        files = [make_file("web/App.TSX"), make_file("lib.rs")]
        analyzer = StubAnalyzer()

        results = await orchestrator(analyzer, StubFetcher({"web/App.TSX": "", "lib.rs": ""})).run(REPO, files)

        assert [r.language for r in results] == ["typescript", "rust"]
        assert [language for _, language, _ in analyzer.calls] == ["typescript", "rust"]

    @pytest.mark.asyncio
    async def test_file_limit_applies_after_eligibility(self):
        """Ineligible files never count toward max_files."""
        files = [make_file("gone.py", ChangeStatus.REMOVED), make_file("a.py"), make_file("b.py"), make_file("c.py")]
        fetcher = StubFetcher({"a.py": "", "b.py": "", "c.py": ""})
        runner = orchestrator(StubAnalyzer(), fetcher, max_files=2)

        results = await runner.run(REPO, files)

        assert [r.path for r in results] == ["a.py", "b.py"]
        assert runner.over_limit == ["c.py"]


class TestAnalysisCalls:
    """How the analysis capability is invoked."""

    @pytest.mark.asyncio
    async def test_context_label(self):
        """Context names the file and its status."""
        analyzer = StubAnalyzer()
        files = [make_file("src/a.py", ChangeStatus.RENAMED)]

        await orchestrator(analyzer, StubFetcher({"src/a.py": "pass"})).run(
            REPO, files, context_prefix="PR #7"
        )

        assert analyzer.calls[0][2] == "PR #7: src/a.py (renamed)"

    def test_context_label_without_prefix(self):
        assert build_context_label(make_file("a.go", ChangeStatus.ADDED)) == "a.go (added)"

    @pytest.mark.asyncio
    async def test_truncates_content(self):
        """Content over the ceiling is cut to exactly max_content_chars."""
        analyzer = StubAnalyzer()

        await orchestrator(analyzer, StubFetcher({"big.js": "x" * 120}), max_content_chars=100).run(
            REPO, [make_file("big.js")]
        )

        assert len(analyzer.calls[0][0]) == 100

    @pytest.mark.asyncio
    async def test_maps_analysis_to_result(self):
        """Issues, score and summary flow into the result."""
        analysis = CodeAnalysis(
            issues=[
                CodeAnalysisIssue(
                    severity="critical",
                    category="security",
                    message="SQL injection",
                    line=12,
                    suggestion="Use parameters",
                )
            ],
            score=72.5,
            summary="Risky query",
        )
        analyzer = StubAnalyzer({"db.py": analysis})

        results = await orchestrator(analyzer, StubFetcher({"db.py": "q = f'...'"})).run(
            REPO, [make_file("db.py")]
        )

        result = results[0]
        assert result.score == 73
        assert result.summary == "Risky query"
        assert result.failed is False
        assert result.issues[0].severity == Severity.CRITICAL
        assert result.issues[0].category == "security"
        assert result.issues[0].line == 12
        assert result.issues[0].suggestion == "Use parameters"


class TestFailureIsolation:
    """Per-file failures become placeholder results."""

    @pytest.mark.asyncio
    async def test_failing_call_keeps_position(self):
        """The failed file stays in place with score 0."""
        analyzer = StubAnalyzer({"b.py": ConnectionError("connection reset")}, default_score=90)
        files = [make_file("a.py"), make_file("b.py"), make_file("c.py")]
        fetcher = StubFetcher({"a.py": "", "b.py": "", "c.py": ""})

        results = await orchestrator(analyzer, fetcher).run(REPO, files)

        assert [r.path for r in results] == ["a.py", "b.py", "c.py"]
        assert results[1].score == 0
        assert results[1].issues == []
        assert results[1].failed is True
        assert results[1].summary == "Analysis failed: connection reset"
        assert results[2].score == 90

    @pytest.mark.asyncio
    async def test_empty_response_is_failure(self):
        """A None analysis degrades the file."""

        class NoneAnalyzer:
            async def analyze(self, code, language, context):
                return None

        results = await orchestrator(NoneAnalyzer(), StubFetcher({"a.py": ""})).run(REPO, [make_file("a.py")])

        assert results[0].failed is True
        assert "empty response" in results[0].summary

    @pytest.mark.asyncio
    async def test_malformed_dict_response_is_failure(self):
        """A dict that fails validation degrades the file."""

        class DictAnalyzer:
            async def analyze(self, code, language, context):
                return {"qualityScore": 250}

        results = await orchestrator(DictAnalyzer(), StubFetcher({"a.py": ""})).run(REPO, [make_file("a.py")])

        assert results[0].failed is True
        assert results[0].score == 0

    @pytest.mark.asyncio
    async def test_content_fetch_failure_skips_analysis(self):
        """Missing content degrades the file without calling the analyzer."""
        analyzer = StubAnalyzer()

        results = await orchestrator(analyzer, StubFetcher({})).run(REPO, [make_file("a.py")])

        assert analyzer.calls == []
        assert results[0].failed is True
        assert "not found" in results[0].summary

    @pytest.mark.asyncio
    async def test_analysis_error_message(self):
        """AnalysisError reasons are carried into the summary."""
        analyzer = StubAnalyzer({"a.py": AnalysisError("no JSON object in model response")})

        results = await orchestrator(analyzer, StubFetcher({"a.py": ""})).run(REPO, [make_file("a.py")])

        assert results[0].summary == "Analysis failed: Analysis error: no JSON object in model response"


class TestPacingAndCancellation:
    """Sequencing, pacing and cancellation."""

    @pytest.mark.asyncio
    async def test_calls_are_sequential_and_paced(self):
        """Consecutive calls are at least one pacing interval apart."""
        analyzer = StubAnalyzer()
        files = [make_file(f"f{i}.py") for i in range(3)]
        fetcher = StubFetcher({f.path: "" for f in files})

        await orchestrator(analyzer, fetcher, pacing_interval=0.05).run(REPO, files)

        assert analyzer.max_in_flight == 1
        gaps = [b - a for a, b in zip(analyzer.call_times, analyzer.call_times[1:])]
        assert len(gaps) == 2
        assert all(gap >= 0.045 for gap in gaps)

    @pytest.mark.asyncio
    async def test_cancel_before_start(self):
        """A pre-set token submits nothing."""
        token = asyncio.Event()
        token.set()
        analyzer = StubAnalyzer()
        runner = orchestrator(analyzer, StubFetcher({"a.py": ""}), cancel_event=token)

        results = await runner.run(REPO, [make_file("a.py")])

        assert results == []
        assert runner.cancelled is True
        assert analyzer.calls == []

    @pytest.mark.asyncio
    async def test_cancel_interrupts_pacing_wait(self):
        """Cancelling during the pacing wait stops the run promptly."""
        analyzer = StubAnalyzer()
        files = [make_file(f"f{i}.py") for i in range(3)]
        runner = orchestrator(analyzer, StubFetcher({f.path: "" for f in files}), pacing_interval=10)

        task = asyncio.create_task(runner.run(REPO, files))
        while not analyzer.calls:
            await asyncio.sleep(0)
        runner.cancel()
        results = await asyncio.wait_for(task, timeout=1)

        assert [r.path for r in results] == ["f0.py"]
        assert runner.cancelled is True

    @pytest.mark.asyncio
    async def test_task_cancellation_propagates(self):
        """Task cancellation is not swallowed; partial results remain readable."""
        analyzer = StubAnalyzer()
        files = [make_file(f"f{i}.py") for i in range(3)]
        runner = orchestrator(analyzer, StubFetcher({f.path: "" for f in files}), pacing_interval=10)

        task = asyncio.create_task(runner.run(REPO, files))
        while not runner.results:
            await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert [r.path for r in runner.results] == ["f0.py"]

    @pytest.mark.asyncio
    async def test_single_use(self):
        """An orchestrator instance serves one run."""
        runner = orchestrator(StubAnalyzer(), StubFetcher({}))
        await runner.run(REPO, [])

        with pytest.raises(RuntimeError):
            await runner.run(REPO, [])
