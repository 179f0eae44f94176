"""Prompt templates using Jinja2."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

PROMPTS_DIR = Path(__file__).parent
_env = Environment(loader=FileSystemLoader(PROMPTS_DIR), keep_trailing_newline=True)

ANALYSIS_SYSTEM_PROMPT = "You are an expert code reviewer. Always respond with valid JSON only."


def render_code_analysis_prompt(code: str, language: str, context: str | None = None) -> str:
    """Render the per-file code analysis prompt."""
    template = _env.get_template("code_analysis.jinja2")
    return template.render(code=code, language=language, context=context)


DOCUMENTATION_SYSTEM_PROMPT = "You are a technical documentation expert. Always respond with valid JSON only."
TEST_GENERATION_SYSTEM_PROMPT = "You are a testing expert. Always respond with valid JSON only."


def render_documentation_prompt(code: str, language: str, file_path: str | None = None) -> str:
    template = _env.get_template("documentation.jinja2")
    return template.render(code=code, language=language, file_path=file_path)


def render_test_generation_prompt(code: str, language: str, framework: str | None = None) -> str:
    template = _env.get_template("test_generation.jinja2")
    return template.render(code=code, language=language, framework=framework)
