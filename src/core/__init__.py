"""Shared library utilities."""

from src.core.llm import create_chat_llm
from src.core.logging import get_logger
from src.core.pr_parser import PRReference, parse_pr_reference

__all__ = [
    "create_chat_llm",
    "get_logger",
    "PRReference",
    "parse_pr_reference",
]
