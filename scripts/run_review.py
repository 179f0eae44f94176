#!/usr/bin/env python3
"""Run a PR review locally and print the verdict."""
import argparse
import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from src.config import settings
from src.core.exceptions import ApiException
from src.core.llm import create_chat_llm
from src.core.pr_parser import parse_pr_reference
from src.services.github.client import create_github_client
from src.services.github.service import GitHubService
from src.services.reviewer.analyzer import LLMCodeAnalyzer
from src.services.reviewer.service import review_pull_request


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("pr", help="PR URL, owner/repo#123, or #123 with a default repo configured")
    parser.add_argument("--no-publish", action="store_true", help="don't post the summary comment")
    args = parser.parse_args(argv)

    pr_ref = parse_pr_reference(args.pr)
    if not pr_ref:
        print(f"Could not parse a PR reference from {args.pr!r}", file=sys.stderr)
        return 2

    try:
        github = GitHubService(create_github_client(settings), settings.summary_marker)
        analyzer = LLMCodeAnalyzer(create_chat_llm(settings))
        result = await review_pull_request(
            pr_ref.full_name,
            pr_ref.pr_number,
            github=github,
            analyzer=analyzer,
            publish=not args.no_publish,
        )
    except ApiException as e:
        print(f"Review failed: {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Review failed: {e}", file=sys.stderr)
        return 1

    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
