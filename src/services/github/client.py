"""GitHub API client - data layer."""

from github import Auth, BadCredentialsException, Github, GithubException, GithubIntegration, UnknownObjectException
from github.PullRequest import PullRequest
from loguru import logger

from src.config import Settings
from src.core.exceptions import (
    FileContentNotFoundError,
    GitHubAuthError,
    GitHubTransportError,
    PRNotFoundError,
    ValidationError,
)
from src.services.reviewer.schemas import ChangedFile, ChangeSet, ChangeStatus, PullRequestInfo

KNOWN_STATUSES = {status.value for status in ChangeStatus}


def create_github_client(settings: Settings) -> Github:
    """Build an authenticated GitHub client from a token or App credentials."""
    if settings.github_token:
        logger.info("GitHub token client initialized")
        return Github(auth=Auth.Token(settings.github_token))

    if not all([settings.github_app_id, settings.github_private_key, settings.github_installation_id]):
        raise GitHubAuthError("GitHub credentials not configured. Set GITHUB_TOKEN or GitHub App credentials.")

    private_key = settings.github_private_key.replace("\\n", "\n")
    integration = GithubIntegration(
        auth=Auth.AppAuth(int(settings.github_app_id), private_key),
    )
    access_token = integration.get_access_token(int(settings.github_installation_id)).token

    logger.info("GitHub App client initialized")
    return Github(auth=Auth.Token(access_token))


def split_repo(repo: str) -> tuple[str, str]:
    """Split an ``owner/repo`` identifier."""
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValidationError('Invalid repository format. Use "owner/repo"', {"repo": repo})
    return parts[0], parts[1]


def _raise_for_pr(e: GithubException, repo: str, pr_number: int) -> None:
    if isinstance(e, UnknownObjectException) or e.status == 404:
        raise PRNotFoundError(repo, pr_number) from e
    if isinstance(e, BadCredentialsException) or e.status in (401, 403):
        raise GitHubAuthError("GitHub authentication failed. Check your GitHub credentials.") from e
    raise GitHubTransportError(f"Failed to fetch PR: {e}") from e


def fetch_pull_request(client: Github, repo: str, pr_number: int) -> PullRequest:
    """Fetch a pull request from GitHub API."""
    split_repo(repo)
    try:
        return client.get_repo(repo).get_pull(pr_number)
    except GithubException as e:
        _raise_for_pr(e, repo, pr_number)
    except Exception as e:
        raise GitHubTransportError(f"Failed to fetch PR: {e}") from e


def to_pull_request_info(pr: PullRequest) -> PullRequestInfo:
    return PullRequestInfo(
        number=pr.number,
        title=pr.title,
        body=pr.body or "",
        state=pr.state,
        author=pr.user.login if pr.user else None,
        html_url=pr.html_url,
        head_ref=pr.head.ref,
        head_sha=pr.head.sha,
        base_ref=pr.base.ref,
        base_sha=pr.base.sha,
    )


def fetch_change_set(client: Github, repo: str, pr_number: int) -> ChangeSet:
    """Fetch PR metadata and its changed files, in GitHub's order."""
    pr = fetch_pull_request(client, repo, pr_number)
    try:
        info = to_pull_request_info(pr)
        files = []
        for f in pr.get_files():
            status = f.status if f.status in KNOWN_STATUSES else ChangeStatus.MODIFIED.value
            files.append(
                ChangedFile(
                    path=f.filename,
                    status=ChangeStatus(status),
                    additions=f.additions,
                    deletions=f.deletions,
                    changes=f.changes,
                    patch=f.patch or None,
                    ref=info.head_sha,
                    previous_path=f.previous_filename,
                )
            )
    except GithubException as e:
        _raise_for_pr(e, repo, pr_number)
    except Exception as e:
        raise GitHubTransportError(f"Failed to list PR files: {e}") from e

    return ChangeSet(pull_request=info, files=files)


def fetch_file_contents(client: Github, repo: str, path: str, ref: str) -> str:
    """Fetch full file contents from repository."""
    try:
        content = client.get_repo(repo).get_contents(path, ref=ref)
    except UnknownObjectException as e:
        raise FileContentNotFoundError(path, ref) from e
    except GithubException as e:
        if e.status == 404:
            raise FileContentNotFoundError(path, ref) from e
        logger.error(f"Failed to fetch file {path}: {e}")
        raise GitHubTransportError(f"Failed to fetch file: {e}") from e

    if isinstance(content, list) or content.type != "file":
        raise FileContentNotFoundError(path, ref)
    return content.decoded_content.decode("utf-8")


def authenticated_login(client: Github) -> str | None:
    """Login of the token owner, or None for App installation tokens.

    Installation tokens can't read ``/user``; their comments are authored by
    the App's bot account.
    """
    try:
        return client.get_user().login
    except GithubException as e:
        logger.debug(f"Could not resolve authenticated user: {e.status}")
        return None


def _is_own_comment(comment, login: str | None) -> bool:
    if comment.user is None:
        return False
    if login is not None:
        return comment.user.login == login
    return comment.user.type == "Bot"


def upsert_issue_comment(
    client: Github,
    repo: str,
    pr_number: int,
    body: str,
    marker: str,
) -> str:
    """Edit our comment carrying ``marker`` or create a new one.

    Only comments written by the authenticated identity are candidates, so
    someone quoting the marker never gets their comment edited.

    Returns:
        "updated" or "created"
    """
    login = authenticated_login(client)
    issue = client.get_repo(repo).get_issue(pr_number)

    for comment in issue.get_comments():
        if marker in (comment.body or "") and _is_own_comment(comment, login):
            comment.edit(body)
            logger.info(f"Updated summary comment {comment.id} on {repo}#{pr_number}")
            return "updated"

    issue.create_comment(body)
    logger.info(f"Created summary comment on {repo}#{pr_number}")
    return "created"
