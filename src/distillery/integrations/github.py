"""GitHub access through the ``gh`` CLI.

Every call is a subprocess bounded by ``GH_TIMEOUT``. Failures surface as
:class:`GhCliError`; callers never see a raw ``CalledProcessError`` or a hung
process.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import TYPE_CHECKING, Any, Final, Protocol

from distillery.domain.models import CiStatus, PrContext, PrListItem, RepoListItem
from distillery.limits import GH_LIST_LIMIT, GH_TIMEOUT

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)

PR_VIEW_FIELDS: Final = "number,title,body,author,baseRefName,headRefName"
PR_LIST_FIELDS: Final = (
    "number,title,author,headRefName,isDraft,additions,deletions,"
    "reviewRequests,statusCheckRollup"
)
REPO_LIST_FIELDS: Final = "nameWithOwner,description,isFork,isPrivate"

FOLLOW_UP_FOOTER: Final = "_Created via [Distillery](https://github.com/rosssaunders/distillery)_"

_FAILURE_CONCLUSIONS: Final = frozenset({"FAILURE", "TIMED_OUT", "CANCELLED", "ACTION_REQUIRED"})
_FAILURE_STATES: Final = frozenset({"FAILURE", "ERROR"})
_PENDING_STATES: Final = frozenset({"PENDING", "QUEUED", "IN_PROGRESS", "WAITING"})
_PENDING_STATUSES: Final = frozenset({"PENDING", "QUEUED", "IN_PROGRESS"})

_PR_URL_RE: Final = re.compile(r"github\.com/([^/\s]+)/([^/\s]+)/pull/(\d+)/?(?:[?#].*)?$")
_PR_SHORT_RE: Final = re.compile(r"^([^/\s#]+)/([^/\s#]+)#(\d+)$")
_REPO_RE: Final = re.compile(r"^([^/\s#]+)/([^/\s#]+)$")

PR_REFERENCE_HINT: Final = "Use: owner/repo#123 or https://github.com/owner/repo/pull/123"


class GhCliError(RuntimeError):
    """A ``gh`` invocation failed, timed out, or returned unusable output."""


class GitHubClient(Protocol):
    """Port for the source-control operations the executor needs."""

    async def fetch_repo_list(self) -> list[RepoListItem]: ...

    async def fetch_pr_list(self, owner: str, repo: str) -> list[PrListItem]: ...

    async def fetch_pr(self, owner: str, repo: str, number: int) -> PrContext: ...

    async def post_review(self, owner: str, repo: str, number: int, body: str) -> None: ...

    async def post_comment(self, owner: str, repo: str, number: int, body: str) -> None: ...

    async def create_next_pr_issue(
        self, owner: str, repo: str, number: int, title: str, body: str
    ) -> int: ...


# --------------------------------------------------------------------------- #
# Pure helpers                                                                #
# --------------------------------------------------------------------------- #


def parse_pr_reference(text: str) -> tuple[str, str, int]:
    """Parse ``owner/repo#123`` or a ``github.com/.../pull/123`` URL.

    Raises:
        ValueError: if ``text`` matches neither form.
    """
    value = text.strip()
    if "github.com" in value:
        match = _PR_URL_RE.search(value)
        if match is None:
            raise ValueError(f"Invalid GitHub PR URL format: {text!r}")
        return match.group(1), match.group(2), int(match.group(3))
    match = _PR_SHORT_RE.match(value)
    if match is None:
        raise ValueError(f"Invalid PR reference {text!r}. {PR_REFERENCE_HINT}")
    return match.group(1), match.group(2), int(match.group(3))


def parse_repo_reference(text: str) -> tuple[str, str]:
    """Parse ``owner/repo``.

    Raises:
        ValueError: if ``text`` is not of that form.
    """
    match = _REPO_RE.match(text.strip())
    if match is None:
        raise ValueError(f"Invalid repository {text!r}. Use: owner/repo")
    return match.group(1), match.group(2)


def compute_ci_status(checks: Sequence[Mapping[str, Any]] | None) -> CiStatus:
    """Collapse a ``statusCheckRollup`` payload into one status.

    Any failure wins over any pending check; no checks at all is unknown.
    """
    if not checks:
        return CiStatus.UNKNOWN
    has_failure = False
    has_pending = False
    for check in checks:
        conclusion = check.get("conclusion")
        state = check.get("state")
        status = check.get("status")
        if conclusion in _FAILURE_CONCLUSIONS or state in _FAILURE_STATES:
            has_failure = True
        if state in _PENDING_STATES or status in _PENDING_STATUSES:
            has_pending = True
    if has_failure:
        return CiStatus.FAILURE
    if has_pending:
        return CiStatus.PENDING
    return CiStatus.SUCCESS


def _pr_priority(item: PrListItem) -> int:
    if item.is_draft:
        return 2
    return 0 if item.review_requested else 1


def sort_pr_list(items: list[PrListItem]) -> list[PrListItem]:
    """Review-requested first, then other ready PRs, then drafts; by number within each."""
    return sorted(items, key=lambda item: (_pr_priority(item), item.number))


def _login(raw: Any) -> str:
    if isinstance(raw, dict):
        return str(raw.get("login") or "")
    return ""


def parse_pr_list(raw: list[dict[str, Any]], current_user: str) -> list[PrListItem]:
    items: list[PrListItem] = []
    for entry in raw:
        requests = entry.get("reviewRequests") or []
        review_requested = bool(current_user) and any(
            current_user in (request.get("login"), request.get("name")) for request in requests
        )
        items.append(
            PrListItem(
                number=int(entry["number"]),
                title=str(entry.get("title") or ""),
                author=_login(entry.get("author")),
                head_branch=str(entry.get("headRefName") or ""),
                is_draft=bool(entry.get("isDraft")),
                review_requested=review_requested,
                ci_status=compute_ci_status(entry.get("statusCheckRollup")),
                additions=int(entry.get("additions") or 0),
                deletions=int(entry.get("deletions") or 0),
            )
        )
    return sort_pr_list(items)


def parse_repo_list(raw: list[dict[str, Any]]) -> list[RepoListItem]:
    items: list[RepoListItem] = []
    for entry in raw:
        full_name = str(entry.get("nameWithOwner") or "")
        owner, _, name = full_name.partition("/")
        if not name:
            owner, name = "", full_name
        items.append(
            RepoListItem(
                owner=owner,
                name=name,
                description=str(entry.get("description") or ""),
                is_fork=bool(entry.get("isFork")),
                is_private=bool(entry.get("isPrivate")),
            )
        )
    return items


def parse_issue_number(url: str) -> int:
    """Issue number from the URL ``gh issue create`` prints."""
    tail = url.strip().rstrip("/").rsplit("/", 1)[-1]
    if not tail.isdigit():
        raise GhCliError(f"Failed to parse issue number from URL: {url.strip()!r}")
    return int(tail)


def follow_up_comment(issue_number: int) -> str:
    return f"Follow-up work tracked in #{issue_number}\n\n{FOLLOW_UP_FOOTER}"


# --------------------------------------------------------------------------- #
# gh CLI client                                                               #
# --------------------------------------------------------------------------- #


class GhCliClient:
    """Async :class:`GitHubClient` backed by the ``gh`` executable."""

    def __init__(self, gh_path: str = "gh", timeout: float = GH_TIMEOUT) -> None:
        self._gh = gh_path
        self._timeout = timeout

    async def _run(self, *args: str) -> str:
        """Run ``gh <args>`` and return stdout, raising GhCliError on any failure."""
        name = " ".join(args[:2])
        logger.debug("Running gh %s", name)
        try:
            proc = await asyncio.create_subprocess_exec(
                self._gh,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise GhCliError(
                "GitHub CLI (gh) not found. Install it from https://cli.github.com"
            ) from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except TimeoutError as exc:
            proc.kill()
            await proc.wait()
            raise GhCliError(f"gh {name} timed out after {self._timeout:.0f}s") from exc

        if proc.returncode != 0:
            message = stderr.decode(errors="replace").strip()
            raise GhCliError(f"gh {name} failed: {message}")
        return stdout.decode(errors="replace")

    async def _run_json(self, *args: str) -> Any:
        output = await self._run(*args)
        try:
            return json.loads(output)
        except json.JSONDecodeError as exc:
            raise GhCliError(f"Failed to parse gh {' '.join(args[:2])} output: {exc}") from exc

    async def get_current_user(self) -> str:
        output = await self._run("api", "user", "--jq", ".login")
        return output.strip()

    async def fetch_repo_list(self) -> list[RepoListItem]:
        raw = await self._run_json(
            "repo", "list", "--limit", str(GH_LIST_LIMIT), "--json", REPO_LIST_FIELDS
        )
        return parse_repo_list(raw)

    async def fetch_pr_list(self, owner: str, repo: str) -> list[PrListItem]:
        try:
            current_user = await self.get_current_user()
        except GhCliError as exc:
            logger.warning("Could not resolve current gh user: %s", exc)
            current_user = ""
        raw = await self._run_json(
            "pr",
            "list",
            "--repo",
            f"{owner}/{repo}",
            "--limit",
            str(GH_LIST_LIMIT),
            "--json",
            PR_LIST_FIELDS,
        )
        return parse_pr_list(raw, current_user)

    async def fetch_pr(self, owner: str, repo: str, number: int) -> PrContext:
        repo_spec = f"{owner}/{repo}"
        view = await self._run_json(
            "pr", "view", str(number), "--repo", repo_spec, "--json", PR_VIEW_FIELDS
        )
        diff = await self._run("pr", "diff", str(number), "--repo", repo_spec)
        return PrContext(
            owner=owner,
            repo=repo,
            number=int(view.get("number", number)),
            title=str(view.get("title") or ""),
            body=str(view.get("body") or ""),
            diff=diff,
            author=_login(view.get("author")),
            base_branch=str(view.get("baseRefName") or ""),
            head_branch=str(view.get("headRefName") or ""),
        )

    async def post_review(self, owner: str, repo: str, number: int, body: str) -> None:
        await self._run(
            "pr",
            "review",
            str(number),
            "--repo",
            f"{owner}/{repo}",
            "--request-changes",
            "--body",
            body,
        )

    async def post_comment(self, owner: str, repo: str, number: int, body: str) -> None:
        await self._run("pr", "comment", str(number), "--repo", f"{owner}/{repo}", "--body", body)

    async def create_issue(self, owner: str, repo: str, title: str, body: str) -> int:
        output = await self._run(
            "issue", "create", "--repo", f"{owner}/{repo}", "--title", title, "--body", body
        )
        return parse_issue_number(output)

    async def create_next_pr_issue(
        self, owner: str, repo: str, number: int, title: str, body: str
    ) -> int:
        """File the follow-up issue and link it from the pull request."""
        issue_number = await self.create_issue(owner, repo, title, body)
        await self.post_comment(owner, repo, number, follow_up_comment(issue_number))
        logger.info("Created follow-up issue #%d for %s/%s#%d", issue_number, owner, repo, number)
        return issue_number


__all__ = [
    "FOLLOW_UP_FOOTER",
    "GhCliClient",
    "GhCliError",
    "GitHubClient",
    "compute_ci_status",
    "follow_up_comment",
    "parse_issue_number",
    "parse_pr_list",
    "parse_pr_reference",
    "parse_repo_list",
    "parse_repo_reference",
    "sort_pr_list",
]
