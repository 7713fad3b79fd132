"""GitHub REST client and the producer summarising recent repository activity."""

from __future__ import annotations

import asyncio
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from aw_common.config.workflow import WorkflowConfig
from aw_common.errors import GitHubError, ProducerError
from aw_menu.custom_function import CustomFunction, InputItem, title_of
from aw_menu.icons import IconResolver
from aw_menu.items import MenuItem
from aw_producers.base import MenuProducer

logger = logging.getLogger(__name__)

API_ROOT = "https://api.github.com"
MAX_PULL_REQUESTS = 5
PULL_REQUESTS_TITLE = "GitHub: Recently merged pull requests"
RELEASE_TITLE = "GitHub: Latest release"


@dataclass(frozen=True)
class PullRequestSummary:
    number: int
    title: str
    url: Optional[str]

    def line(self) -> str:
        return f"#{self.number}: {self.title} ({self.url})"


class GitHubClient:
    """Minimal read-only client for the endpoints the workflow needs."""

    def __init__(
        self,
        token: str,
        *,
        api_root: str = API_ROOT,
        timeout_seconds: int = 10,
        opener: Callable[..., Any] = urllib.request.urlopen,
    ) -> None:
        self.token = token
        self.api_root = api_root.rstrip("/")
        self.timeout = timeout_seconds
        self._open = opener

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.api_root}{path}"
        if params:
            url = f"{url}?{urllib.parse.urlencode(params)}"
        req = urllib.request.Request(
            url,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {self.token}",
                "User-Agent": "alfred-workflow-toolkit",
                "X-GitHub-Api-Version": "2022-11-28",
            },
        )
        try:
            with self._open(req, timeout=self.timeout) as resp:
                return json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as exc:
            raise GitHubError(
                f"GitHub API returned {exc.code} for {path}",
                context={"status": exc.code, "path": path},
                cause=exc,
            ) from exc
        except urllib.error.URLError as exc:
            raise GitHubError(
                f"GitHub connection failed: {exc.reason}",
                context={"path": path},
                cause=exc,
            ) from exc
        except json.JSONDecodeError as exc:
            raise GitHubError(
                f"GitHub returned invalid JSON for {path}",
                context={"path": path},
                cause=exc,
            ) from exc

    def merged_pull_requests(
        self, owner: str, repo: str, author: str, per_page: int = MAX_PULL_REQUESTS
    ) -> List[PullRequestSummary]:
        query = f"repo:{owner}/{repo} is:pr is:merged author:{author}"
        data = self._get(
            "/search/issues",
            {
                "q": query,
                "sort": "updated",
                "order": "desc",
                "per_page": min(per_page, MAX_PULL_REQUESTS),
            },
        )
        summaries = []
        for item in data.get("items", []):
            pull_request = item.get("pull_request") or {}
            summaries.append(
                PullRequestSummary(
                    number=int(item.get("number", 0)),
                    title=str(item.get("title", "")),
                    url=pull_request.get("html_url"),
                )
            )
        return summaries

    def latest_release(self, owner: str, repo: str) -> Dict[str, Any]:
        return self._get(f"/repos/{owner}/{repo}/releases/latest")


def format_pull_requests(summaries: List[PullRequestSummary]) -> str:
    if not summaries:
        return "No merged pull requests found"
    return "\n".join(summary.line() for summary in summaries)


def format_release(release: Dict[str, Any]) -> str:
    name = release.get("name") or "No name"
    tag = release.get("tag_name", "")
    published = release.get("published_at", "")
    return f"Latest Release: {name} ({tag}) published at {published}"


class GitHubProducer(MenuProducer):
    """Items whose ``arg`` is a summary fetched from GitHub before the menu is built."""

    def __init__(
        self,
        client_factory: Optional[Callable[[WorkflowConfig], GitHubClient]] = None,
        *,
        count: int = MAX_PULL_REQUESTS,
    ) -> None:
        self._client_factory = client_factory or (lambda config: GitHubClient(config.github_token))
        self.count = count

    @property
    def name(self) -> str:
        return "github"

    @property
    def description(self) -> str:
        return "Recently merged pull requests and the latest release"

    def enabled(self, config: WorkflowConfig) -> bool:
        return config.has_github_access

    def _fetch(self, config: WorkflowConfig) -> Dict[str, str]:
        client = self._client_factory(config)
        pulls = client.merged_pull_requests(
            config.repo_owner, config.repo_name, config.github_user, self.count
        )
        release = client.latest_release(config.repo_owner, config.repo_name)
        return {
            PULL_REQUESTS_TITLE: format_pull_requests(pulls),
            RELEASE_TITLE: format_release(release),
        }

    async def build(self, config: WorkflowConfig, query: str = "") -> List[MenuItem]:
        try:
            summaries = await asyncio.to_thread(self._fetch, config)
        except GitHubError as exc:
            logger.error("GitHub fetch failed: %s", exc)
            raise ProducerError(
                f"github: {exc}", context={"producer": self.name, **exc.context}, cause=exc
            ) from exc

        repo = f"{config.repo_owner}/{config.repo_name}"

        def argument(item: InputItem) -> str:
            return summaries[title_of(item)]

        return CustomFunction(
            [
                {"title": PULL_REQUESTS_TITLE, "subtitle": f"Last {self.count} merged in {repo}"},
                {"title": RELEASE_TITLE, "subtitle": f"Most recent release of {repo}"},
            ],
            icon_path=self.icon_path(config, "github.png"),
            icons=IconResolver.from_config(config),
        ).menus(argument)
