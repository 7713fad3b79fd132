"""Tests for the GitHub client and producer."""

from __future__ import annotations

import asyncio
import io
import json
import urllib.error
from typing import Any, Dict, List

import pytest

from aw_common.config.workflow import WorkflowConfig
from aw_common.errors import GitHubError, ProducerError
from aw_producers.github import (
    PULL_REQUESTS_TITLE,
    RELEASE_TITLE,
    GitHubClient,
    GitHubProducer,
    PullRequestSummary,
    format_pull_requests,
    format_release,
)


pytestmark = pytest.mark.unit_producers

TOKEN = "ghp_" + "t" * 36


class FakeResponse(io.BytesIO):
    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


class RecordingOpener:
    def __init__(self, payloads: Dict[str, Any]) -> None:
        self.payloads = payloads
        self.requests: List[Any] = []

    def __call__(self, request: Any, timeout: int = 0) -> FakeResponse:
        self.requests.append(request)
        for fragment, payload in self.payloads.items():
            if fragment in request.full_url:
                return FakeResponse(json.dumps(payload).encode("utf-8"))
        raise AssertionError(f"unexpected request {request.full_url}")


SEARCH_PAYLOAD = {
    "items": [
        {"number": 42, "title": "Fix login", "pull_request": {"html_url": "https://github.com/o/r/pull/42"}},
        {"number": 41, "title": "Add menu", "pull_request": {"html_url": "https://github.com/o/r/pull/41"}},
    ]
}
RELEASE_PAYLOAD = {"name": "Spring", "tag_name": "v1.2.0", "published_at": "2024-05-01T10:00:00Z"}


class TestGitHubClient:
    def test_merged_pull_requests(self) -> None:
        opener = RecordingOpener({"/search/issues": SEARCH_PAYLOAD})
        client = GitHubClient(TOKEN, opener=opener)
        pulls = client.merged_pull_requests("o", "r", "me", per_page=10)
        assert pulls[0] == PullRequestSummary(42, "Fix login", "https://github.com/o/r/pull/42")
        request = opener.requests[0]
        assert "per_page=5" in request.full_url
        assert "is%3Amerged" in request.full_url
        assert request.get_header("Authorization") == f"Bearer {TOKEN}"

    def test_latest_release(self) -> None:
        client = GitHubClient(TOKEN, opener=RecordingOpener({"/releases/latest": RELEASE_PAYLOAD}))
        assert client.latest_release("o", "r")["tag_name"] == "v1.2.0"

    def test_http_error_becomes_github_error(self) -> None:
        def opener(request: Any, timeout: int = 0) -> Any:
            raise urllib.error.HTTPError(request.full_url, 401, "Unauthorized", {}, None)

        with pytest.raises(GitHubError) as excinfo:
            GitHubClient(TOKEN, opener=opener).latest_release("o", "r")
        assert excinfo.value.context["status"] == 401

    def test_connection_error_becomes_github_error(self) -> None:
        def opener(request: Any, timeout: int = 0) -> Any:
            raise urllib.error.URLError("offline")

        with pytest.raises(GitHubError, match="offline"):
            GitHubClient(TOKEN, opener=opener).latest_release("o", "r")

    def test_invalid_json_becomes_github_error(self) -> None:
        client = GitHubClient(TOKEN, opener=lambda request, timeout=0: FakeResponse(b"<html>"))
        with pytest.raises(GitHubError):
            client.latest_release("o", "r")


def test_formatters() -> None:
    assert format_pull_requests([]) == "No merged pull requests found"
    text = format_pull_requests([PullRequestSummary(7, "Tidy", None)])
    assert text == "#7: Tidy (None)"
    assert format_release(RELEASE_PAYLOAD) == (
        "Latest Release: Spring (v1.2.0) published at 2024-05-01T10:00:00Z"
    )
    assert format_release({}).startswith("Latest Release: No name")


class FakeClient:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail

    def merged_pull_requests(self, owner: str, repo: str, author: str, per_page: int) -> List[PullRequestSummary]:
        if self.fail:
            raise GitHubError("GitHub API returned 500 for /search/issues", context={"status": 500})
        return [PullRequestSummary(1, "First", "https://github.com/o/r/pull/1")]

    def latest_release(self, owner: str, repo: str) -> Dict[str, Any]:
        return RELEASE_PAYLOAD


class TestGitHubProducer:
    def test_disabled_without_valid_token(self, workflow_config: WorkflowConfig) -> None:
        assert GitHubProducer().enabled(workflow_config) is False
        with_token = workflow_config.model_copy(update={"github_token": TOKEN})
        assert GitHubProducer().enabled(with_token) is True

    def test_build_uses_prefetched_summaries(self, workflow_config: WorkflowConfig) -> None:
        producer = GitHubProducer(lambda config: FakeClient())
        items = asyncio.run(producer.build(workflow_config))
        assert [item.title for item in items] == [PULL_REQUESTS_TITLE, RELEASE_TITLE]
        assert items[0].arg == "#1: First (https://github.com/o/r/pull/1)"
        assert items[1].arg.startswith("Latest Release: Spring")
        assert items[0].icon.path == f"{workflow_config.icon_dir}/github.png"

    def test_failure_raises_producer_error(self, workflow_config: WorkflowConfig) -> None:
        producer = GitHubProducer(lambda config: FakeClient(fail=True))
        with pytest.raises(ProducerError) as excinfo:
            asyncio.run(producer.build(workflow_config))
        assert excinfo.value.context["producer"] == "github"
        assert excinfo.value.context["status"] == 500
