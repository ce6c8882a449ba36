"""Minimal GitHub REST client for tag references.

Only the two git reference endpoints needed for tagging are wrapped:

    GET  /repos/{owner}/{repo}/git/ref/tags/{tag}
    POST /repos/{owner}/{repo}/git/refs
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from multirelease.exceptions import PublishConflictError, PublishError

logger = logging.getLogger(__name__)


class GitHubClient:
    """Creates and inspects tag references through the GitHub API."""

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str | None = None,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.owner = owner
        self.repo = repo
        self._client = httpx.Client(
            base_url=api_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise PublishError(f"GitHub request timed out: {method} {url}") from e
        except httpx.HTTPError as e:
            raise PublishError(f"GitHub request failed: {e}") from e

    def tag_exists(self, tag: str) -> bool:
        response = self._request("GET", f"{self._repo_path}/git/ref/tags/{tag}")
        if response.status_code == 404:
            return False
        if response.is_error:
            raise PublishError(f"Could not look up tag {tag}: HTTP {response.status_code}")
        return True

    def create_tag(self, tag: str, sha: str) -> None:
        """Create a lightweight tag reference pointing at ``sha``.

        Raises:
            PublishConflictError: If the reference already exists
            PublishError: On any other API failure
        """
        response = self._request(
            "POST",
            f"{self._repo_path}/git/refs",
            json={"ref": f"refs/tags/{tag}", "sha": sha},
        )
        if response.status_code == 422 and "already exists" in response.text:
            raise PublishConflictError(tag)
        if response.is_error:
            raise PublishError(f"Could not create tag {tag}: HTTP {response.status_code}")
        logger.debug("Created GitHub ref refs/tags/%s at %s", tag, sha)
