"""Async GitHub REST client built on httpx."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Any

import httpx

from .rate_limit import RateLimitMonitor
from .source import Page

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
PER_PAGE = 100


class GitHubAPIError(Exception):
    """A GitHub API request returned an error status."""

    def __init__(self, status_code: int, url: str, message: str = "") -> None:
        self.status_code = status_code
        self.url = url
        self.message = message
        detail = f"GitHub API error {status_code} for {url}"
        super().__init__(f"{detail}: {message}" if message else detail)


class GitHubClient:
    """Paged access to the repository, commit and pull request listings.

    Use as an async context manager so the underlying connection pool is
    closed when the run ends::

        async with GitHubClient(token) as client:
            async for page in client.repo_pages("my-org"):
                ...
    """

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        rate_limit: RateLimitMonitor | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url or DEFAULT_API_URL,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=timeout,
            transport=transport,
        )
        self._rate_limit = rate_limit or RateLimitMonitor()

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        await self._rate_limit.wait_if_needed()
        response = await self._client.get(url, params=params)
        self._rate_limit.update(response)
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                message = body.get("message", "")
            else:
                message = response.text
            raise GitHubAPIError(response.status_code, str(response.url), message)
        return response

    async def _paginate(self, path: str, params: dict[str, Any]) -> AsyncGenerator[Page, None]:
        """Yield each page of a list endpoint, following ``Link: rel="next"``."""
        query = {k: v for k, v in params.items() if v is not None}
        query["per_page"] = PER_PAGE
        url: str | None = path
        page_params: dict[str, Any] | None = query
        while url:
            response = await self._get(url, params=page_params)
            logger.debug("GET %s -> %d", response.url, response.status_code)
            yield response.json()
            url = response.links.get("next", {}).get("url")
            # the next link already carries the query string
            page_params = None

    def repo_pages(self, org: str, *, type: str = "public") -> AsyncGenerator[Page, None]:
        return self._paginate(f"/orgs/{org}/repos", {"type": type})

    def commit_pages(
        self,
        owner: str,
        repo: str,
        *,
        since: str | None = None,
        until: str | None = None,
    ) -> AsyncGenerator[Page, None]:
        return self._paginate(
            f"/repos/{owner}/{repo}/commits", {"since": since, "until": until}
        )

    def pull_request_pages(
        self,
        owner: str,
        repo: str,
        *,
        state: str = "all",
        sort: str | None = None,
        direction: str | None = None,
    ) -> AsyncGenerator[Page, None]:
        return self._paginate(
            f"/repos/{owner}/{repo}/pulls",
            {"state": state, "sort": sort, "direction": direction},
        )
