"""The paged list operations the fetchers depend on."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any, Protocol

Page = list[dict[str, Any]]


class ActivitySource(Protocol):
    """Anything that can page through repositories, commits and pull requests.

    Each method yields one list per remote page, in the order the remote
    returns them. Filter parameters left as ``None`` are not sent. The
    returned generators must support ``aclose()`` so a fetch that stops early
    releases the listing.
    """

    def repo_pages(self, org: str, *, type: str = "public") -> AsyncGenerator[Page, None]:
        ...

    def commit_pages(
        self,
        owner: str,
        repo: str,
        *,
        since: str | None = None,
        until: str | None = None,
    ) -> AsyncGenerator[Page, None]:
        ...

    def pull_request_pages(
        self,
        owner: str,
        repo: str,
        *,
        state: str = "all",
        sort: str | None = None,
        direction: str | None = None,
    ) -> AsyncGenerator[Page, None]:
        ...
