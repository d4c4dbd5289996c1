"""GitHub API operations: paginated organisation repository listing."""

from __future__ import annotations

import json
import re
import urllib.error
import urllib.request
from collections.abc import Iterator
from typing import Any
from urllib.parse import quote, urlencode

from .constants import API_BASE, GITHUB_API_ACCEPT, HTTP_TIMEOUT_SEC, PER_PAGE, USER_AGENT
from .types import Repository

_NEXT_LINK_RE = re.compile(r'<([^>]+)>;\s*rel="next"')


class GitHubError(RuntimeError):
    pass


def next_page_url(link_header: str | None) -> str | None:
    """Return the rel="next" URL from a Link header, or None on the last page."""
    if not link_header:
        return None
    m = _NEXT_LINK_RE.search(link_header)
    return m.group(1) if m else None


class GitHubClient:
    def __init__(self, token: str, api_base: str = API_BASE, timeout: float = HTTP_TIMEOUT_SEC) -> None:
        self.token = token
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    # ---------- low-level HTTP ----------
    def _request_json(self, url: str) -> tuple[Any, str | None]:
        """GET url and return (decoded body, next page url)."""
        req = urllib.request.Request(url)
        req.add_header("Accept", GITHUB_API_ACCEPT)
        req.add_header("User-Agent", USER_AGENT)
        req.add_header("Authorization", f"Bearer {self.token}")
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                data = json.loads(resp.read().decode("utf-8"))
                link = resp.headers.get("Link")
        except urllib.error.HTTPError as e:
            raise GitHubError(f"GET {url}: {e.code} {e.reason}") from e
        except urllib.error.URLError as e:
            raise GitHubError(f"GET {url}: {e.reason}") from e
        except (OSError, ValueError) as e:
            raise GitHubError(f"GET {url}: {e}") from e
        return data, next_page_url(link)

    # ---------- public API ----------
    def org_repos_url(self, org: str, per_page: int = PER_PAGE) -> str:
        query = urlencode({"type": "all", "per_page": per_page, "page": 1})
        return f"{self.api_base}/orgs/{quote(org, safe='')}/repos?{query}"

    def iter_org_repos(self, org: str, per_page: int = PER_PAGE) -> Iterator[Repository]:
        """Yield every repository of org (private and forks included), page by page.

        Stops when the API reports no further page. Any request failure raises
        GitHubError and ends the iteration.
        """
        url: str | None = self.org_repos_url(org, per_page)
        while url:
            data, url = self._request_json(url)
            if not isinstance(data, list):
                raise GitHubError(f"unexpected response listing {org} repos: {data!r}")
            try:
                page = [Repository(name=r["name"], ssh_url=r["ssh_url"]) for r in data]
            except (KeyError, TypeError) as e:
                raise GitHubError(f"malformed repository in {org} listing: {e!r}") from e
            yield from page

    def list_org_repos(self, org: str, per_page: int = PER_PAGE) -> list[Repository]:
        return list(self.iter_org_repos(org, per_page))
