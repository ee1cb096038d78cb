"""GitLab content fetcher using the repository files REST API via httpx."""

from __future__ import annotations

import logging
from urllib.parse import quote, urlparse

import httpx

from permalink_preview.fetcher.base import ContentFetcher
from permalink_preview.fetcher.models import FetchResult

logger = logging.getLogger(__name__)


def _validate_base_url(url: str) -> str:
    """Reject non-http(s) URLs and header injection attempts."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"GitLab base_url must be http(s), got {parsed.scheme!r}")
    if "\r" in url or "\n" in url:
        raise ValueError("CRLF injection detected in base_url")
    if not parsed.hostname:
        raise ValueError(f"GitLab base_url has no host: {url!r}")
    return url


class GitLabFetcher(ContentFetcher):
    """Fetches files through ``GET /projects/:id/repository/files/:path``.

    The API answers with the file body base64-encoded in ``content``;
    it is returned as-is for the caller to decode.
    """

    def __init__(
        self,
        base_url: str = "https://gitlab.com",
        token: str | None = None,
        api_path: str = "/api/v4",
    ) -> None:
        self._base_url = _validate_base_url(base_url.rstrip("/"))
        self._api_path = "/" + api_path.strip("/")
        self._token = token or ""

    def _headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {"PRIVATE-TOKEN": self._token}

    def file_url(self, owner: str, repo: str, path: str) -> str:
        project = quote(f"{owner}/{repo}", safe="")
        return (
            f"{self._base_url}{self._api_path}/projects/{project}"
            f"/repository/files/{quote(path, safe='')}"
        )

    async def fetch(
        self, owner: str, repo: str, ref: str, path: str, timeout: float
    ) -> FetchResult:
        url = self.file_url(owner, repo, path)
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                resp = await client.get(url, params={"ref": ref}, headers=self._headers())
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            # 404 covers both missing paths and directories
            return FetchResult.failed(f"HTTP {e.response.status_code} from {url}")
        except httpx.HTTPError as e:
            return FetchResult.failed(f"{type(e).__name__}: {e}")
        except ValueError as e:
            return FetchResult.failed(f"invalid JSON from {url}: {e}")

        # Directories and other non-blob entries carry no content.
        if not isinstance(data, dict) or not isinstance(data.get("content"), str):
            return FetchResult.not_found()
        return FetchResult(content=data["content"], encoding=data.get("encoding") or "base64")
