"""Abstract content-fetcher interface."""

from abc import ABC, abstractmethod

from permalink_preview.fetcher.models import FetchResult


class ContentFetcher(ABC):
    """Retrieves raw file content from a code-hosting service.

    Implementations report failures through the returned FetchResult
    rather than raising.
    """

    @abstractmethod
    async def fetch(
        self, owner: str, repo: str, ref: str, path: str, timeout: float
    ) -> FetchResult:
        """Fetch one file at a commit.

        Args:
            owner: Namespace of the project (may contain '/' for subgroups).
            repo: Project name.
            ref: Commit SHA the permalink is pinned to.
            path: File path within the repository.
            timeout: Upper bound in seconds for the remote call.
        """
        ...
