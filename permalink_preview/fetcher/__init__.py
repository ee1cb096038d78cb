"""Content fetchers for permalink previews."""

import logging
import os

from permalink_preview.config.models import GitLabConfig
from permalink_preview.fetcher.base import ContentFetcher
from permalink_preview.fetcher.gitlab import GitLabFetcher
from permalink_preview.fetcher.models import FetchResult

logger = logging.getLogger(__name__)


def create_fetcher(config: GitLabConfig) -> ContentFetcher:
    """Create a GitLab fetcher from config.

    Resolves the token from the environment variable named in config.token_env.
    Without a token only public projects can be previewed.
    """
    token = os.environ.get(config.token_env, "")
    if not token:
        logger.debug("%s is not set; fetching anonymously", config.token_env)
    return GitLabFetcher(base_url=config.base_url, token=token, api_path=config.api_path)


__all__ = [
    "ContentFetcher",
    "FetchResult",
    "GitLabFetcher",
    "create_fetcher",
]
