"""Shared test fixtures for Permalink Preview."""

import base64

import pytest
from unittest.mock import AsyncMock, MagicMock

from permalink_preview.config.models import PermalinkConfig, PreviewConfig
from permalink_preview.fetcher.base import ContentFetcher
from permalink_preview.fetcher.models import FetchResult

SHA = "3f786850e387550fdab836ed7e6dc881de23001b"
OTHER_SHA = "89e6c98d92887913cadf06b2adb97f26cde4849b"


def make_permalink(
    path: str = "README.md",
    anchor: str | None = "L5",
    commit: str = SHA,
    project: str = "acme/widgets",
    host: str = "gitlab.com",
) -> str:
    url = f"https://{host}/{project}/-/blob/{commit}/{path}"
    if anchor is not None:
        url += f"#{anchor}"
    return url


def encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


@pytest.fixture
def twenty_line_file():
    return "".join(f"line {n}\n" for n in range(1, 21))


@pytest.fixture
def mock_fetcher(twenty_line_file):
    fetcher = MagicMock(spec=ContentFetcher)
    fetcher.fetch = AsyncMock(return_value=FetchResult(content=encode(twenty_line_file)))
    return fetcher


@pytest.fixture
def permalink_config():
    return PermalinkConfig()


@pytest.fixture
def sample_config():
    return PreviewConfig()
