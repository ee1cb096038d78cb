"""Regex grammar for commit-pinned GitLab file permalinks."""

from __future__ import annotations

import re
from collections.abc import Iterator
from urllib.parse import urlparse

from permalink_preview.permalinks.models import PermalinkInfo, Replacement

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def build_permalink_regex(base_url: str = "https://gitlab.com") -> re.Pattern[str]:
    """Compile the permalink pattern for a GitLab instance.

    Matches ``<base>/<user>/<repo>/-/blob/<commit>/<path>[#<line>]``. The
    ``www.`` prefix and the scheme are optional in the base URL and
    ``http``/``https`` are both accepted in messages.
    """
    parsed = urlparse(base_url if "://" in base_url else f"https://{base_url}")
    host = (parsed.netloc or "").lower()
    if not host:
        raise ValueError(f"Cannot build permalink pattern from {base_url!r}")
    host = host.removeprefix("www.")
    prefix = parsed.path.rstrip("/")
    return re.compile(
        r"https?://(?P<haswww>www\.)?"
        + re.escape(host)
        + re.escape(prefix)
        + r"/(?P<user>[\w.-]+(?:/[\w.-]+)*?)"
        r"/(?P<repo>[\w.-]+)"
        r"/-/blob/(?P<commit>\w+)"
        # a path never ends with '.', so trailing sentence punctuation stays outside
        r"/(?P<path>[\w./-]*[\w/-])"
        r"(?:#(?P<line>[\w-]+))?",
        re.IGNORECASE,
    )


GITLAB_PERMALINK_RE = build_permalink_regex()


def iter_permalinks(msg: str, pattern: re.Pattern[str] = GITLAB_PERMALINK_RE) -> Iterator[Replacement]:
    """Yield every permalink in ``msg`` in ascending offset order."""
    for m in pattern.finditer(msg):
        info = PermalinkInfo(
            has_www=bool(m.group("haswww")),
            user=m.group("user"),
            repo=m.group("repo"),
            commit=m.group("commit"),
            path=m.group("path"),
            line=m.group("line") or "",
        )
        yield Replacement(index=m.start(), word=m.group(0), info=info)


def is_valid_commit(commit: str) -> bool:
    """True for full or abbreviated hexadecimal SHAs."""
    return bool(_HEX_RE.fullmatch(commit))
