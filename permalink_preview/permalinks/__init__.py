"""Permalink scanning, resolution and rewriting."""

from permalink_preview.permalinks.anchors import filter_lines, resolve_anchor
from permalink_preview.permalinks.engine import PermalinkRewriter, splice
from permalink_preview.permalinks.grammar import (
    GITLAB_PERMALINK_RE,
    build_permalink_regex,
    is_valid_commit,
    iter_permalinks,
)
from permalink_preview.permalinks.links import is_inside_link
from permalink_preview.permalinks.models import (
    LineRange,
    PermalinkInfo,
    Replacement,
    SkipReason,
)
from permalink_preview.permalinks.renderer import render_snippet

__all__ = [
    "GITLAB_PERMALINK_RE",
    "LineRange",
    "PermalinkInfo",
    "PermalinkRewriter",
    "Replacement",
    "SkipReason",
    "build_permalink_regex",
    "filter_lines",
    "is_inside_link",
    "is_valid_commit",
    "iter_permalinks",
    "render_snippet",
    "resolve_anchor",
    "splice",
]
