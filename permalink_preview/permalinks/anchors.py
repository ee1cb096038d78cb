"""Line-anchor resolution and line extraction."""

from __future__ import annotations

import re

from permalink_preview.permalinks.models import LineRange

# L10, L10-20 (GitLab) and L10-L20 (GitHub style)
_ANCHOR_RE = re.compile(r"L(?P<start>\d+)(?:-L?(?P<end>\d+))?")


def resolve_anchor(anchor: str, context: int = 3, max_preview_lines: int = 10) -> LineRange:
    """Turn a ``#L..`` fragment into a concrete line window.

    A single line is padded by ``context`` lines on both sides (start
    clamped to 1). A range is used as-is. Windows spanning more than
    ``max_preview_lines`` keep their start and are cut to
    ``start + max_preview_lines`` with ``truncated`` set. An empty or
    unparseable anchor yields ``LineRange.invalid()``.
    """
    m = _ANCHOR_RE.fullmatch(anchor)
    if m is None:
        return LineRange.invalid()

    line = int(m.group("start"))
    if line < 1:
        return LineRange.invalid()
    if m.group("end") is None:
        start, end = max(line - context, 1), line + context
    else:
        start, end = line, int(m.group("end"))

    if start < 1 or end < start:
        return LineRange.invalid()

    if end - start > max_preview_lines:
        return LineRange(start=start, end=start + max_preview_lines, truncated=True)
    return LineRange(start=start, end=end)


def filter_lines(text: str, start: int, end: int) -> str:
    """Return lines ``start..end`` (1-based, inclusive), each newline-terminated.

    Lines past the end of ``text`` are simply absent; an empty string
    means the window holds no lines at all.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    window = (line.removesuffix("\r") for line in lines[start - 1 : end])
    return "".join(f"{line}\n" for line in window)
