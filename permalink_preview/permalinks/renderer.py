"""Markdown rendering for code previews."""

import posixpath

TRUNCATION_MARKER = "...\n"


def _language_hint(path: str) -> str:
    ext = posixpath.splitext(path)[1]
    return ext[1:] if len(ext) > 1 else ""


def render_snippet(
    user: str, repo: str, path: str, word: str, lines: str, truncated: bool = False
) -> str:
    """Build the preview that replaces a permalink in a message.

    A ``[user/repo/path](permalink)`` label followed by a fenced block
    tagged with the file extension. ``lines`` must be newline-terminated.
    """
    final = f"\n[{user}/{repo}/{path}]({word})\n"
    final += f"```{_language_hint(path)}\n"
    final += lines
    if truncated:
        final += TRUNCATION_MARKER
    final += "```\n"
    return final
