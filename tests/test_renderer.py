"""Tests for permalink_preview.permalinks.renderer."""

from permalink_preview.permalinks.renderer import TRUNCATION_MARKER, render_snippet

WORD = "https://gitlab.com/acme/widgets/-/blob/abc123/src/main.py#L1-2"


class TestRenderSnippet:
    def test_label_and_fence(self):
        out = render_snippet("acme", "widgets", "src/main.py", WORD, "x = 1\ny = 2\n")
        assert out == (
            f"\n[acme/widgets/src/main.py]({WORD})\n"
            "```py\n"
            "x = 1\ny = 2\n"
            "```\n"
        )

    def test_truncation_marker(self):
        out = render_snippet("acme", "widgets", "a.go", WORD, "x\n", truncated=True)
        assert out.endswith(f"x\n{TRUNCATION_MARKER}```\n")

    def test_no_marker_when_not_truncated(self):
        out = render_snippet("acme", "widgets", "a.go", WORD, "x\n")
        assert TRUNCATION_MARKER not in out

    def test_no_extension(self):
        out = render_snippet("acme", "widgets", "Makefile", WORD, "all:\n")
        assert "\n```\nall:\n" in out

    def test_dotfile_has_no_language(self):
        out = render_snippet("acme", "widgets", "config/.env", WORD, "A=1\n")
        assert "\n```\nA=1\n" in out
