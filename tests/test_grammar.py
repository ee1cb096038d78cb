"""Tests for permalink_preview.permalinks.grammar — URL pattern and captures."""

import pytest

from permalink_preview.permalinks.grammar import (
    GITLAB_PERMALINK_RE,
    build_permalink_regex,
    is_valid_commit,
    iter_permalinks,
)

from .conftest import SHA, make_permalink


# ── iter_permalinks ────────────────────────────────────────────────


class TestIterPermalinks:
    def test_captures_all_fields(self):
        url = make_permalink(path="src/app/main.py", anchor="L10-20")
        [r] = list(iter_permalinks(f"look: {url}"))
        assert r.index == 6
        assert r.word == url
        assert r.info.user == "acme"
        assert r.info.repo == "widgets"
        assert r.info.commit == SHA
        assert r.info.path == "src/app/main.py"
        assert r.info.line == "L10-20"
        assert r.info.has_www is False

    def test_www_prefix(self):
        url = make_permalink(host="www.gitlab.com")
        [r] = list(iter_permalinks(url))
        assert r.info.has_www is True

    def test_anchor_optional(self):
        url = make_permalink(anchor=None)
        [r] = list(iter_permalinks(url))
        assert r.info.line == ""
        assert r.word == url

    def test_matches_in_ascending_order(self):
        a = make_permalink(path="a.py")
        b = make_permalink(path="b.py")
        found = list(iter_permalinks(f"{a} and {b}"))
        assert [r.info.path for r in found] == ["a.py", "b.py"]
        assert found[0].index < found[1].index

    def test_nested_group_in_user(self):
        url = make_permalink(project="acme/platform/widgets")
        [r] = list(iter_permalinks(url))
        assert r.info.user == "acme/platform"
        assert r.info.repo == "widgets"
        assert r.info.project_path == "acme/platform/widgets"

    def test_trailing_period_not_captured(self):
        url = make_permalink(anchor=None, path="docs/setup.md")
        [r] = list(iter_permalinks(f"See {url}."))
        assert r.info.path == "docs/setup.md"
        assert r.word == url

    def test_tree_urls_ignored(self):
        msg = f"https://gitlab.com/acme/widgets/-/tree/{SHA}/src"
        assert list(iter_permalinks(msg)) == []

    def test_other_host_ignored(self):
        msg = make_permalink(host="github.com")
        assert list(iter_permalinks(msg)) == []

    def test_plain_text_has_no_matches(self):
        assert list(iter_permalinks("nothing to see here")) == []


# ── build_permalink_regex ──────────────────────────────────────────


class TestBuildPermalinkRegex:
    def test_self_hosted_instance(self):
        pattern = build_permalink_regex("https://gitlab.example.com")
        url = make_permalink(host="gitlab.example.com")
        assert pattern.search(url) is not None
        assert pattern.search(make_permalink()) is None

    def test_sub_path_prefix(self):
        pattern = build_permalink_regex("https://example.com/gitlab/")
        url = make_permalink(host="example.com/gitlab")
        [r] = list(iter_permalinks(url, pattern))
        assert r.info.user == "acme"

    def test_scheme_optional_in_base_url(self):
        pattern = build_permalink_regex("gitlab.example.com")
        assert pattern.search(make_permalink(host="gitlab.example.com")) is not None

    def test_host_is_escaped(self):
        pattern = build_permalink_regex("https://gitlab.example.com")
        assert pattern.search(make_permalink(host="gitlabXexample.com")) is None

    def test_empty_base_url_rejected(self):
        with pytest.raises(ValueError):
            build_permalink_regex("https://")

    def test_default_pattern_is_gitlab_com(self):
        assert GITLAB_PERMALINK_RE.search(make_permalink()) is not None


# ── is_valid_commit ────────────────────────────────────────────────


class TestIsValidCommit:
    def test_full_sha(self):
        assert is_valid_commit(SHA) is True

    def test_abbreviated_sha(self):
        assert is_valid_commit("abc1234") is True

    def test_non_hex_rejected(self):
        assert is_valid_commit("main") is False
        assert is_valid_commit("release_1") is False

    def test_empty_rejected(self):
        assert is_valid_commit("") is False
