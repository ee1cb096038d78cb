"""PermalinkRewriter — scans a message, fetches referenced lines, splices previews in."""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging

from permalink_preview.config.models import PermalinkConfig, PreviewConfig
from permalink_preview.fetcher.base import ContentFetcher
from permalink_preview.fetcher.models import FetchResult
from permalink_preview.permalinks.anchors import filter_lines, resolve_anchor
from permalink_preview.permalinks.grammar import (
    build_permalink_regex,
    is_valid_commit,
    iter_permalinks,
)
from permalink_preview.permalinks.links import is_inside_link
from permalink_preview.permalinks.models import LineRange, PermalinkInfo, Replacement, SkipReason
from permalink_preview.permalinks.renderer import render_snippet

logger = logging.getLogger(__name__)


def splice(msg: str, replacement: Replacement, snippet: str) -> str:
    """Replace the first occurrence of ``replacement.word`` at or after its index."""
    head, tail = msg[: replacement.index], msg[replacement.index :]
    return head + tail.replace(replacement.word, snippet, 1)


class PermalinkRewriter:
    """Rewrites GitLab permalinks in chat messages into code previews.

    Every failure is confined to its own occurrence: the link is left as
    raw text, the reason is logged, and the rest of the message is still
    processed.
    """

    def __init__(
        self,
        fetcher: ContentFetcher,
        config: PermalinkConfig | None = None,
        base_url: str = "https://gitlab.com",
    ) -> None:
        self.fetcher = fetcher
        self.config = config or PermalinkConfig()
        self._pattern = build_permalink_regex(base_url)

    @classmethod
    def from_config(cls, config: PreviewConfig, fetcher: ContentFetcher) -> PermalinkRewriter:
        return cls(fetcher, config.permalinks, base_url=config.gitlab.base_url)

    def find_replacements(self, msg: str) -> list[Replacement]:
        """Candidates in ascending index order.

        The cap applies to raw matches before links already inside markdown
        hyperlinks are dropped, so fewer than ``max_replacements`` may remain.
        """
        replacements: list[Replacement] = []
        for i, r in enumerate(iter_permalinks(msg, self._pattern)):
            if i >= self.config.max_replacements:
                break
            if is_inside_link(msg, r.index):
                continue
            replacements.append(r)
        return replacements

    async def rewrite(self, msg: str) -> str:
        """Return ``msg`` with every resolvable permalink replaced by a preview."""
        replacements = self.find_replacements(msg)
        if not replacements:
            return msg

        # Rightmost first: a splice never shifts text to its left.
        ordered = sorted(replacements, key=lambda r: r.index, reverse=True)
        results = await self._resolve_all(ordered)

        applied = 0
        for r, result in zip(ordered, results):
            if isinstance(result, SkipReason):
                continue
            msg = splice(msg, r, result)
            applied += 1
        logger.debug("rewrote %d of %d permalinks", applied, len(ordered))
        return msg

    async def _resolve_all(self, ordered: list[Replacement]) -> list[str | SkipReason]:
        limit = self.config.max_concurrent_fetches
        if limit <= 1:
            return [await self.resolve(r) for r in ordered]

        semaphore = asyncio.Semaphore(limit)

        async def _bounded(r: Replacement) -> str | SkipReason:
            async with semaphore:
                return await self.resolve(r)

        # gather keeps input order, so results still line up with ``ordered``
        return list(await asyncio.gather(*(_bounded(r) for r in ordered)))

    async def resolve(self, r: Replacement) -> str | SkipReason:
        """Run one occurrence through validate → fetch → decode → extract → render."""
        info = r.info
        if not is_valid_commit(info.commit):
            logger.debug("bad git commit hash in permalink: %s", info.commit)
            return SkipReason.invalid_commit_hash

        line_range = resolve_anchor(
            info.line,
            context=self.config.line_context,
            max_preview_lines=self.config.max_preview_lines,
        )
        if not line_range.is_valid:
            return SkipReason.invalid_line_anchor

        fetched = await self._fetch(info)
        if isinstance(fetched, SkipReason):
            return fetched

        text = _decode(fetched, info.path)
        if isinstance(text, SkipReason):
            return text

        lines = _extract(text, line_range, info.path)
        if isinstance(lines, SkipReason):
            return lines

        return render_snippet(
            info.user, info.repo, info.path, r.word, lines, line_range.truncated
        )

    async def _fetch(self, info: PermalinkInfo) -> FetchResult | SkipReason:
        timeout = self.config.fetch_timeout
        try:
            result = await asyncio.wait_for(
                self.fetcher.fetch(info.user, info.repo, info.commit, info.path, timeout),
                timeout=timeout,
            )
        except TimeoutError:
            logger.debug("timed out after %.1fs fetching %s", timeout, info.path)
            return SkipReason.fetch_failed
        except Exception as e:
            logger.debug("error while fetching file contents of %s: %s", info.path, e)
            return SkipReason.fetch_failed

        if result.error is not None:
            logger.debug("error while fetching file contents of %s: %s", info.path, result.error)
            return SkipReason.fetch_failed
        if not result.ok:
            logger.warning("permalink is not a file: %s", info.path)
            return SkipReason.not_a_file
        return result


def _decode(result: FetchResult, path: str) -> str | SkipReason:
    content = result.content or ""
    try:
        if result.encoding == "base64":
            # some servers wrap base64 at 60/76 columns
            raw = base64.b64decode("".join(content.split()), validate=True)
        elif result.encoding == "text":
            return content
        else:
            logger.debug("unsupported content encoding %r for %s", result.encoding, path)
            return SkipReason.decode_failed
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        logger.debug("error while decoding file contents of %s: %s", path, e)
        return SkipReason.decode_failed


def _extract(text: str, line_range: LineRange, path: str) -> str | SkipReason:
    lines = filter_lines(text, line_range.start, line_range.end)
    if not lines:
        logger.debug(
            "line numbers out of range in %s (start=%d, end=%d), skipping",
            path,
            line_range.start,
            line_range.end,
        )
        return SkipReason.line_range_out_of_bounds
    return lines
