"""Pydantic models for permalink scanning and resolution."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SkipReason(str, Enum):
    """Why a single permalink occurrence was left as raw text."""

    invalid_commit_hash = "invalid_commit_hash"
    fetch_failed = "fetch_failed"
    not_a_file = "not_a_file"
    decode_failed = "decode_failed"
    invalid_line_anchor = "invalid_line_anchor"
    line_range_out_of_bounds = "line_range_out_of_bounds"


class PermalinkInfo(BaseModel):
    """Coordinates captured from one permalink URL."""

    model_config = ConfigDict(frozen=True)

    has_www: bool = False
    user: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    commit: str
    path: str = Field(min_length=1)
    line: str = ""

    @property
    def project_path(self) -> str:
        return f"{self.user}/{self.repo}"


class Replacement(BaseModel):
    """A candidate substitution.

    ``index`` is the offset of ``word`` in the original, unmodified message.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    word: str = Field(min_length=1)
    info: PermalinkInfo


class LineRange(BaseModel):
    """Resolved 1-based inclusive line window; (-1, -1) marks an unusable anchor."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    truncated: bool = False

    @classmethod
    def invalid(cls) -> LineRange:
        return cls(start=-1, end=-1)

    @property
    def is_valid(self) -> bool:
        return self.start >= 1 and self.end >= self.start
