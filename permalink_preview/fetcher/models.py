"""Pydantic models for fetched file content."""

from pydantic import BaseModel, ConfigDict, Field


class FetchResult(BaseModel):
    """Outcome of fetching one file at one ref.

    Exactly one of three shapes: ``content`` set (success), ``found``
    false (missing or not a regular file), or ``error`` set.
    """

    model_config = ConfigDict(frozen=True)

    content: str | None = Field(default=None, description="Transport-encoded file content")
    encoding: str = "base64"
    found: bool = True
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.found and self.content is not None

    @classmethod
    def not_found(cls) -> "FetchResult":
        return cls(found=False)

    @classmethod
    def failed(cls, error: str) -> "FetchResult":
        return cls(error=error)
