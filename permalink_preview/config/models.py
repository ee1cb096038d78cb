from pydantic import BaseModel, Field
from typing import Literal


class PermalinkConfig(BaseModel):
    max_replacements: int = Field(default=10, ge=0)
    fetch_timeout: float = Field(default=5.0, gt=0)
    max_preview_lines: int = Field(default=10, ge=0)
    line_context: int = Field(default=3, ge=0)
    max_concurrent_fetches: int = Field(default=1, ge=1)


class GitLabConfig(BaseModel):
    base_url: str = "https://gitlab.com"
    api_path: str = "/api/v4"
    token_env: str = "GITLAB_TOKEN"


class PreviewConfig(BaseModel):
    gitlab: GitLabConfig = Field(default_factory=GitLabConfig)
    permalinks: PermalinkConfig = Field(default_factory=PermalinkConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
