"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import PreviewConfig

# Only these variables may be pulled into config values via ${VAR}.
_ALLOWED_ENV_VARS = frozenset({"GITLAB_TOKEN", "GITLAB_URL", "HOME", "USER"})


def load_config(cli_path: str | None = None) -> PreviewConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./permalink-preview.yaml"),
        Path.home() / ".permalink-preview" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                allowed = set(_ALLOWED_ENV_VARS)
                token_env = (raw.get("gitlab") or {}).get("token_env")
                if isinstance(token_env, str):
                    allowed.add(token_env)
                raw = _expand_env_vars(raw, allowed)
                return PreviewConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except (ValidationError, TypeError, AttributeError) as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return PreviewConfig()


def _expand_env_vars(obj: object, allowed: set[str] | frozenset[str] | None = None) -> object:
    """Recursively expand ${VAR} references in strings.

    Variables outside the allow-list are left untouched.
    """
    if allowed is None:
        allowed = _ALLOWED_ENV_VARS

    def _sub(m: re.Match) -> str:
        name = m.group(1)
        if name not in allowed:
            return m.group(0)
        return os.environ.get(name, "")

    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", _sub, obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v, allowed) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v, allowed) for v in obj]
    return obj


# Default YAML template for `permalink-preview config init`
DEFAULT_CONFIG_TEMPLATE = """\
# permalink-preview.yaml

# GitLab instance whose permalinks are expanded
gitlab:
  base_url: "https://gitlab.com"   # or ${GITLAB_URL} for self-hosted
  api_path: "/api/v4"
  token_env: "GITLAB_TOKEN"

# Permalink previews
permalinks:
  max_replacements: 10         # candidates considered per message
  fetch_timeout: 5             # seconds per file fetch
  max_preview_lines: 10        # longer ranges are truncated
  line_context: 3              # lines shown around a single-line anchor
  max_concurrent_fetches: 1    # 1 = fetch one file at a time

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
