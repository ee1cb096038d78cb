from .loader import load_config
from .models import GitLabConfig, PermalinkConfig, PreviewConfig

__all__ = [
    "GitLabConfig",
    "PermalinkConfig",
    "PreviewConfig",
    "load_config",
]
