"""Permalink Preview — expands GitLab permalinks in chat messages into code previews."""

__version__ = "0.1.0"
