"""Formatting utilities for git-repo-keeper."""

from .status import format_status, status_style, styled_status

__all__ = [
    "format_status",
    "status_style",
    "styled_status",
]
