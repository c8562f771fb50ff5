"""Status formatting utilities."""

from rich.text import Text

from git_repo_keeper.models.status import Status, StatusKind
from git_repo_keeper.constants import STATUS_COLORS, STATUS_DISPLAY


def format_status(status: Status) -> str:
    """
    Format a status as display text.

    Args:
        status: Repository or submodule status

    Returns:
        Display text, including commit counts where the variant has them

    Example:
        "unpushed (2)", "diverged (+1/-3)", "clean"
    """
    label = STATUS_DISPLAY[status.kind]
    if status.kind == StatusKind.AHEAD:
        return f"{label} ({status.ahead})"
    if status.kind == StatusKind.BEHIND:
        return f"{label} ({status.behind})"
    if status.kind == StatusKind.DIVERGED:
        return f"{label} (+{status.ahead}/-{status.behind})"
    return label


def status_style(status: Status) -> str:
    """Rich style name for a status."""
    return STATUS_COLORS[status.kind]


def styled_status(status: Status) -> Text:
    """Status text with its style applied."""
    return Text(format_status(status), style=status_style(status))
