"""Threading utilities for sizing the repository scan pool."""

import os
import sys
from typing import Dict, Any, Optional

# Fetches hit remote hosts; never fan out wider than this
MAX_WORKERS = 32


def is_free_threading_enabled() -> bool:
    """Detect if Python is running with free-threading enabled.

    Returns:
        True if running on Python 3.13+ with GIL disabled (free-threading mode)
        False if running with GIL enabled or Python < 3.13
    """
    # sys._is_gil_enabled() exists on 3.13+ and returns False when the GIL is off
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    return is_gil_enabled is not None and not is_gil_enabled()


def get_python_threading_mode() -> str:
    """Get a description of the current threading mode."""
    if not hasattr(sys, "_is_gil_enabled"):
        return "GIL-enabled (Python < 3.13)"
    return "free-threading" if is_free_threading_enabled() else "GIL-enabled"


def get_optimal_worker_count(user_specified: Optional[int] = None, tasks: Optional[int] = None) -> int:
    """Size the worker pool for scanning repositories.

    Scans spend most of their time waiting on git subprocesses and network
    fetches, so the pool is wider than the CPU count but always bounded.

    Args:
        user_specified: User-specified worker count, if provided
        tasks: Number of repositories to scan, if known

    Returns:
        Number of workers, at least 1
    """
    if user_specified is not None and user_specified > 0:
        workers = user_specified
    else:
        cpu_count = os.cpu_count() or 1
        if is_free_threading_enabled():
            workers = cpu_count * 2
        else:
            workers = cpu_count + 4
        workers = min(MAX_WORKERS, workers)

    if tasks is not None:
        workers = min(workers, max(1, tasks))
    return workers


def get_threading_info() -> Dict[str, Any]:
    """Get information about Python threading configuration for debug output."""
    return {
        "mode": get_python_threading_mode(),
        "free_threading": is_free_threading_enabled(),
        "cpu_count": os.cpu_count() or 1,
        "optimal_workers": get_optimal_worker_count(),
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    }
