"""
Utility functions for InsightAI application.
"""
import threading
import time
import logging

logger = logging.getLogger("insightai.utils")

_id_lock = threading.Lock()
_last_id = 0


def make_history_id() -> str:
    """
    Generate a unique, time-derived history identifier.

    Identifiers are nanosecond timestamps, bumped by one when two items are
    created within the same clock tick, so they are strictly increasing.

    Returns:
        Identifier string
    """
    global _last_id
    with _id_lock:
        candidate = time.time_ns()
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
    return str(candidate)


def validate_file_type(content_type: str, allowed_types: list) -> bool:
    """
    Validate if file content type is allowed.

    Args:
        content_type: MIME type of the file
        allowed_types: List of allowed MIME types or prefixes

    Returns:
        True if file type is allowed, False otherwise
    """
    if not content_type:
        return False
    for allowed_type in allowed_types:
        if content_type.startswith(allowed_type.rstrip("*")):
            return True
    return False


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB")
    """
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} TB"
