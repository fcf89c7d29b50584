from __future__ import annotations

"""
Resilient File Reading Component.

Resolves the textual content of a handle. Binary files are never read, and
read failures are converted into an inline placeholder so a single bad file
cannot abort an aggregation pass.
"""

import logging
from typing import Optional, Tuple

from contextmaker.core.pipeline.components.filters import ClassificationPolicy, is_binary
from contextmaker.domain.constants import (
    BINARY_PLACEHOLDER,
    READ_ERROR_PLACEHOLDER,
    UNKNOWN_MEDIA_TYPE,
)
from contextmaker.domain.source_models import RawFileHandle

logger = logging.getLogger(__name__)

CONTENT_TEXT = "text"
CONTENT_BINARY = "binary"
CONTENT_ERROR = "error"

# -----------------------------------------------------------------------------
# CONTENT RESOLUTION
# -----------------------------------------------------------------------------

def binary_placeholder(handle: RawFileHandle) -> str:
    """Placeholder text naming the declared media type."""
    return BINARY_PLACEHOLDER.format(media_type=handle.media_type or UNKNOWN_MEDIA_TYPE)


def read_error_placeholder(error: BaseException) -> str:
    """Placeholder text embedding the read failure."""
    return READ_ERROR_PLACEHOLDER.format(error=error)


def read_entry(
        handle: RawFileHandle,
        policy: Optional[ClassificationPolicy] = None,
) -> Tuple[str, str]:
    """
    Resolve a handle and report how its content was obtained.

    Designed to run inside a ThreadPoolExecutor; it never raises.

    Args:
        handle: The file handle to resolve.
        policy: Classification policy used for binary detection.

    Returns:
        Tuple[str, str]: The content and one of 'text', 'binary', 'error'.
    """
    if is_binary(handle, policy):
        logger.debug(f"Binary content skipped: {handle.name} ({handle.media_type or UNKNOWN_MEDIA_TYPE})")
        return binary_placeholder(handle), CONTENT_BINARY

    try:
        return handle.read_text(), CONTENT_TEXT
    except Exception as e:
        logger.warning(f"Failed to read '{handle.relative_path or handle.name}': {e}")
        return read_error_placeholder(e), CONTENT_ERROR


def resolve_content(handle: RawFileHandle, policy: Optional[ClassificationPolicy] = None) -> str:
    """
    Return the text to emit for a handle.

    Args:
        handle: The file handle to resolve.
        policy: Classification policy used for binary detection.

    Returns:
        str: Decoded text, or a binary/read-error placeholder.
    """
    content, _ = read_entry(handle, policy)
    return content
