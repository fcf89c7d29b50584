from __future__ import annotations

"""
Path Resolution Component.

Turns a handle's relative path into the logical segment list used for tree
placement, and applies the directory and file-name exclusion rules before
any content is read.
"""

import logging
from typing import List, Optional

from contextmaker.core.pipeline.components.filters import (
    ClassificationPolicy,
    is_ignored_dir_segment,
    is_ignored_name,
)
from contextmaker.domain.source_models import RawFileHandle

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SEGMENT RESOLUTION
# -----------------------------------------------------------------------------

def split_relative_path(handle: RawFileHandle, source_name: str) -> List[str]:
    """
    Split a handle's relative path into placement segments.

    The leading segment is dropped when it repeats the source root name and
    more segments follow, since folder pickers prefix every relative path
    with the selected folder.

    Args:
        handle: File handle of a directory source.
        source_name: Root name of the owning directory source.

    Returns:
        List[str]: Segments below the source root, file name last.
    """
    parts = [p for p in (handle.relative_path or "").split("/") if p]
    if not parts:
        parts = [handle.name]

    if len(parts) > 1 and parts[0] == source_name:
        return parts[1:]
    return parts


def resolve_directory_entry(
        handle: RawFileHandle,
        source_name: str,
        policy: Optional[ClassificationPolicy] = None,
) -> Optional[List[str]]:
    """
    Resolve placement of a directory-source file.

    Args:
        handle: File handle of a directory source.
        source_name: Root name of the owning directory source.
        policy: Classification policy to apply.

    Returns:
        Optional[List[str]]: Segments below the source root, or None when
        any segment is an ignored directory or the file name is ignored.
    """
    segments = split_relative_path(handle, source_name)

    if any(is_ignored_dir_segment(s, policy) for s in segments):
        logger.debug(f"Ignored directory in path: {handle.relative_path}")
        return None

    if is_ignored_name(segments[-1], policy):
        logger.debug(f"Ignored file name: {handle.relative_path}")
        return None

    return segments


def resolve_file_entry(handle: RawFileHandle, policy: Optional[ClassificationPolicy] = None) -> bool:
    """Decide whether a loose file is included. Its bare name is its path."""
    if is_ignored_name(handle.name, policy):
        logger.debug(f"Ignored file name: {handle.name}")
        return False
    return True
