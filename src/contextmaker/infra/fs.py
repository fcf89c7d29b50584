from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Turns local paths into Sources, reproducing what a browser folder picker
reports: a flat list of file handles whose relative paths start with the
selected folder's name. This is the only place that walks the disk; the
aggregation core only ever sees handles.
"""

import logging
import os
from typing import Iterable, List, Optional

from contextmaker.core.pipeline.components.filters import (
    ClassificationPolicy,
    is_ignored_dir_segment,
)
from contextmaker.domain.source_models import (
    RawFileHandle,
    Source,
    create_directory_source,
    create_file_sources,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# HANDLE CREATION
# -----------------------------------------------------------------------------

def handle_from_path(path: str, relative_path: str = "") -> RawFileHandle:
    """Create a lazily-read handle for a file on disk."""
    return RawFileHandle.from_path(path, relative_path=relative_path)


def collect_directory_handles(
        dir_path: str,
        policy: Optional[ClassificationPolicy] = None,
) -> List[RawFileHandle]:
    """
    Enumerate every file below a directory as a flat handle list.

    Relative paths are slash-delimited and rooted at the directory's base
    name. Ignored directories are pruned during the walk so their contents
    are never enumerated.

    Args:
        dir_path: Directory to walk.
        policy: Classification policy used for pruning.

    Returns:
        List[RawFileHandle]: Handles in deterministic walk order.
    """
    root_abs = os.path.abspath(dir_path)
    root_name = os.path.basename(os.path.normpath(root_abs))
    handles: List[RawFileHandle] = []

    for root, dirs, files in os.walk(root_abs):
        # In-place directory pruning to optimize traversal
        dirs[:] = [d for d in dirs if not is_ignored_dir_segment(d, policy)]
        dirs.sort()
        files.sort()

        rel_root = os.path.relpath(root, root_abs)
        rel_parts = [] if rel_root == "." else rel_root.split(os.sep)

        for file_name in files:
            file_path = os.path.join(root, file_name)
            if not os.path.isfile(file_path):
                continue
            relative_path = "/".join([root_name, *rel_parts, file_name])
            handles.append(handle_from_path(file_path, relative_path))

    logger.debug(f"Collected {len(handles)} files from {root_abs}")
    return handles

# -----------------------------------------------------------------------------
# SOURCE CREATION
# -----------------------------------------------------------------------------

def sources_from_paths(
        paths: Iterable[str],
        policy: Optional[ClassificationPolicy] = None,
) -> List[Source]:
    """
    Convert local paths into Sources in the order given.

    Directories become directory sources; regular files become file sources.

    Args:
        paths: Files and directories selected by the user.
        policy: Classification policy used to prune directory walks.

    Returns:
        List[Source]: One Source per path.

    Raises:
        FileNotFoundError: If a path does not exist.
    """
    sources: List[Source] = []

    for path in paths:
        if os.path.isdir(path):
            handles = collect_directory_handles(path, policy)
            name = os.path.basename(os.path.normpath(os.path.abspath(path)))
            sources.append(create_directory_source(handles, name=name))
        elif os.path.isfile(path):
            sources.extend(create_file_sources([handle_from_path(path)]))
        else:
            raise FileNotFoundError(f"Input path does not exist: {path}")

    return sources
