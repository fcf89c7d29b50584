from __future__ import annotations

"""
Directory Tree Builder.

Merges every selected Source into one hierarchical tree. Placement and
exclusion are decided first, then the contents of all included files are
resolved concurrently, and finally the nodes are inserted in source order.
Sorting is left to the tree sorter.
"""

import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional

from contextmaker.core.pipeline.components.filters import (
    ClassificationPolicy,
    default_policy,
    is_ignored_name,
)
from contextmaker.core.pipeline.components.path_resolver import (
    resolve_directory_entry,
    resolve_file_entry,
)
from contextmaker.core.pipeline.components.reader import (
    CONTENT_BINARY,
    CONTENT_ERROR,
    read_entry,
)
from contextmaker.domain.pipeline_models import AggregationStats
from contextmaker.domain.source_models import SOURCE_KINDS, RawFileHandle, Source
from contextmaker.domain.tree_models import DirectoryNode, FileNode, Tree

logger = logging.getLogger(__name__)

DEFAULT_READ_WORKERS = 8


@dataclass
class _PlannedEntry:
    """A file that passed the exclusion rules and awaits its content."""
    source_index: int
    handle: RawFileHandle
    segments: Optional[List[str]] = None
    content: str = ""

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(
        sources: Iterable[Source],
        policy: Optional[ClassificationPolicy] = None,
        max_workers: Optional[int] = None,
        cancellation_event: Optional[threading.Event] = None,
        stats: Optional[AggregationStats] = None,
) -> Tree:
    """
    Build the unsorted aggregate tree for a list of Sources.

    Each directory source contributes exactly one fresh Directory Node named
    after the source; loose files become top-level File Nodes.

    Args:
        sources: Sources in selection order.
        policy: Classification policy; the default policy when omitted.
        max_workers: Size of the content reader pool.
        cancellation_event: Aborts the pass when set.
        stats: Optional counters updated in place.

    Returns:
        Tree: The top-level node list.

    Raises:
        CancelledError: If the cancellation event was set during the pass.
        ValueError: If a Source carries an unknown kind.
    """
    policy = policy or default_policy()
    stats = stats if stats is not None else AggregationStats()
    source_list = list(sources)
    stats.sources = len(source_list)

    # 1. Placement and exclusion, no content is read here
    planned = _plan_entries(source_list, policy, stats, cancellation_event)

    # 2. Concurrent content resolution
    _resolve_contents(planned, policy, max_workers, stats, cancellation_event)

    # 3. Insertion in source order
    tree: Tree = []
    roots: List[Optional[DirectoryNode]] = []
    for source in source_list:
        if source.is_directory:
            root = DirectoryNode(name=source.name, path=source.name)
            tree.append(root)
            roots.append(root)
        else:
            roots.append(None)

    for entry in planned:
        root = roots[entry.source_index]
        if root is None:
            name = entry.handle.name
            tree.append(FileNode(name=name, path=name, content=entry.content))
            continue
        if not insert_file(root, entry.segments or [], entry.content, policy, stats):
            logger.debug(f"Not inserted: {entry.handle.relative_path}")

    stats.files_included = count_files(tree)
    logger.debug(f"Tree built: {stats.as_dict()}")
    return tree


def insert_file(
        parent: DirectoryNode,
        segments: List[str],
        content: str,
        policy: Optional[ClassificationPolicy] = None,
        stats: Optional[AggregationStats] = None,
) -> bool:
    """
    Place a file below a directory, creating intermediate directories.

    Directories are looked up by name so each name appears once per level.
    A file never displaces a directory of the same name, while a directory
    needed where a file already sits replaces that file. The first file
    inserted at a given path is kept.

    Args:
        parent: Directory receiving the entry.
        segments: Remaining path segments, file name last.
        content: Resolved file content.
        policy: Classification policy for the terminal name check.
        stats: Optional counters updated in place.

    Returns:
        bool: True if a File Node was added.
    """
    if not segments:
        return False

    head, rest = segments[0], segments[1:]
    current_path = f"{parent.path}/{head}"
    existing = parent.get_child(head)

    if not rest:
        if is_ignored_name(head, policy):
            return False
        if isinstance(existing, DirectoryNode):
            logger.warning(f"Name collision at '{current_path}': directory kept, file dropped.")
            _count_collision(stats)
            return False
        if isinstance(existing, FileNode):
            logger.warning(f"Duplicate file path '{current_path}': first occurrence kept.")
            return False
        parent.add_child(FileNode(name=head, path=current_path, content=content))
        return True

    if isinstance(existing, DirectoryNode):
        directory = existing
    else:
        directory = DirectoryNode(name=head, path=current_path)
        if isinstance(existing, FileNode):
            logger.warning(f"Name collision at '{current_path}': directory replaces file.")
            _count_collision(stats)
            parent.replace_child(existing, directory)
        else:
            parent.add_child(directory)

    return insert_file(directory, rest, content, policy, stats)


def count_files(nodes: Tree) -> int:
    """Count File Nodes in a (sub)tree."""
    total = 0
    for node in nodes:
        if isinstance(node, DirectoryNode):
            total += count_files(node.children)
        else:
            total += 1
    return total

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _plan_entries(
        sources: List[Source],
        policy: ClassificationPolicy,
        stats: AggregationStats,
        cancellation_event: Optional[threading.Event],
) -> List[_PlannedEntry]:
    """
    Apply the exclusion rules and collect the files to read.

    Raises:
        ValueError: If a Source carries an unknown kind.
    """
    planned: List[_PlannedEntry] = []

    for index, source in enumerate(sources):
        _check_cancelled(cancellation_event)
        if source.kind not in SOURCE_KINDS:
            raise ValueError(f"Malformed source '{source.name}': unknown kind '{source.kind}'.")

        for handle in source.handles:
            if source.is_directory:
                segments = resolve_directory_entry(handle, source.name, policy)
                if segments is None:
                    stats.files_ignored += 1
                    continue
                planned.append(_PlannedEntry(index, handle, segments))
            else:
                if not resolve_file_entry(handle, policy):
                    stats.files_ignored += 1
                    continue
                planned.append(_PlannedEntry(index, handle))

    return planned


def _resolve_contents(
        planned: List[_PlannedEntry],
        policy: ClassificationPolicy,
        max_workers: Optional[int],
        stats: AggregationStats,
        cancellation_event: Optional[threading.Event],
) -> None:
    """Read all planned contents in a thread pool, preserving entry order."""
    if not planned:
        return

    workers = max(1, min(max_workers or DEFAULT_READ_WORKERS, len(planned)))

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ContentReader") as executor:
        futures: List[Future] = [
            executor.submit(read_entry, entry.handle, policy) for entry in planned
        ]

        for entry, future in zip(planned, futures):
            if cancellation_event is not None and cancellation_event.is_set():
                for pending in futures:
                    pending.cancel()
                raise CancelledError("Aggregation pass cancelled")

            content, status = future.result()
            entry.content = content
            if status == CONTENT_BINARY:
                stats.binary_files += 1
            elif status == CONTENT_ERROR:
                stats.read_errors += 1


def _check_cancelled(cancellation_event: Optional[threading.Event]) -> None:
    if cancellation_event is not None and cancellation_event.is_set():
        raise CancelledError("Aggregation pass cancelled")


def _count_collision(stats: Optional[AggregationStats]) -> None:
    if stats is not None:
        stats.collisions += 1
