from __future__ import annotations

"""
Output Formatting and Persistence.

Builds the concatenated file-contents dump from the aggregated tree and
handles writing the final document to disk.
"""

import logging
import os
from typing import List

from contextmaker.domain.constants import CODE_FENCE, FILE_HEADER
from contextmaker.domain.tree_models import DirectoryNode, FileNode, Tree

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CONTENT DUMP
# -----------------------------------------------------------------------------

def format_entry(node: FileNode) -> str:
    """Header line plus fenced content for a single file."""
    header = FILE_HEADER.format(path=node.path)
    return f"\n\n{header}\n\n{CODE_FENCE}\n{node.content}\n{CODE_FENCE}"


def render_contents(tree: Tree) -> str:
    """
    Concatenate every file of the tree in depth-first order.

    Directories contribute no header of their own. The result is stripped
    of leading and trailing whitespace; an empty tree yields ''.

    Args:
        tree: Sorted top-level node list.

    Returns:
        str: The contents dump.
    """
    parts: List[str] = []
    _collect_entries(tree, parts)
    return "".join(parts).strip()


def _collect_entries(nodes: Tree, parts: List[str]) -> None:
    for node in nodes:
        if isinstance(node, DirectoryNode):
            _collect_entries(node.children, parts)
        else:
            parts.append(format_entry(node))

# -----------------------------------------------------------------------------
# FILE OUTPUT MANAGEMENT
# -----------------------------------------------------------------------------

def write_document(output_path: str, document: str) -> str:
    """
    Persist the combined document, creating parent directories as needed.

    Args:
        output_path: Target file path.
        document: Text to write.

    Returns:
        str: Absolute path of the written file.
    """
    abs_path = os.path.abspath(output_path)
    parent = os.path.dirname(abs_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(abs_path, "w", encoding="utf-8") as f:
        f.write(document)

    logger.info(f"Document saved to file: {abs_path}")
    return abs_path
