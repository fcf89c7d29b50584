from __future__ import annotations

"""
Tree Renderer.

Converts the aggregated tree into its box-drawing directory listing.
"""

from typing import List

from contextmaker.domain.constants import (
    BRANCH_CONNECTOR,
    BRANCH_PADDING,
    LAST_CONNECTOR,
    LAST_PADDING,
)
from contextmaker.domain.tree_models import DirectoryNode, Tree

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_structure(tree: Tree) -> str:
    """
    Render the directory listing of a sorted tree.

    Every top-level node is printed bare; directory children are drawn
    below it with '├──'/'└──' connectors.

    Args:
        tree: Sorted top-level node list.

    Returns:
        str: One line per node, each terminated by a newline.
    """
    lines: List[str] = []
    for node in tree:
        lines.append(node.name)
        if isinstance(node, DirectoryNode):
            render_tree_structure(node.children, lines, prefix="")
    return "".join(f"{line}\n" for line in lines)


def render_tree_structure(nodes: Tree, lines: List[str], prefix: str = "") -> None:
    """
    Recursively transform child nodes into connector lines.

    Args:
        nodes: Children of the current directory.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    total = len(nodes)

    for i, node in enumerate(nodes):
        is_last = (i == total - 1)
        connector = LAST_CONNECTOR if is_last else BRANCH_CONNECTOR
        lines.append(f"{prefix}{connector}{node.name}")

        if isinstance(node, DirectoryNode):
            new_prefix = prefix + (LAST_PADDING if is_last else BRANCH_PADDING)
            render_tree_structure(node.children, lines, prefix=new_prefix)
