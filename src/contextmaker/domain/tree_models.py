from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the node types of the aggregated tree. Directory nodes keep an
ordered child list for serialization and a name index for constant-time
lookup while the tree is being built.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class FileNode:
    """
    Represents a leaf entry (file) in the tree.

    Attributes:
        name: Bare file name.
        path: Slash-joined logical path from the tree root.
        content: Decoded text or a placeholder string.
    """
    name: str
    path: str
    content: str

    kind = "file"


@dataclass
class DirectoryNode:
    """
    Represents a directory entry in the tree.

    Attributes:
        name: Directory name.
        path: Slash-joined logical path from the tree root.
        children: Ordered child nodes.
    """
    name: str
    path: str
    children: List[Node] = field(default_factory=list)
    _index: Dict[str, Node] = field(default_factory=dict, init=False, repr=False, compare=False)

    kind = "directory"

    def get_child(self, name: str) -> Optional[Node]:
        return self._index.get(name)

    def add_child(self, node: Node) -> None:
        self.children.append(node)
        self._index[node.name] = node

    def replace_child(self, old: Node, new: Node) -> None:
        """Swap a child in place, keeping its position."""
        for i, child in enumerate(self.children):
            if child is old:
                self.children[i] = new
                break
        else:
            self.children.append(new)
        self._index[new.name] = new


Node = Union[FileNode, DirectoryNode]
Tree = List[Node]
