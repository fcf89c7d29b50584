from __future__ import annotations

"""
Tree Ordering.

Imposes the deterministic sibling order used by both serializers:
directories first, then files, each group ordered by a locale-style
collation of the names.
"""

import unicodedata
from typing import Tuple

from contextmaker.domain.tree_models import DirectoryNode, Node, Tree

# Primary character classes: punctuation and symbols, then digits, then letters
_RANK_OTHER = 0
_RANK_DIGIT = 1
_RANK_LETTER = 2

CollationKey = Tuple[Tuple[Tuple[int, str], ...], str]


def _char_rank(ch: str) -> int:
    if ch.isdigit():
        return _RANK_DIGIT
    if ch.isalpha():
        return _RANK_LETTER
    return _RANK_OTHER


def collation_key(name: str) -> CollationKey:
    """
    Build a locale-style comparison key for a node name.

    Accents and case are ignored at the primary level, where punctuation
    sorts before digits and digits before letters. Remaining ties put the
    lowercase spelling first, so the order stays total.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    primary = tuple((_char_rank(ch), ch) for ch in base)
    return primary, name.swapcase()


def _sort_key(node: Node) -> Tuple[int, CollationKey]:
    return (0 if isinstance(node, DirectoryNode) else 1), collation_key(node.name)


def sort_tree(nodes: Tree) -> None:
    """Sort a node list in place and recurse into every directory."""
    nodes.sort(key=_sort_key)
    for node in nodes:
        if isinstance(node, DirectoryNode):
            sort_tree(node.children)
