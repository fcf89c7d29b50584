from __future__ import annotations

"""
Unit tests for tree ordering.
"""

from contextmaker.core.analysis.tree_sorter import collation_key, sort_tree
from contextmaker.domain.tree_models import DirectoryNode, FileNode


def _file(name: str) -> FileNode:
    return FileNode(name=name, path=name, content="")


def test_directories_before_files():
    nodes = [_file("b.txt"), DirectoryNode(name="A", path="A")]
    sort_tree(nodes)
    assert [n.name for n in nodes] == ["A", "b.txt"]


def test_directory_first_even_when_name_sorts_later():
    nodes = [_file("a.txt"), DirectoryNode(name="zeta", path="zeta")]
    sort_tree(nodes)
    assert [n.name for n in nodes] == ["zeta", "a.txt"]


def test_names_compare_case_insensitively():
    nodes = [_file("beta.txt"), _file("Alpha.txt"), _file("alpha2.txt"), _file("Gamma.txt")]
    sort_tree(nodes)
    assert [n.name for n in nodes] == ["Alpha.txt", "alpha2.txt", "beta.txt", "Gamma.txt"]


def test_accented_names_sort_with_their_base_letter():
    nodes = [_file("f.txt"), _file("é.txt"), _file("d.txt")]
    sort_tree(nodes)
    assert [n.name for n in nodes] == ["d.txt", "é.txt", "f.txt"]


def test_order_is_total_for_case_variants():
    assert collation_key("readme") != collation_key("README")
    forward = [_file("readme"), _file("README")]
    backward = [_file("README"), _file("readme")]
    sort_tree(forward)
    sort_tree(backward)
    assert [n.name for n in forward] == [n.name for n in backward]


def test_sort_recurses_into_children():
    inner = DirectoryNode(name="src", path="p/src")
    inner.children.extend([_file("z.py"), DirectoryNode(name="lib", path="p/src/lib"), _file("a.py")])
    nodes = [inner]

    sort_tree(nodes)

    assert [c.name for c in inner.children] == ["lib", "a.py", "z.py"]


def test_lowercase_spelling_sorts_first_on_ties():
    nodes = [_file("README.md"), _file("readme.md")]
    sort_tree(nodes)
    assert [n.name for n in nodes] == ["readme.md", "README.md"]


def test_punctuation_before_digits_before_letters():
    nodes = [_file("a.txt"), _file("1.txt"), _file("_x.txt")]
    sort_tree(nodes)
    assert [n.name for n in nodes] == ["_x.txt", "1.txt", "a.txt"]
