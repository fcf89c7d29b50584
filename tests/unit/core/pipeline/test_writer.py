from __future__ import annotations

"""
Unit tests for the contents dump and document persistence.
"""

import os

from contextmaker.core.pipeline.components.writer import (
    format_entry,
    render_contents,
    write_document,
)
from contextmaker.domain.tree_models import DirectoryNode, FileNode


def test_empty_tree_yields_empty_string():
    assert render_contents([]) == ""


def test_format_entry_layout():
    node = FileNode(name="a.txt", path="proj/src/a.txt", content="hello")
    assert format_entry(node) == "\n\n# -------- FILE: proj/src/a.txt --------\n\n```\nhello\n```"


def test_contents_are_trimmed_and_in_depth_first_order():
    src = DirectoryNode(name="src", path="proj/src")
    src.add_child(FileNode(name="a.txt", path="proj/src/a.txt", content="A"))
    root = DirectoryNode(name="proj", path="proj")
    root.add_child(src)
    root.add_child(FileNode(name="b.txt", path="proj/b.txt", content="B"))
    tree = [root, FileNode(name="c.txt", path="c.txt", content="C")]

    expected = (
        "# -------- FILE: proj/src/a.txt --------\n\n```\nA\n```"
        "\n\n# -------- FILE: proj/b.txt --------\n\n```\nB\n```"
        "\n\n# -------- FILE: c.txt --------\n\n```\nC\n```"
    )
    assert render_contents(tree) == expected


def test_directories_emit_no_header():
    root = DirectoryNode(name="proj", path="proj")
    root.add_child(DirectoryNode(name="empty", path="proj/empty"))
    assert render_contents([root]) == ""


def test_write_document_creates_parent_dirs(tmp_path):
    target = tmp_path / "out" / "nested" / "context.md"

    written = write_document(str(target), "doc")

    assert target.read_text(encoding="utf-8") == "doc"
    assert written == os.path.abspath(str(target))
