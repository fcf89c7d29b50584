from __future__ import annotations

"""
Unit tests for the prompt document assembler.
"""

from contextmaker.core.pipeline.stages.assembler import assemble_document


def test_document_layout():
    structure = "proj\n└── a.txt\n"
    contents = "# -------- FILE: proj/a.txt --------\n\n```\nhi\n```"

    expected = (
        "This prompt contains the structure and content of a project.\n\n"
        "# DIRECTORY STRUCTURE\n\n"
        "```\nproj\n└── a.txt\n```\n\n"
        "# FILE CONTENTS\n"
        "# -------- FILE: proj/a.txt --------\n\n```\nhi\n```"
    )
    assert assemble_document(structure, contents) == expected


def test_structure_without_files_still_renders():
    """A folder of only ignored files keeps its directory listing."""
    doc = assemble_document("proj\n", "")
    assert "```\nproj\n```" in doc
    assert doc.endswith("# FILE CONTENTS\n")


def test_empty_inputs_still_fill_the_template():
    doc = assemble_document("", "")
    assert doc == (
        "This prompt contains the structure and content of a project.\n\n"
        "# DIRECTORY STRUCTURE\n\n"
        "```\n\n```\n\n"
        "# FILE CONTENTS\n"
    )
