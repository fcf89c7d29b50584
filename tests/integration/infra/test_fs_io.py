from __future__ import annotations

"""
Integration tests for the FileSystem infrastructure layer.

Verifies directory walking, pruning of ignored directories and the
conversion of local paths into Sources.
"""

from pathlib import Path

import pytest

from contextmaker.core.pipeline.engine import run_pipeline
from contextmaker.infra.fs import collect_directory_handles, sources_from_paths


@pytest.fixture
def disk_project(tmp_path: Path) -> Path:
    root = tmp_path / "proj"
    (root / "src").mkdir(parents=True)
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / "src" / "main.py").write_text("print('hi')", encoding="utf-8")
    (root / "README.md").write_text("# Proj", encoding="utf-8")
    (root / "node_modules" / "pkg" / "index.js").write_text("x", encoding="utf-8")
    return root


def test_relative_paths_are_rooted_at_folder_name(disk_project: Path) -> None:
    handles = collect_directory_handles(str(disk_project))

    assert sorted(h.relative_path for h in handles) == ["proj/README.md", "proj/src/main.py"]


def test_ignored_directories_are_pruned(disk_project: Path) -> None:
    handles = collect_directory_handles(str(disk_project))
    assert all("node_modules" not in h.relative_path for h in handles)


def test_handles_read_lazily_from_disk(disk_project: Path) -> None:
    handles = {h.name: h for h in collect_directory_handles(str(disk_project))}
    (disk_project / "README.md").write_text("# Changed", encoding="utf-8")

    assert handles["README.md"].read_text() == "# Changed"


def test_sources_from_mixed_paths(disk_project: Path, tmp_path: Path) -> None:
    loose = tmp_path / "notes.txt"
    loose.write_text("n", encoding="utf-8")

    sources = sources_from_paths([str(disk_project), str(loose)])

    assert [(s.kind, s.name) for s in sources] == [("directory", "proj"), ("file", "notes.txt")]


def test_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        sources_from_paths([str(tmp_path / "missing")])


def test_disk_pass_end_to_end(disk_project: Path) -> None:
    result = run_pipeline(sources_from_paths([str(disk_project)]))

    assert result.ok
    assert result.structure_text == "proj\n├── src\n│   └── main.py\n└── README.md\n"
    assert "# -------- FILE: proj/src/main.py --------\n\n```\nprint('hi')\n```" in result.content_text
