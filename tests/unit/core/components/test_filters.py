from __future__ import annotations

"""
Unit tests for the File Filters module.

Verifies:
1. File-name exclusion (exact names, extensions, naming patterns).
2. Directory-segment exclusion.
3. Binary classification by media type and extension.
4. Policy substitution and extension.
"""

import pytest

from contextmaker.core.pipeline.components.filters import (
    ClassificationPolicy,
    default_policy,
    extension_of,
    is_binary,
    is_ignored_dir_segment,
    is_ignored_name,
)
from contextmaker.domain.source_models import RawFileHandle


@pytest.mark.parametrize("name", [
    ".DS_Store",
    "expo-env.d.ts",
    "release.jks",
    "server.PEM",
    "tsconfig.tsbuildinfo",
    "npm-debug.log.1",
    "yarn-debug.log",
    "yarn-error.log",
    ".metro-health-check123",
    ".env.local",
    ".env.production.local",
    "App.orig.tsx",
])
def test_ignored_names(name):
    """Names matching any denylist rule are excluded."""
    assert is_ignored_name(name) is True


@pytest.mark.parametrize("name", [
    "main.py",
    "README.md",
    ".env",
    ".env.production",
    "original.txt",
    "ds_store",
    "keyboard.ts",
])
def test_regular_names_are_kept(name):
    assert is_ignored_name(name) is False


def test_exact_name_match_is_case_sensitive():
    assert is_ignored_name(".ds_store") is False


def test_ignored_dir_segments_exact_match():
    for segment in ["node_modules", ".git", "__pycache__", "dist", "build", ".venv", "venv", ".idea"]:
        assert is_ignored_dir_segment(segment) is True, segment

    assert is_ignored_dir_segment("Node_Modules") is False
    assert is_ignored_dir_segment("src") is False
    assert is_ignored_dir_segment("builds") is False


def test_extension_of_without_dot_is_whole_name():
    assert extension_of("Makefile") == "makefile"
    assert extension_of("archive.TAR.GZ") == "gz"


def test_binary_by_media_type():
    """Media-type prefixes win regardless of the extension."""
    assert is_binary(RawFileHandle(name="photo.txt", media_type="image/png")) is True
    assert is_binary(RawFileHandle(name="clip", media_type="video/mp4")) is True
    assert is_binary(RawFileHandle(name="song", media_type="audio/mpeg")) is True


def test_binary_by_extension():
    assert is_binary(RawFileHandle(name="logo.SVG")) is True
    assert is_binary(RawFileHandle(name="font.woff2")) is True
    assert is_binary(RawFileHandle(name="module.pyc")) is True


def test_text_files_are_not_binary():
    assert is_binary(RawFileHandle(name="main.py", media_type="text/x-python")) is False
    assert is_binary(RawFileHandle(name="data.json", media_type="application/json")) is False


def test_custom_policy_replaces_defaults():
    """An injected policy is used instead of the built-in lists."""
    policy = ClassificationPolicy(
        ignored_dirs=frozenset({"vendor"}),
        ignored_names=frozenset({"secrets.txt"}),
        ignored_extensions=frozenset({"bak"}),
        binary_extensions=frozenset({"bin"}),
    )

    assert is_ignored_dir_segment("vendor", policy) is True
    assert is_ignored_dir_segment("node_modules", policy) is False
    assert is_ignored_name("secrets.txt", policy) is True
    assert is_ignored_name("old.BAK", policy) is True
    assert is_ignored_name("release.jks", policy) is False
    assert is_binary(RawFileHandle(name="blob.bin"), policy) is True
    assert is_binary(RawFileHandle(name="logo.png"), policy) is False


def test_naming_patterns_apply_under_any_policy():
    empty = ClassificationPolicy(frozenset(), frozenset(), frozenset(), frozenset())
    assert is_ignored_name("npm-debug.log", empty) is True
    assert is_ignored_name(".env.test.local", empty) is True


def test_policy_extend_normalizes_extensions():
    policy = default_policy().extend(
        dirs=["tmp"],
        names=["notes.txt"],
        extensions=[".LOG"],
        binary_extensions=["Parquet"],
    )

    assert is_ignored_dir_segment("tmp", policy) is True
    assert is_ignored_dir_segment("node_modules", policy) is True
    assert is_ignored_name("notes.txt", policy) is True
    assert is_ignored_name("server.log", policy) is True
    assert is_binary(RawFileHandle(name="table.parquet"), policy) is True
    # The default policy itself is untouched
    assert is_ignored_dir_segment("tmp") is False
