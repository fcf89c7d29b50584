from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared factories for file handles and Sources used across unit tests.
"""

import os
import sys
from typing import Callable, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from contextmaker.domain.source_models import (  # noqa: E402
    RawFileHandle,
    Source,
    create_directory_source,
    create_file_sources,
)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_dir_source() -> Callable[..., Source]:
    """
    Return a factory building a directory Source from {relative_path: text}.

    Relative paths are used verbatim, so callers include the root name
    exactly as a folder picker would ('proj/src/a.txt').
    """
    def _factory(files: Dict[str, str], name: str = "proj", media_types: Dict[str, str] = None) -> Source:
        media_types = media_types or {}
        handles: List[RawFileHandle] = [
            RawFileHandle.from_text(
                name=rel.rsplit("/", 1)[-1],
                text=text,
                relative_path=rel,
                media_type=media_types.get(rel, ""),
            )
            for rel, text in files.items()
        ]
        return create_directory_source(handles, name=name)

    return _factory


@pytest.fixture
def make_file_sources() -> Callable[..., List[Source]]:
    """Return a factory building loose-file Sources from {name: text}."""
    def _factory(files: Dict[str, str]) -> List[Source]:
        return create_file_sources(
            RawFileHandle.from_text(name=name, text=text) for name, text in files.items()
        )

    return _factory


@pytest.fixture
def failing_handle() -> RawFileHandle:
    """A handle whose content provider always raises."""
    def _boom() -> str:
        raise OSError("permission denied")

    return RawFileHandle(name="locked.txt", relative_path="proj/locked.txt", loader=_boom)
