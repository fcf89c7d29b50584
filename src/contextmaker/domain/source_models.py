from __future__ import annotations

"""
Source Selection Data Models.

Defines the caller-facing input units of an aggregation pass: opaque file
handles, the Sources that group them, and the ordered selection list that a
frontend mutates between passes.
"""

import mimetypes
import os
import uuid
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from contextmaker.domain.constants import DEFAULT_SELECTED_FOLDER_NAME

SOURCE_KIND_FILE = "file"
SOURCE_KIND_DIRECTORY = "directory"
SOURCE_KINDS = (SOURCE_KIND_FILE, SOURCE_KIND_DIRECTORY)

# -----------------------------------------------------------------------------
# FILE HANDLES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RawFileHandle:
    """
    Opaque text-bearing unit supplied by the caller.

    Attributes:
        name: Bare file name.
        relative_path: Slash-delimited path rooted at the directory source
            name. Empty for loose files.
        media_type: Declared media-type hint (may be empty).
        loader: Zero-argument callable returning the decoded text.
    """
    name: str
    relative_path: str = ""
    media_type: str = ""
    loader: Optional[Callable[[], str]] = field(default=None, repr=False, compare=False)

    def read_text(self) -> str:
        """Return the decoded content. Raises whatever the loader raises."""
        if self.loader is None:
            raise OSError(f"No content provider attached to '{self.name}'")
        return self.loader()

    @classmethod
    def from_text(
            cls,
            name: str,
            text: str,
            relative_path: str = "",
            media_type: str = "",
    ) -> RawFileHandle:
        """Wrap already-available text."""
        return cls(name=name, relative_path=relative_path, media_type=media_type, loader=lambda: text)

    @classmethod
    def from_path(cls, path: str, relative_path: str = "") -> RawFileHandle:
        """
        Create a handle whose content is read lazily from disk.

        The media type is guessed from the file name. Undecodable byte
        sequences are replaced rather than raising.
        """
        media_type, _ = mimetypes.guess_type(path)

        def _load() -> str:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()

        return cls(
            name=os.path.basename(path),
            relative_path=relative_path,
            media_type=media_type or "",
            loader=_load,
        )

# -----------------------------------------------------------------------------
# SOURCES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Source:
    """
    One user-selected unit: loose file(s) or a directory.

    Attributes:
        id: Opaque unique identifier used for removal.
        name: Display name; the root name for directory sources.
        kind: Either 'file' or 'directory'.
        handles: Files belonging to this source.
    """
    id: str
    name: str
    kind: str
    handles: Tuple[RawFileHandle, ...] = ()

    @property
    def is_directory(self) -> bool:
        return self.kind == SOURCE_KIND_DIRECTORY


def _new_id() -> str:
    return uuid.uuid4().hex


def create_directory_source(
        handles: Iterable[RawFileHandle],
        name: Optional[str] = None,
) -> Source:
    """
    Build a directory Source from a flat list of handles.

    When no name is given, it is taken from the first segment of the first
    handle's relative path, as a folder picker reports it.
    """
    items = tuple(handles)
    if not name:
        first_path = items[0].relative_path if items else ""
        name = first_path.split("/")[0] or DEFAULT_SELECTED_FOLDER_NAME
    return Source(id=_new_id(), name=name, kind=SOURCE_KIND_DIRECTORY, handles=items)


def create_file_sources(handles: Iterable[RawFileHandle]) -> List[Source]:
    """Build one file Source per handle."""
    return [
        Source(id=_new_id(), name=h.name, kind=SOURCE_KIND_FILE, handles=(h,))
        for h in handles
    ]

# -----------------------------------------------------------------------------
# SELECTION STATE
# -----------------------------------------------------------------------------

class SourceSelection:
    """
    Ordered list of Sources owned by a frontend.

    Every mutation leaves previously returned snapshots untouched, so a pass
    started on an older snapshot never observes later changes.
    """

    def __init__(self, sources: Optional[Iterable[Source]] = None):
        self._sources: List[Source] = list(sources or [])

    def add_directory(self, handles: Iterable[RawFileHandle], name: Optional[str] = None) -> Optional[Source]:
        items = list(handles)
        if not items:
            return None
        source = create_directory_source(items, name=name)
        self.add(source)
        return source

    def add_files(self, handles: Iterable[RawFileHandle]) -> List[Source]:
        new_sources = create_file_sources(handles)
        for source in new_sources:
            self.add(source)
        return new_sources

    def add(self, source: Source) -> None:
        """
        Append a prebuilt Source.

        Raises:
            ValueError: If the Source kind is not a known kind.
        """
        if source.kind not in SOURCE_KINDS:
            raise ValueError(f"Unknown source kind: '{source.kind}'")
        self._sources.append(source)

    def remove(self, source_id: str) -> bool:
        """Drop the Source with the given id. Returns False if unknown."""
        before = len(self._sources)
        self._sources = [s for s in self._sources if s.id != source_id]
        return len(self._sources) != before

    def clear(self) -> None:
        self._sources = []

    def snapshot(self) -> List[Source]:
        return list(self._sources)

    def __iter__(self) -> Iterator[Source]:
        return iter(list(self._sources))

    def __len__(self) -> int:
        return len(self._sources)
