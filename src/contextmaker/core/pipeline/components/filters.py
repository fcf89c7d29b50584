from __future__ import annotations

"""
File Filtering and Classification Engine.

Implements the exclusion rules applied to file names and directory segments,
and the binary-content heuristic based on the declared media type and the
file extension. The denylists live in an immutable policy object so callers
and tests can substitute their own.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from contextmaker.domain.constants import (
    BINARY_MEDIA_PREFIXES,
    DEFAULT_BINARY_EXTENSIONS,
    DEFAULT_IGNORED_DIRS,
    DEFAULT_IGNORED_EXTENSIONS,
    DEFAULT_IGNORED_NAMES,
    IGNORED_NAME_PREFIXES,
)
from contextmaker.domain.source_models import RawFileHandle

# -----------------------------------------------------------------------------
# POLICY MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ClassificationPolicy:
    """
    Immutable set of denylists driving file and directory exclusion.

    Attributes:
        ignored_dirs: Exact directory names that exclude a whole subtree.
        ignored_names: Exact file names to exclude.
        ignored_extensions: Lowercase extensions (no dot) to exclude.
        binary_extensions: Lowercase extensions treated as binary content.
    """
    ignored_dirs: FrozenSet[str] = DEFAULT_IGNORED_DIRS
    ignored_names: FrozenSet[str] = DEFAULT_IGNORED_NAMES
    ignored_extensions: FrozenSet[str] = DEFAULT_IGNORED_EXTENSIONS
    binary_extensions: FrozenSet[str] = DEFAULT_BINARY_EXTENSIONS

    def extend(
            self,
            dirs: Iterable[str] = (),
            names: Iterable[str] = (),
            extensions: Iterable[str] = (),
            binary_extensions: Iterable[str] = (),
    ) -> ClassificationPolicy:
        """Return a new policy with additional denylist entries."""
        return ClassificationPolicy(
            ignored_dirs=self.ignored_dirs | frozenset(dirs),
            ignored_names=self.ignored_names | frozenset(names),
            ignored_extensions=self.ignored_extensions | frozenset(_normalize_ext(e) for e in extensions),
            binary_extensions=self.binary_extensions | frozenset(_normalize_ext(e) for e in binary_extensions),
        )


_DEFAULT_POLICY = ClassificationPolicy()


def default_policy() -> ClassificationPolicy:
    """
    Get the built-in classification policy.

    Returns:
        ClassificationPolicy: Policy populated with the default denylists.
    """
    return _DEFAULT_POLICY

# -----------------------------------------------------------------------------
# CLASSIFICATION LOGIC
# -----------------------------------------------------------------------------

def extension_of(file_name: str) -> str:
    """
    Extract the lowercase text after the last dot.

    A name without any dot yields the whole name lowercased.
    """
    return file_name.rsplit(".", 1)[-1].lower()


def is_ignored_name(file_name: str, policy: Optional[ClassificationPolicy] = None) -> bool:
    """
    Decide whether a bare file name is excluded from the output.

    Matches the exact-name denylist, the extension denylist (case-insensitive)
    and the log/env/merge-artifact naming patterns.

    Args:
        file_name: Bare file name.
        policy: Denylists to apply; the default policy when omitted.

    Returns:
        bool: True if the file must be skipped.
    """
    policy = policy or _DEFAULT_POLICY

    if file_name in policy.ignored_names:
        return True

    if file_name and extension_of(file_name) in policy.ignored_extensions:
        return True

    if file_name.startswith(IGNORED_NAME_PREFIXES):
        return True

    # .env*.local
    if file_name.startswith(".env") and file_name.endswith(".local"):
        return True

    # *.orig.* merge leftovers
    return ".orig." in file_name


def is_ignored_dir_segment(segment: str, policy: Optional[ClassificationPolicy] = None) -> bool:
    """
    Decide whether a path segment names an excluded directory.

    Exact, case-sensitive match only.
    """
    policy = policy or _DEFAULT_POLICY
    return segment in policy.ignored_dirs


def is_binary(handle: RawFileHandle, policy: Optional[ClassificationPolicy] = None) -> bool:
    """
    Classify a handle as binary content.

    The declared media type wins; the extension denylist is the fallback.

    Args:
        handle: The file handle to inspect.
        policy: Denylists to apply; the default policy when omitted.

    Returns:
        bool: True if the content must not be read.
    """
    policy = policy or _DEFAULT_POLICY

    media_type = handle.media_type or ""
    if media_type.startswith(BINARY_MEDIA_PREFIXES):
        return True

    if not handle.name:
        return False
    return extension_of(handle.name) in policy.binary_extensions

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _normalize_ext(ext: str) -> str:
    return ext.strip().lstrip(".").lower()
