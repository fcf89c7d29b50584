from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to the built-in classification lists, the
placeholder templates substituted for unreadable content, and the literal
templates used by the serializers and the prompt document.
"""

from typing import FrozenSet

DEFAULT_SELECTED_FOLDER_NAME = "Selected Folder"
PROCESSING_FAILED_MSG = "Failed to process files."
PROCESSING_CANCELLED_MSG = "Processing cancelled."

# -----------------------------------------------------------------------------
# CLASSIFICATION LISTS
# -----------------------------------------------------------------------------

DEFAULT_BINARY_EXTENSIONS: FrozenSet[str] = frozenset({
    "png", "jpg", "jpeg", "gif", "bmp", "ico", "svg",
    "mp4", "webm", "mp3", "wav", "ogg",
    "zip", "tar", "gz", "7z", "rar",
    "pdf", "exe", "dll", "so", "dylib", "class", "jar", "pyc",
    "eot", "ttf", "woff", "woff2",
})

DEFAULT_IGNORED_DIRS: FrozenSet[str] = frozenset({
    # Source control
    ".git",
    # Dependencies
    "node_modules", "__pycache__",
    # Build output
    "dist", "build", ".next", "out", "coverage", "web-build",
    # IDE
    ".vscode", ".idea",
    # Framework caches and environments
    ".expo", ".kotlin", ".venv", "venv",
})

DEFAULT_IGNORED_NAMES: FrozenSet[str] = frozenset({
    ".DS_Store",
    "expo-env.d.ts",
})

DEFAULT_IGNORED_EXTENSIONS: FrozenSet[str] = frozenset({
    "jks", "p8", "p12", "key", "mobileprovision", "pem", "tsbuildinfo",
})

IGNORED_NAME_PREFIXES = ("npm-debug.", "yarn-debug.", "yarn-error.", ".metro-health-check")
BINARY_MEDIA_PREFIXES = ("image/", "video/", "audio/")

# -----------------------------------------------------------------------------
# PLACEHOLDERS AND OUTPUT TEMPLATES
# -----------------------------------------------------------------------------

BINARY_PLACEHOLDER = "[Binary content of type {media_type} not included]"
READ_ERROR_PLACEHOLDER = "[Error reading file: {error}]"
UNKNOWN_MEDIA_TYPE = "unknown"

FILE_HEADER = "# -------- FILE: {path} --------"
CODE_FENCE = "```"

DOCUMENT_TEMPLATE = (
    "This prompt contains the structure and content of a project.\n\n"
    "# DIRECTORY STRUCTURE\n\n"
    "```\n{structure}\n```\n\n"
    "# FILE CONTENTS\n{contents}"
)

# Box-drawing connectors for the structure listing
BRANCH_CONNECTOR = "├── "
LAST_CONNECTOR = "└── "
BRANCH_PADDING = "│   "
LAST_PADDING = "    "
