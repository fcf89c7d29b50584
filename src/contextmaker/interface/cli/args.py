from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates parsed argparse
namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from contextmaker.domain.config import TOKEN_METHODS

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the contextmaker CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="contextmaker",
        description="Turn local files and folders into an LLM-ready text digest.",
    )

    # --- Inputs ---
    p.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Files or directories to include, in order.",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Write the result to this file instead of stdout.",
    )

    # --- Configuration sources ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON configuration file.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore --config and start from built-in defaults.",
    )

    # --- Classification policy additions ---
    p.add_argument(
        "--ignore-dir",
        dest="extra_ignored_dirs",
        default=None,
        help="Comma-separated directory names to skip.",
    )
    p.add_argument(
        "--ignore-name",
        dest="extra_ignored_names",
        default=None,
        help="Comma-separated exact file names to skip.",
    )
    p.add_argument(
        "--ignore-ext",
        dest="extra_ignored_extensions",
        default=None,
        help="Comma-separated file extensions to skip.",
    )
    p.add_argument(
        "--binary-ext",
        dest="extra_binary_extensions",
        default=None,
        help="Comma-separated extensions to treat as binary.",
    )

    # --- Runtime ---
    p.add_argument(
        "--workers",
        dest="max_workers",
        type=int,
        default=None,
        help="Number of concurrent file readers.",
    )
    p.add_argument(
        "--tokens",
        dest="token_method",
        choices=TOKEN_METHODS,
        default=None,
        help="Token estimation method for the summary.",
    )

    # --- Output selection ---
    selection = p.add_mutually_exclusive_group()
    selection.add_argument(
        "--structure-only",
        action="store_true",
        help="Emit only the directory structure.",
    )
    selection.add_argument(
        "--contents-only",
        action="store_true",
        help="Emit only the file contents dump.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the full result as JSON.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Unset options map to None and are skipped when merging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "extra_ignored_dirs": _split_csv(args.extra_ignored_dirs),
        "extra_ignored_names": _split_csv(args.extra_ignored_names),
        "extra_ignored_extensions": _split_csv(args.extra_ignored_extensions),
        "extra_binary_extensions": _split_csv(args.extra_binary_extensions),
        "max_workers": args.max_workers,
        "token_method": args.token_method,
        "output_path": args.output_path,
    }
    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of stripped items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
