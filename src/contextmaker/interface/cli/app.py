from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging initialization, configuration
merging (defaults, JSON file, command-line overrides), conversion of the
given paths into Sources, pipeline execution and result rendering.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from contextmaker.core.pipeline.components.writer import write_document
from contextmaker.core.pipeline.engine import run_pipeline
from contextmaker.core.pipeline.stages.validator import build_policy, validate_config
from contextmaker.domain.config import get_default_config, load_config
from contextmaker.domain.pipeline_models import PipelineResult
from contextmaker.infra.fs import sources_from_paths
from contextmaker.infra.logging import LoggingConfig, configure_logging, get_logger
from contextmaker.interface.cli import args as cli_args

logger = get_logger(__name__)

_LIST_KEYS = (
    "extra_ignored_dirs",
    "extra_ignored_names",
    "extra_ignored_extensions",
    "extra_binary_extensions",
)
_SCALAR_KEYS = ("max_workers", "token_method", "output_path")

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 bad input, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config(args.config_file)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 4. Input resolution
    if not args.paths:
        logger.error("No input paths given.")
        print("ERROR: at least one PATH is required.", file=sys.stderr)
        return 2

    try:
        sources = sources_from_paths(args.paths, build_policy(clean_conf))
    except FileNotFoundError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    # 5. Pipeline execution; the CLI writes the selected artifact itself
    target_path = clean_conf["output_path"]
    pipeline_conf = dict(clean_conf, output_path="")
    try:
        result = run_pipeline(sources, pipeline_conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return 130

    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return 1

    # 6. Output rendering phase
    if args.json_output:
        text = json.dumps(asdict(result), ensure_ascii=False, indent=2)
    else:
        text = _select_output(result, args.structure_only, args.contents_only)

    if target_path:
        try:
            write_document(target_path, text)
        except OSError as e:
            logger.error(f"Failed to write output: {e}")
            print(f"ERROR: cannot write '{target_path}': {e}", file=sys.stderr)
            return 1
    else:
        print(text)

    _log_summary(result)
    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge command-line overrides into the base configuration.

    Denylist additions from the command line extend those of the base;
    scalar values replace them. None means 'not given'.
    """
    out = dict(base)
    for k in _LIST_KEYS:
        extra = overrides.get(k)
        if extra:
            current = out.get(k) or []
            if isinstance(current, str):
                current = [current]
            out[k] = list(current) + list(extra)
    for k in _SCALAR_KEYS:
        if overrides.get(k) is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _select_output(result: PipelineResult, structure_only: bool, contents_only: bool) -> str:
    if structure_only:
        return result.structure_text.rstrip("\n")
    if contents_only:
        return result.content_text
    return result.document


def _log_summary(result: PipelineResult) -> None:
    """Report execution statistics on the log stream (stderr)."""
    summary = result.summary
    labels = {
        "sources": "Sources",
        "files_included": "Files included",
        "files_ignored": "Files ignored",
        "binary_files": "Binary placeholders",
        "read_errors": "Read errors",
        "collisions": "Name collisions",
    }
    for key, label in labels.items():
        if key in summary:
            logger.info(f"{label}: {summary[key]}")
    if result.token_count > 0:
        logger.info(f"Estimated tokens: {result.token_count:,}")


if __name__ == "__main__":
    sys.exit(main())
