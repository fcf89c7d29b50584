from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates one aggregation pass:
1. Validates configuration and derives the classification policy.
2. Builds the aggregate tree (concurrent content reads).
3. Sorts the tree once.
4. Serializes the directory listing and the contents dump.
5. Assembles the prompt document.
6. Computes token metrics and optionally writes the document to disk.
"""

import logging
import threading
from concurrent.futures import CancelledError
from typing import Any, Dict, Iterable, Optional

from contextmaker.core.analysis.tree_builder import build_tree
from contextmaker.core.analysis.tree_renderer import render_structure
from contextmaker.core.analysis.tree_sorter import sort_tree
from contextmaker.core.pipeline.components.filters import ClassificationPolicy
from contextmaker.core.pipeline.components.writer import render_contents, write_document
from contextmaker.core.pipeline.stages.assembler import assemble_document
from contextmaker.core.pipeline.stages.validator import build_policy, validate_config
from contextmaker.core.processing.tokenizer import count_tokens
from contextmaker.domain.constants import PROCESSING_CANCELLED_MSG, PROCESSING_FAILED_MSG
from contextmaker.domain.pipeline_models import (
    AggregationOutput,
    AggregationStats,
    PipelineResult,
    create_error_result,
    create_success_result,
)
from contextmaker.domain.source_models import Source

logger = logging.getLogger(__name__)


def aggregate_sources(
        sources: Iterable[Source],
        policy: Optional[ClassificationPolicy] = None,
        max_workers: Optional[int] = None,
        cancellation_event: Optional[threading.Event] = None,
) -> AggregationOutput:
    """
    Run the aggregation core over a list of Sources.

    Serialization only happens once the whole tree has been built and
    sorted, so a cancelled or failed pass never yields partial output.

    Args:
        sources: Sources in selection order.
        policy: Classification policy; the default policy when omitted.
        max_workers: Size of the content reader pool.
        cancellation_event: Aborts the pass when set.

    Returns:
        AggregationOutput: Tree, both text artifacts and the document.

    Raises:
        CancelledError: If the pass was cancelled.
    """
    stats = AggregationStats()
    tree = build_tree(
        sources,
        policy=policy,
        max_workers=max_workers,
        cancellation_event=cancellation_event,
        stats=stats,
    )
    sort_tree(tree)

    structure_text = render_structure(tree)
    content_text = render_contents(tree)
    # Only an empty selection yields an empty document
    document = assemble_document(structure_text, content_text) if stats.sources else ""

    return AggregationOutput(
        tree=tree,
        structure_text=structure_text,
        content_text=content_text,
        document=document,
        stats=stats,
    )


def run_pipeline(
        sources: Iterable[Source],
        config: Optional[Dict[str, Any]] = None,
        *,
        cancellation_event: Optional[threading.Event] = None,
        output_path: Optional[str] = None,
) -> PipelineResult:
    """
    Execute a full aggregation pass and wrap the outcome in a result object.

    Unexpected faults are logged with their traceback and reported to the
    caller as a single generic failure. Passes have no side effects besides
    the optional output file, so retrying is always safe.

    Args:
        sources: Sources in selection order.
        config: The configuration dictionary (raw or partial).
        cancellation_event: Aborts the pass when set.
        output_path: Optional override of the configured output file.

    Returns:
        PipelineResult: Object containing status, artifacts and summary.
    """
    logger.info("Aggregation pass started.")

    # -------------------------------------------------------------------------
    # 1) Config & Policy
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    # -------------------------------------------------------------------------
    # 2) Aggregation
    # -------------------------------------------------------------------------
    try:
        source_list = list(sources)
        output = aggregate_sources(
            source_list,
            policy=build_policy(cfg),
            max_workers=cfg["max_workers"],
            cancellation_event=cancellation_event,
        )
    except CancelledError:
        logger.info("Aggregation pass cancelled before completion.")
        return create_error_result(PROCESSING_CANCELLED_MSG, summary_extra={"cancelled": True})
    except Exception as e:
        logger.error(f"Aggregation pass failed: {e}", exc_info=True)
        return create_error_result(PROCESSING_FAILED_MSG)

    # -------------------------------------------------------------------------
    # 3) Metrics
    # -------------------------------------------------------------------------
    token_count = 0
    if cfg["token_method"] != "none":
        token_count = count_tokens(output.document, cfg["token_method"], cfg["token_encoding"])

    # -------------------------------------------------------------------------
    # 4) Persistence
    # -------------------------------------------------------------------------
    target = output_path or cfg["output_path"]
    written_path = ""
    if target:
        try:
            written_path = write_document(target, output.document)
        except OSError as e:
            msg = f"Failed to write document to '{target}': {e}"
            logger.error(msg)
            return create_error_result(msg)

    logger.info(
        f"Aggregation pass finished: {output.stats.files_included} files, "
        f"{output.stats.files_ignored} ignored."
    )
    return create_success_result(
        output,
        token_count=token_count,
        output_path=written_path,
        summary_extra={"token_method": cfg["token_method"]},
    )
