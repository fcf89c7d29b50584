from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the core data structures and factory functions used to communicate
aggregation results between the pipeline engine and interface layers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from contextmaker.domain.tree_models import Tree

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass
class AggregationStats:
    """
    Counters collected during a single aggregation pass.

    Attributes:
        sources: Number of Sources processed.
        files_included: Files that produced a File Node.
        files_ignored: Files excluded by the classification policy.
        binary_files: Included files replaced by the binary placeholder.
        read_errors: Included files replaced by the read-error placeholder.
        collisions: File/directory name clashes resolved during insertion.
    """
    sources: int = 0
    files_included: int = 0
    files_ignored: int = 0
    binary_files: int = 0
    read_errors: int = 0
    collisions: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "sources": self.sources,
            "files_included": self.files_included,
            "files_ignored": self.files_ignored,
            "binary_files": self.binary_files,
            "read_errors": self.read_errors,
            "collisions": self.collisions,
        }


@dataclass(frozen=True)
class AggregationOutput:
    """
    Complete output of one successful aggregation pass.

    Attributes:
        tree: Sorted aggregated tree.
        structure_text: Box-drawing directory listing.
        content_text: Concatenated per-file dump.
        document: Combined prompt document.
        stats: Pass counters.
    """
    tree: Tree
    structure_text: str
    content_text: str
    document: str
    stats: AggregationStats = field(default_factory=AggregationStats)


@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result object of a complete pipeline execution.

    Attributes:
        ok: Flag indicating success or failure.
        error: Generic failure message when ok is False.
        structure_text: Directory listing (empty on failure).
        content_text: File dump (empty on failure).
        document: Combined prompt document (empty on failure).
        token_count: Estimated token density of the document.
        output_path: File the document was written to, if any.
        summary: Execution statistics.
    """
    ok: bool
    error: str

    structure_text: str = ""
    content_text: str = ""
    document: str = ""

    token_count: int = 0
    output_path: str = ""

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a failed pipeline result instance.

    No partial output is carried by a failed result.

    Args:
        error: Failure description shown to the caller.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        PipelineResult: An immutable error result object.
    """
    return PipelineResult(ok=False, error=error, summary=summary_extra or {})


def create_success_result(
        output: AggregationOutput,
        token_count: int = 0,
        output_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a successful pipeline result instance.

    Args:
        output: The aggregation output of the pass.
        token_count: Final token count metrics.
        output_path: Destination the document was written to.
        summary_extra: Additional execution metrics.

    Returns:
        PipelineResult: An immutable success result object.
    """
    summary: Dict[str, Any] = output.stats.as_dict()
    summary.update(summary_extra or {})
    return PipelineResult(
        ok=True,
        error="",
        structure_text=output.structure_text,
        content_text=output.content_text,
        document=output.document,
        token_count=token_count,
        output_path=output_path,
        summary=summary,
    )
