from __future__ import annotations

"""
Pipeline Assembler Stage.

Wraps the directory listing and the contents dump into the single prompt
document handed to the user.
"""

from contextmaker.domain.constants import DOCUMENT_TEMPLATE


def assemble_document(structure_text: str, content_text: str) -> str:
    """
    Combine both artifacts into the final prompt document.

    The template is always filled, even when both artifacts are empty.
    Whether a pass yields a document at all is decided by the engine.

    Args:
        structure_text: Rendered directory listing.
        content_text: Rendered contents dump.

    Returns:
        str: The combined document.
    """
    return DOCUMENT_TEMPLATE.format(structure=structure_text.strip(), contents=content_text)
