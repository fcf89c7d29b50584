from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper of the pipeline, ensuring the configuration
dictionary conforms to the expected schema. Handles type coercion and
default value injection so a malformed config never breaks a pass.
"""

import logging
from typing import Any, Dict, List, Tuple

from contextmaker.core.pipeline.components.filters import ClassificationPolicy, default_policy
from contextmaker.domain.config import TOKEN_METHODS, get_default_config

logger = logging.getLogger(__name__)

_LIST_FIELDS = (
    "extra_ignored_dirs",
    "extra_ignored_names",
    "extra_ignored_extensions",
    "extra_binary_extensions",
)
_EXTENSION_FIELDS = ("extra_ignored_extensions", "extra_binary_extensions")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (CLI, JSON files) into strictly typed
    parameters and fills missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and a
                                          list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if config is None:
        return defaults, warnings

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Field Processing & Normalization
    for field in _LIST_FIELDS:
        merged[field] = _as_list_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in _EXTENSION_FIELDS:
        merged[field] = _normalize_extensions(merged[field])

    merged["max_workers"] = _as_positive_int(
        merged.get("max_workers"), defaults["max_workers"], "max_workers", warnings, strict
    )

    for field in ("token_method", "token_encoding", "output_path"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    # 3. Domain-Specific Normalization
    method = merged["token_method"].lower()
    if method not in TOKEN_METHODS:
        msg = f"Invalid field 'token_method': '{merged['token_method']}' is not one of {TOKEN_METHODS}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        method = defaults["token_method"]
    merged["token_method"] = method

    return merged, warnings


def build_policy(config: Dict[str, Any]) -> ClassificationPolicy:
    """
    Derive the classification policy from a validated configuration.

    Args:
        config: Output of validate_config.

    Returns:
        ClassificationPolicy: The default policy extended with config entries.
    """
    return default_policy().extend(
        dirs=config.get("extra_ignored_dirs", []),
        names=config.get("extra_ignored_names", []),
        extensions=config.get("extra_ignored_extensions", []),
        binary_extensions=config.get("extra_binary_extensions", []),
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce numeric inputs into a positive integer."""
    if value is None:
        return fallback

    if isinstance(value, int) and not isinstance(value, bool):
        if value >= 1:
            return value
        msg = f"Invalid field '{field}': must be >= 1, received {value}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if isinstance(value, str) and not strict:
        s = value.strip()
        if s.isdigit() and int(s) >= 1:
            warnings.append(f"Field '{field}' converted from '{value}' to int.")
            return int(s)

    msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    # CSV string to list conversion for CLI compatibility
    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{field}' converted from CSV string to list.")
            return items
        return list(fallback)

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extensions(exts: List[str]) -> List[str]:
    """Store extensions lowercase and without the leading dot."""
    out: List[str] = []
    for ext in exts:
        e = ext.strip().lstrip(".").lower()
        if e and e not in out:
            out.append(e)
    return out
