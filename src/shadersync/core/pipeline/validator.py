from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper for the sync engine, ensuring that the configuration
dictionary conforms to the expected schema. Handles type coercion and default
value injection to maintain execution stability.
"""

import logging
from typing import Any, Dict, List, Tuple

from shadersync.domain.config import get_default_config

logger = logging.getLogger(__name__)


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

    Converts untrusted inputs (CLI flags, persisted JSON) into strictly typed
    parameters and fills missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: A tuple containing the normalized
                                          configuration and a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    # 2. Field Processing & Normalization
    for field in ("shader_dir", "compiler", "artifact_suffix"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["clean_first"] = _as_bool(
        merged.get("clean_first"), defaults["clean_first"], "clean_first", warnings, strict
    )
    merged["max_workers"] = _as_worker_count(
        merged.get("max_workers"), defaults["max_workers"], warnings, strict
    )

    # 3. Domain-Specific Normalization
    merged["artifact_suffix"] = _normalize_suffix(merged["artifact_suffix"], warnings, strict)

    return merged, warnings


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


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_worker_count(value: Any, fallback: int, warnings: List[str], strict: bool) -> int:
    """Accept non-negative integers; 0 means 'let the executor decide'."""
    if value is None:
        return fallback

    n = None
    if isinstance(value, int) and not isinstance(value, bool):
        n = value
    elif isinstance(value, str) and not strict:
        try:
            n = int(value.strip())
            warnings.append(f"Field 'max_workers' converted from '{value}' to {n}.")
        except ValueError:
            n = None

    if n is not None and n >= 0:
        return n

    msg = f"Invalid field 'max_workers': expected non-negative int, received {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_suffix(suffix: str, warnings: List[str], strict: bool) -> str:
    """Ensure the artifact suffix is prefixed with a dot."""
    if suffix.startswith("."):
        return suffix
    if strict:
        raise ValueError(f"Invalid suffix '{suffix}': must start with '.'.")
    warnings.append(f"Suffix '{suffix}' corrected to '.{suffix}'.")
    return "." + suffix
