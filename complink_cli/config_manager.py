"""Configuration manager for complink using TOML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import toml

logger = logging.getLogger(__name__)

DEFAULT_AUDIT_CONFIG: Dict[str, Any] = {
    "lookup_timeout": 10.0,
    "lookup_concurrency": 8,
}


def load_full_config(path: Path) -> Dict[str, Any]:
    """Load the entire TOML config (all sections)."""
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config file %s: %s", path, exc)
        return {}


def load_audit_config(path: Path) -> Dict[str, Any]:
    """Load the ``[audit]`` section merged over the defaults.

    Unknown keys are dropped and values that cannot be coerced fall back
    to their default.
    """
    section = load_full_config(path).get("audit", {})
    merged = DEFAULT_AUDIT_CONFIG.copy()
    if not isinstance(section, dict):
        return merged

    for key, default in DEFAULT_AUDIT_CONFIG.items():
        if key not in section:
            continue
        try:
            value = type(default)(section[key])
        except (TypeError, ValueError):
            logger.warning("Invalid value for audit.%s: %r", key, section[key])
            continue
        if value <= 0:
            logger.warning("audit.%s must be positive, got %r", key, value)
            continue
        merged[key] = value
    return merged


def save_audit_config(path: Path, **values: Any) -> Dict[str, Any]:
    """Persist audit settings, preserving other sections in the file.

    Args:
        path: Config file location
        **values: ``lookup_timeout`` and/or ``lookup_concurrency``

    Returns:
        The audit section as written.
    """
    unknown = set(values) - set(DEFAULT_AUDIT_CONFIG)
    if unknown:
        raise ValueError(f"Unknown audit settings: {', '.join(sorted(unknown))}")

    full = load_full_config(path)
    audit = load_audit_config(path)
    audit.update({k: v for k, v in values.items() if v is not None})
    full["audit"] = audit

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        toml.dump(full, f)
    return audit
