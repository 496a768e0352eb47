"""Configuration paths and audit defaults for complink."""

from __future__ import annotations

import os
from pathlib import Path

from .config_manager import load_audit_config

BASE_DIR = Path(os.environ.get("COMPLINK_HOME", str(Path.home() / ".complink"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"

# Node types accepted as scan roots
ACCEPTED_ROOT_TYPES = frozenset({"FRAME", "COMPONENT", "COMPONENT_SET"})

UI_WIDTH = 640
UI_HEIGHT = 300

# Audit settings, loaded from ~/.complink/config.toml (set via `complink config set`)
_audit_config = load_audit_config(CONFIG_FILE)
LOOKUP_TIMEOUT = float(_audit_config["lookup_timeout"])
LOOKUP_CONCURRENCY = int(_audit_config["lookup_concurrency"])
