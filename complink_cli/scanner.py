"""Scan entry point: validate the chosen root, then audit it."""

from __future__ import annotations

from typing import Optional

from . import config
from .auditor import LinkAuditor
from .errors import InvalidRootError
from .models import ScanResult, SceneNode

NO_SELECTION_MESSAGE = "Please select a frame to scan."
INVALID_TYPE_MESSAGE = "Please select a Frame, Component or Component Set."


def validate_root(node: Optional[SceneNode]) -> SceneNode:
    """Return ``node`` if it can be scanned, else raise InvalidRootError."""
    if node is None:
        raise InvalidRootError(InvalidRootError.NO_SELECTION, NO_SELECTION_MESSAGE)
    if node.type not in config.ACCEPTED_ROOT_TYPES:
        raise InvalidRootError(InvalidRootError.INVALID_TYPE, INVALID_TYPE_MESSAGE)
    return node


async def scan(root: Optional[SceneNode], auditor: LinkAuditor) -> ScanResult:
    """Validate ``root`` and run a full scan with ``auditor``."""
    frame = validate_root(root)
    return await auditor.scan_frame(frame)
