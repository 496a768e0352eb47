"""Depth-first discovery of component instances in a design tree."""

from __future__ import annotations

import logging
from typing import List, Tuple

from .models import InstanceRecord, SceneNode

logger = logging.getLogger(__name__)


def locate(root: SceneNode) -> List[InstanceRecord]:
    """Find every instance under ``root`` (inclusive) in pre-order.

    Each record carries the level and ancestor-name chain as they were
    before the instance itself was entered, so an instance never counts
    itself. Non-instance nodes pass both through unchanged.

    Args:
        root: Node to start from; may itself be an instance

    Returns:
        Instance records in emission order (outer instances before the
        instances nested inside them)
    """
    records: List[InstanceRecord] = []
    # Explicit stack; deep trees would otherwise exhaust the recursion limit
    stack: List[Tuple[SceneNode, int, Tuple[str, ...]]] = [(root, 0, ())]

    while stack:
        node, level, path = stack.pop()

        if node.is_instance:
            records.append(InstanceRecord(node=node, level=level, parent_path=path))
            level += 1
            path = path + (node.name,)

        if node.has_children():
            # Reversed so the first child is popped first
            for child in reversed(node.children()):
                stack.append((child, level, path))

    logger.debug("Located %d instances under %r", len(records), root)
    return records
