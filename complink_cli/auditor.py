"""Link auditing: classify located instances and assemble the issue report."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Set, Tuple

from . import config
from .locator import locate
from .models import InstanceRecord, Issue, MainComponent, ScanResult, SceneNode

logger = logging.getLogger(__name__)

Resolver = Callable[[SceneNode], Awaitable[Optional[MainComponent]]]


class LinkAuditor:
    """Check instances against their main components.

    An instance is linked only when its main component resolves and is
    flagged as coming from a remote library. Everything else, including
    lookups that raise or time out, is reported as an issue.
    """

    def __init__(
        self,
        resolver: Resolver,
        timeout: Optional[float] = None,
        concurrency: Optional[int] = None,
    ):
        self.resolver = resolver
        self.timeout = config.LOOKUP_TIMEOUT if timeout is None else timeout
        self.concurrency = config.LOOKUP_CONCURRENCY if concurrency is None else concurrency
        if self.concurrency < 1:
            raise ValueError("concurrency must be at least 1")

    async def is_linked(self, node: SceneNode) -> bool:
        """Return True if ``node`` resolves to a remote main component."""
        try:
            component = await asyncio.wait_for(self.resolver(node), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Main component lookup timed out for %r after %ss", node, self.timeout)
            return False
        except Exception as exc:
            logger.warning("Main component lookup failed for %r: %s", node, exc)
            return False

        if component is None:
            logger.debug("No main component for %r", node)
            return False
        return component.remote is True

    async def classify(self, records: Sequence[InstanceRecord]) -> List[bool]:
        """Link status per record, in input order."""
        semaphore = asyncio.Semaphore(self.concurrency)

        async def check(record: InstanceRecord) -> bool:
            async with semaphore:
                return await self.is_linked(record.node)

        return list(await asyncio.gather(*(check(r) for r in records)))

    async def audit(self, records: Sequence[InstanceRecord], frame_name: str) -> ScanResult:
        """Build the scan result for instances located under ``frame_name``.

        Args:
            records: Output of :func:`locate`, in traversal order
            frame_name: Display name of the scan root

        Returns:
            ScanResult whose issues keep traversal order
        """
        statuses = await self.classify(records)
        unlinked_ids = {
            record.node.id for record, linked in zip(records, statuses) if not linked
        }

        # First record per (name, level); later same-named siblings never match
        first_by_name_level: Dict[Tuple[str, int], InstanceRecord] = {}
        for record in records:
            first_by_name_level.setdefault((record.node.name, record.level), record)

        issues: List[Issue] = []
        for record, linked in zip(records, statuses):
            if linked:
                continue
            parent_id = _reconnect_parent(record, first_by_name_level, unlinked_ids)
            issues.append(Issue.from_record(record, parent_id=parent_id))

        logger.info(
            "Audited '%s': %d instances, %d not linked",
            frame_name,
            len(records),
            len(issues),
        )
        return ScanResult(
            frame_name=frame_name,
            total_components=len(records),
            total_issues=len(issues),
            issues=issues,
        )

    async def scan_frame(self, frame: SceneNode) -> ScanResult:
        """Locate and audit every instance under ``frame``."""
        return await self.audit(locate(frame), frame.name)


def _reconnect_parent(
    record: InstanceRecord,
    first_by_name_level: Dict[Tuple[str, int], InstanceRecord],
    unlinked_ids: Set[str],
) -> Optional[str]:
    """Best-effort id of the nearest unlinked ancestor instance.

    Matches on (name, level) against the first record seen for each pair, so two
    same-named instances at the same level resolve to the first one.
    """
    if record.parent_name is None:
        return None

    candidate = first_by_name_level.get((record.parent_name, record.level - 1))
    if candidate is None or candidate.node.id not in unlinked_ids:
        return None
    return candidate.node.id


def summarize_levels(result: ScanResult) -> Dict[int, int]:
    """Count issues per nesting level."""
    counts: Dict[int, int] = {}
    for issue in result.issues:
        counts[issue.level] = counts.get(issue.level, 0) + 1
    return dict(sorted(counts.items()))
