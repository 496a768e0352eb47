"""Core data models shared by the locator, the auditor and the plugin boundary."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

INSTANCE = "INSTANCE"
FRAME = "FRAME"
COMPONENT = "COMPONENT"
COMPONENT_SET = "COMPONENT_SET"

NOT_LINKED = "NOT_LINKED"


class SceneNode(ABC):
    """A node of the host design tree.

    Implementations expose capabilities instead of optional attributes:
    callers ask ``has_children()`` before walking ``children()``.
    """

    @property
    @abstractmethod
    def id(self) -> str: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def type(self) -> str: ...

    @abstractmethod
    def has_children(self) -> bool: ...

    @abstractmethod
    def children(self) -> Sequence["SceneNode"]: ...

    @property
    def is_instance(self) -> bool:
        return self.type == INSTANCE

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.type} {self.id!r} {self.name!r}>"


@dataclass(frozen=True)
class MainComponent:
    id: str
    name: str
    key: str = ""
    remote: bool = False


@dataclass(frozen=True)
class InstanceRecord:
    """An instance found during traversal.

    ``level`` counts INSTANCE ancestors only; ``parent_path`` lists their
    names from outermost to innermost.
    """

    node: SceneNode
    level: int
    parent_path: Tuple[str, ...] = ()

    @property
    def parent_name(self) -> Optional[str]:
        return self.parent_path[-1] if self.parent_path else None


@dataclass
class Issue:
    name: str
    id: str
    level: int
    parent_path: List[str] = field(default_factory=list)
    parent_name: Optional[str] = None
    parent_id: Optional[str] = None
    type: str = NOT_LINKED

    @classmethod
    def from_record(cls, record: InstanceRecord, parent_id: Optional[str] = None) -> "Issue":
        return cls(
            name=record.node.name,
            id=record.node.id,
            level=record.level,
            parent_path=list(record.parent_path),
            parent_name=record.parent_name,
            parent_id=parent_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "id": self.id,
            "type": self.type,
            "level": self.level,
            "parentPath": list(self.parent_path),
            "parentName": self.parent_name,
            "parentId": self.parent_id,
        }


@dataclass
class ScanResult:
    frame_name: str
    total_components: int
    total_issues: int
    issues: List[Issue] = field(default_factory=list)

    @property
    def linked_count(self) -> int:
        return self.total_components - self.total_issues

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the payload sent across the message boundary."""
        return {
            "totalComponents": self.total_components,
            "totalIssues": self.total_issues,
            "issues": [issue.to_dict() for issue in self.issues],
            "frameName": self.frame_name,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ScanResult":
        """Rebuild a result from its message payload."""
        issues = [
            Issue(
                name=item["name"],
                id=item["id"],
                level=item["level"],
                parent_path=list(item.get("parentPath") or []),
                parent_name=item.get("parentName"),
                parent_id=item.get("parentId"),
                type=item.get("type", NOT_LINKED),
            )
            for item in payload.get("issues", [])
        ]
        return cls(
            frame_name=payload["frameName"],
            total_components=payload["totalComponents"],
            total_issues=payload["totalIssues"],
            issues=issues,
        )
