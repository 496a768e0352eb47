"""Design documents loaded from exported JSON files.

The file layout follows the design tool's REST export::

    {
      "name": "Checkout",
      "document": {"id": "0:0", "type": "DOCUMENT", "children": [...pages...]},
      "components": {"12:3": {"key": "abc", "name": "Button", "remote": true}}
    }

Instances reference their main component through ``componentId``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

from . import config
from .errors import DocumentError, LookupFailure
from .models import MainComponent, SceneNode

logger = logging.getLogger(__name__)


class DocumentNode(SceneNode):
    """In-memory node built from a JSON dictionary."""

    def __init__(
        self,
        node_id: str,
        name: str,
        node_type: str,
        children: Optional[List["DocumentNode"]] = None,
        component_id: Optional[str] = None,
    ):
        self._id = node_id
        self._name = name
        self._type = node_type
        # None means the node type cannot hold children at all
        self._children = children
        self.component_id = component_id

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> str:
        return self._type

    def has_children(self) -> bool:
        return self._children is not None

    def children(self) -> Sequence["DocumentNode"]:
        return tuple(self._children or ())

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DocumentNode":
        """Build a node tree from a nested dictionary."""
        if not isinstance(payload, dict):
            raise DocumentError(f"Expected a node object, got {type(payload).__name__}")
        try:
            node_id = str(payload["id"])
            node_type = str(payload["type"])
        except KeyError as exc:
            raise DocumentError(f"Node is missing required field {exc}") from exc

        raw_children = payload.get("children")
        children = None
        if raw_children is not None:
            if not isinstance(raw_children, list):
                raise DocumentError(f"Node '{node_id}' has non-list children")
            children = [cls.from_dict(child) for child in raw_children]

        component_id = payload.get("componentId")
        return cls(
            node_id=node_id,
            name=str(payload.get("name", "")),
            node_type=node_type,
            children=children,
            component_id=str(component_id) if component_id is not None else None,
        )


class DesignDocument:
    """A loaded design file: node tree, component metadata and id index."""

    def __init__(
        self,
        name: str,
        root: DocumentNode,
        components: Optional[Dict[str, MainComponent]] = None,
    ):
        self.name = name
        self.root = root
        self.components = components or {}
        self._index: Dict[str, DocumentNode] = {node.id: node for node in self.walk()}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DesignDocument":
        if not isinstance(payload, dict) or "document" not in payload:
            raise DocumentError("Design file has no 'document' tree")

        try:
            root = DocumentNode.from_dict(payload["document"])
        except RecursionError as exc:
            raise DocumentError("Node tree is nested too deeply to load") from exc
        raw_components = payload.get("components") or {}
        if not isinstance(raw_components, dict):
            raise DocumentError("'components' must be an object keyed by node id")

        components = {
            str(component_id): MainComponent(
                id=str(component_id),
                name=str(meta.get("name", "")),
                key=str(meta.get("key", "")),
                remote=meta.get("remote") is True,
            )
            for component_id, meta in raw_components.items()
            if isinstance(meta, dict)
        }
        return cls(name=str(payload.get("name", root.name)), root=root, components=components)

    def walk(self) -> Iterator[DocumentNode]:
        """Yield every node in pre-order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def pages(self) -> Sequence[DocumentNode]:
        return self.root.children()

    def scan_roots(self) -> List[DocumentNode]:
        """Frame-like nodes placed directly on a page."""
        return [
            node
            for page in self.pages()
            for node in page.children()
            if node.type in config.ACCEPTED_ROOT_TYPES
        ]

    def get_node_by_id(self, node_id: str) -> Optional[DocumentNode]:
        return self._index.get(node_id)

    async def get_node_by_id_async(self, node_id: str) -> Optional[DocumentNode]:
        return self.get_node_by_id(node_id)

    async def resolve_main_component(self, node: SceneNode) -> Optional[MainComponent]:
        """Resolve the main component an instance was placed from.

        Returns None for nodes without a component reference; raises
        LookupFailure when the reference points at unknown metadata.
        """
        if not isinstance(node, DocumentNode):
            raise LookupFailure(f"{node!r} does not belong to a design document")
        if node.component_id is None:
            return None
        component = self.components.get(node.component_id)
        if component is None:
            raise LookupFailure(
                f"Component '{node.component_id}' referenced by '{node.id}' is not in the file"
            )
        return component


def load_document(path: Path) -> DesignDocument:
    """Read a design file exported as JSON."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise DocumentError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DocumentError(f"{path} is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise DocumentError(f"{path} is nested too deeply to load") from exc

    document = DesignDocument.from_dict(payload)
    logger.debug("Loaded '%s' with %d components", document.name, len(document.components))
    return document
