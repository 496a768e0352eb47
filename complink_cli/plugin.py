"""Message boundary between the scanner and the presentation layer.

Every host surface (design editor, whiteboard, slides, ...) gets the same
handler. Surfaces differ only in whether node lookup by id is synchronous
or asynchronous.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from . import config
from .auditor import LinkAuditor
from .document import DesignDocument
from .errors import InvalidRootError
from .models import SceneNode
from .scanner import scan

logger = logging.getLogger(__name__)

SYNC_LOOKUP = "sync"
ASYNC_LOOKUP = "async"

# Id lookup variant offered by each editor type
LOOKUP_MODES: Dict[str, str] = {
    "figma": ASYNC_LOOKUP,
    "figjam": SYNC_LOOKUP,
    "slides": SYNC_LOOKUP,
    "buzz": SYNC_LOOKUP,
}

NOT_FOUND_MESSAGE = "Could not find the component."
SELECTION_ERROR_PREFIX = "Error selecting the component: "


class HostSurface(ABC):
    """The editor the plugin currently runs in."""

    editor_type: str = "figma"

    @property
    @abstractmethod
    def selection(self) -> Sequence[SceneNode]: ...

    @abstractmethod
    def post_message(self, message: Dict[str, Any]) -> None:
        """Deliver a message to the presentation layer (fire and forget)."""

    @abstractmethod
    def close(self) -> None: ...

    @abstractmethod
    def resize(self, width: int, height: int) -> None: ...

    @abstractmethod
    def select_and_reveal(self, node: SceneNode) -> None: ...

    @abstractmethod
    def find_node_by_id(self, node_id: str) -> Optional[SceneNode]: ...

    @abstractmethod
    async def find_node_by_id_async(self, node_id: str) -> Optional[SceneNode]: ...


class DocumentSurface(HostSurface):
    """Host surface backed by a loaded design document."""

    def __init__(
        self,
        document: DesignDocument,
        selection: Sequence[SceneNode] = (),
        editor_type: str = "figma",
    ):
        self.document = document
        self.editor_type = editor_type
        self._selection: List[SceneNode] = list(selection)
        self.messages: List[Dict[str, Any]] = []
        self.width = config.UI_WIDTH
        self.height = config.UI_HEIGHT
        self.revealed: Optional[SceneNode] = None
        self.closed = False

    @property
    def selection(self) -> Sequence[SceneNode]:
        return tuple(self._selection)

    def post_message(self, message: Dict[str, Any]) -> None:
        self.messages.append(message)

    def close(self) -> None:
        self.closed = True

    def resize(self, width: int, height: int) -> None:
        self.width, self.height = width, height

    def select_and_reveal(self, node: SceneNode) -> None:
        self._selection = [node]
        self.revealed = node

    def find_node_by_id(self, node_id: str) -> Optional[SceneNode]:
        return self.document.get_node_by_id(node_id)

    async def find_node_by_id_async(self, node_id: str) -> Optional[SceneNode]:
        return await self.document.get_node_by_id_async(node_id)


class PluginController:
    """Dispatch UI messages for one host surface."""

    def __init__(
        self,
        surface: HostSurface,
        auditor: LinkAuditor,
        lookup_mode: Optional[str] = None,
    ):
        mode = lookup_mode or LOOKUP_MODES.get(surface.editor_type)
        if mode not in (SYNC_LOOKUP, ASYNC_LOOKUP):
            raise ValueError(f"Unsupported editor type: {surface.editor_type!r}")

        self.surface = surface
        self.auditor = auditor
        self.lookup_mode = mode
        self.cancelled = False
        # One scan in flight at a time
        self._scan_lock = asyncio.Lock()
        self._handlers: Dict[str, Callable[[Dict[str, Any]], Awaitable[None]]] = {
            "scan-frame": self._on_scan_frame,
            "cancel": self._on_cancel,
            "resize-ui": self._on_resize,
            "select-component": self._on_select_component,
        }

    async def handle_message(self, message: Dict[str, Any]) -> None:
        handler = self._handlers.get(message.get("type", ""))
        if handler is None:
            logger.debug("Ignoring unknown message %r", message.get("type"))
            return
        await handler(message)

    def _post(self, message: Dict[str, Any]) -> None:
        if self.cancelled:
            logger.debug("Dropping %s message after cancel", message.get("type"))
            return
        self.surface.post_message(message)

    async def _on_scan_frame(self, message: Dict[str, Any]) -> None:
        selection = self.surface.selection
        root = selection[0] if selection else None

        async with self._scan_lock:
            try:
                result = await scan(root, self.auditor)
            except InvalidRootError as exc:
                logger.info("Scan rejected (%s)", exc.reason)
                self._post({"type": "scan-result", "error": exc.message, "reason": exc.reason})
                return

        self._post({"type": "scan-result", "result": result.to_dict()})

    async def _on_cancel(self, message: Dict[str, Any]) -> None:
        # In-flight lookups keep running; only delivery stops
        self.cancelled = True
        self.surface.close()

    async def _on_resize(self, message: Dict[str, Any]) -> None:
        height = message.get("height")
        if not isinstance(height, int) or isinstance(height, bool) or height <= 0:
            logger.warning("Ignoring resize with invalid height %r", height)
            return
        self.surface.resize(config.UI_WIDTH, height)

    async def _on_select_component(self, message: Dict[str, Any]) -> None:
        node_id = str(message.get("componentId", ""))
        try:
            node = await self._find_node(node_id)
            if node is None:
                self._post({"type": "selection-error", "error": NOT_FOUND_MESSAGE, "componentId": node_id})
                return
            self.surface.select_and_reveal(node)
        except Exception as exc:
            logger.warning("Selecting node %s failed: %s", node_id, exc)
            self._post({"type": "selection-error", "error": SELECTION_ERROR_PREFIX + str(exc)})

    async def _find_node(self, node_id: str) -> Optional[SceneNode]:
        if self.lookup_mode == ASYNC_LOOKUP:
            return await self.surface.find_node_by_id_async(node_id)
        return self.surface.find_node_by_id(node_id)
