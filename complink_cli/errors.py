"""Error taxonomy for scans and node lookups."""

from __future__ import annotations


class ComplinkError(Exception):
    """Base class for every error raised by complink."""


class InvalidRootError(ComplinkError):
    """The scan root is missing or is not a frame-like container.

    Raised before any traversal happens.
    """

    NO_SELECTION = "no_selection"
    INVALID_TYPE = "invalid_type"

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class LookupFailure(ComplinkError):
    """A main component could not be resolved for one instance."""


class NodeNotFoundError(ComplinkError):
    """A node id from an earlier report no longer exists in the document."""

    def __init__(self, node_id: str):
        super().__init__(f"Node '{node_id}' not found.")
        self.node_id = node_id


class DocumentError(ComplinkError):
    """A design file could not be read or has an unexpected shape."""
