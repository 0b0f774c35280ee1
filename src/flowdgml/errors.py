"""Exception types raised by flowdgml."""

from typing import Any
from uuid import UUID


class FlowGraphError(Exception):
    """Base class for flowdgml errors."""
    pass


class UnknownNodeVariantError(FlowGraphError, TypeError):
    """Raised when the projection engine meets a node outside the known variants."""

    def __init__(self, node: Any):
        self.node = node
        super().__init__(f"Cannot project node of type {type(node).__name__!r}")


class CategoryConfigurationError(FlowGraphError):
    """Raised when a declared category has no background colour."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"No background colour configured for categories: {', '.join(missing)}")


class FlowDescriptionError(FlowGraphError):
    """Raised when a flow description file cannot be turned into a flow."""

    def __init__(self, message: str, node_id: UUID | str | None = None):
        self.node_id = node_id
        super().__init__(message)


class DgmlReadError(FlowGraphError):
    """Raised when an existing DGML document cannot be read."""
    pass
