"""Diagram document model: nodes, links and category declarations."""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

# Node attributes written by the DGML renderer itself
RESERVED_NODE_ATTRIBUTES = frozenset({"Id", "Label", "Category"})


@dataclass(frozen=True)
class DiagramNode:
    """A node of the diagram."""
    id: str
    label: str
    category: str | None = None
    properties: dict[str, str] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class DiagramLink:
    """A directed link between two diagram nodes."""
    source: str
    target: str
    category: str | None = None
    label: str | None = None


@dataclass(frozen=True)
class CategoryDeclaration:
    """Styling declaration for a category."""
    id: str
    background: str


@dataclass(frozen=True)
class DiagramDocument:
    """Completed diagram produced by one projection run."""
    nodes: tuple[DiagramNode, ...] = ()
    links: tuple[DiagramLink, ...] = ()
    categories: tuple[CategoryDeclaration, ...] = ()

    def links_from(self, node_id: UUID | str) -> list[DiagramLink]:
        source = str(node_id)
        return [link for link in self.links if link.source == source]

    def node(self, node_id: UUID | str) -> DiagramNode | None:
        wanted = str(node_id)
        for node in self.nodes:
            if node.id == wanted:
                return node
        return None


class DocumentBuilder:
    """Append-only accumulator for a single projection run."""

    def __init__(self):
        self._nodes: list[DiagramNode] = []
        self._links: list[DiagramLink] = []
        self._categories: list[CategoryDeclaration] = []

    def add_node(
        self,
        node_id: UUID | str,
        label: str | None = None,
        category: str | None = None,
        properties: dict[str, Any] | None = None,
    ) -> None:
        """Append a node. Callers are responsible for id uniqueness.

        Raises:
            ValueError: If a property would overwrite Id, Label or Category
        """
        properties = properties or {}
        reserved = sorted(RESERVED_NODE_ATTRIBUTES.intersection(properties))
        if reserved:
            raise ValueError(f"Node properties must not use reserved attribute names: {reserved}")

        self._nodes.append(DiagramNode(
            id=str(node_id),
            label=label or "",
            category=category,
            properties={key: str(value) for key, value in properties.items()},
        ))

    def add_link(
        self,
        source: UUID | str | None,
        target: UUID | str | None,
        category: str | None = None,
        label: str | None = None,
    ) -> None:
        """Append a link, or do nothing when either endpoint is missing."""
        if source is None or target is None:
            return

        self._links.append(DiagramLink(
            source=str(source),
            target=str(target),
            category=category,
            label=label,
        ))

    def declare_category(self, category_id: str, background: str) -> None:
        self._categories.append(CategoryDeclaration(id=category_id, background=background))

    def build(self) -> DiagramDocument:
        return DiagramDocument(
            nodes=tuple(self._nodes),
            links=tuple(self._links),
            categories=tuple(self._categories),
        )
