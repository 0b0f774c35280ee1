"""Workflow node variants consumed by the projection engine.

A flow is built from a closed set of node variants. Every continuation is an
optional reference to another node; ``None`` means the continuation was not
configured. Nodes compare and hash by identity because continuations may
form cycles.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID, uuid4


@dataclass(eq=False, kw_only=True)
class FlowNode:
    """Common fields shared by every workflow node."""

    id: UUID = field(default_factory=uuid4)
    name: str | None = None


@dataclass(eq=False, kw_only=True)
class ActivityNode(FlowNode):
    """Runs one activity and continues on success, fault or cancellation."""

    activity_type: str
    points_to: FlowNode | None = field(default=None, repr=False)
    fault_handler: FlowNode | None = field(default=None, repr=False)
    cancellation_handler: FlowNode | None = field(default=None, repr=False)

    def connect_to(self, node: FlowNode | None) -> "ActivityNode":
        self.points_to = node
        return self

    def on_fault(self, node: FlowNode | None) -> "ActivityNode":
        self.fault_handler = node
        return self

    def on_cancel(self, node: FlowNode | None) -> "ActivityNode":
        self.cancellation_handler = node
        return self


@dataclass(eq=False, kw_only=True)
class ConditionNode(FlowNode):
    """Two-way branch on a boolean condition."""

    when_true: FlowNode | None = field(default=None, repr=False)
    when_false: FlowNode | None = field(default=None, repr=False)

    def on_true(self, node: FlowNode | None) -> "ConditionNode":
        self.when_true = node
        return self

    def on_false(self, node: FlowNode | None) -> "ConditionNode":
        self.when_false = node
        return self


@dataclass(eq=False, kw_only=True)
class SwitchNode(FlowNode):
    """Multi-way branch keyed by a discriminant value."""

    cases: dict[Any, FlowNode | None] = field(default_factory=dict, repr=False)
    default_case: FlowNode | None = field(default=None, repr=False)

    def when(self, value: Any, node: FlowNode | None) -> "SwitchNode":
        self.cases[value] = node
        return self

    def default(self, node: FlowNode | None) -> "SwitchNode":
        self.default_case = node
        return self


@dataclass(eq=False, kw_only=True)
class Fork:
    """One parallel branch of a fork/join node.

    A fork has no continuations of its own: every fork rejoins the
    continuations owned by its parent ``ForkJoinNode``.
    """
    activity_type: str
    id: UUID = field(default_factory=uuid4)
    name: str | None = None


@dataclass(eq=False, kw_only=True)
class ForkJoinNode(FlowNode):
    """Runs its forks concurrently and continues once they complete."""

    forks: list[Fork] = field(default_factory=list)
    points_to: FlowNode | None = field(default=None, repr=False)
    fault_handler: FlowNode | None = field(default=None, repr=False)
    cancellation_handler: FlowNode | None = field(default=None, repr=False)

    def add_fork(self, activity_type: str, name: str | None = None) -> Fork:
        """Append a new fork and return it."""
        fork = Fork(activity_type=activity_type, name=name)
        self.forks.append(fork)
        return fork

    def connect_to(self, node: FlowNode | None) -> "ForkJoinNode":
        self.points_to = node
        return self

    def on_fault(self, node: FlowNode | None) -> "ForkJoinNode":
        self.fault_handler = node
        return self

    def on_cancel(self, node: FlowNode | None) -> "ForkJoinNode":
        self.cancellation_handler = node
        return self


@dataclass(eq=False, kw_only=True)
class BlockNode(FlowNode):
    """Groups nested nodes and continues with a single successor."""

    inner_nodes: list[FlowNode] = field(default_factory=list, repr=False)
    points_to: FlowNode | None = field(default=None, repr=False)

    def add(self, node: FlowNode) -> FlowNode:
        self.inner_nodes.append(node)
        return node

    def connect_to(self, node: FlowNode | None) -> "BlockNode":
        self.points_to = node
        return self


class FlowDescription:
    """Ordered collection of workflow nodes, unique by id."""

    def __init__(self, nodes: list[FlowNode] | None = None, name: str | None = None):
        self.name = name
        self._nodes: dict[UUID, FlowNode] = {}
        for node in nodes or []:
            self.add(node)

    def add(self, node: FlowNode) -> FlowNode:
        """Add a node unless one with the same id is already present."""
        self._nodes.setdefault(node.id, node)
        return self._nodes[node.id]

    def get(self, node_id: UUID) -> FlowNode | None:
        return self._nodes.get(node_id)

    @property
    def nodes(self) -> list[FlowNode]:
        return list(self._nodes.values())

    def __iter__(self) -> Iterator[FlowNode]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return isinstance(node, FlowNode) and self._nodes.get(node.id) is node
