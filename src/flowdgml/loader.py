"""Loading of flow-description files into the workflow model."""

import json
import logging
from pathlib import Path
from typing import Any
from uuid import UUID

from pydantic import ValidationError

from flowdgml.errors import FlowDescriptionError
from flowdgml.models.description import (
    ActivityEntry,
    BlockEntry,
    ConditionEntry,
    FlowDocument,
    ForkJoinEntry,
    SwitchEntry,
)
from flowdgml.models.flow import (
    ActivityNode,
    BlockNode,
    ConditionNode,
    Fork,
    FlowDescription,
    FlowNode,
    ForkJoinNode,
    SwitchNode,
)

logger = logging.getLogger(__name__)


def load_flow(path: str | Path) -> FlowDescription:
    """Load a flow description from a JSON file.

    Args:
        path: Path to the flow-description file

    Returns:
        FlowDescription with nodes in file order

    Raises:
        FlowDescriptionError: If the file is unreadable or describes an invalid flow
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise FlowDescriptionError(f"Flow file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise FlowDescriptionError(f"Invalid JSON in flow file {path}: {e}") from e

    flow = parse_flow(data)
    logger.info(f"Loaded {len(flow)} nodes from {path}")
    return flow


def parse_flow(data: Any) -> FlowDescription:
    """Build a flow description from already-decoded JSON data."""
    try:
        document = FlowDocument.model_validate(data)
    except ValidationError as e:
        raise FlowDescriptionError(f"Invalid flow description: {e}") from e

    return FlowResolver(document).resolve()


class FlowResolver:
    """Turns id references of a flow document into node references.

    Nodes are created in a first pass so that forward references and cycles
    resolve; continuations are wired in a second pass.
    """

    def __init__(self, document: FlowDocument):
        self.document = document
        self._nodes: dict[UUID, FlowNode] = {}

    def resolve(self) -> FlowDescription:
        for entry in self.document.nodes:
            if entry.id in self._nodes:
                raise FlowDescriptionError(f"Duplicate node id {entry.id}", node_id=entry.id)
            self._nodes[entry.id] = self._create(entry)

        for entry in self.document.nodes:
            self._wire(entry, self._nodes[entry.id])

        return FlowDescription(list(self._nodes.values()), name=self.document.name)

    def _create(self, entry) -> FlowNode:
        if isinstance(entry, ActivityEntry):
            return ActivityNode(id=entry.id, name=entry.name, activity_type=entry.activity_type)
        if isinstance(entry, ConditionEntry):
            return ConditionNode(id=entry.id, name=entry.name)
        if isinstance(entry, SwitchEntry):
            return SwitchNode(id=entry.id, name=entry.name)
        if isinstance(entry, ForkJoinEntry):
            forks = [Fork(id=fork.id, name=fork.name, activity_type=fork.activity_type) for fork in entry.forks]
            return ForkJoinNode(id=entry.id, name=entry.name, forks=forks)
        if isinstance(entry, BlockEntry):
            return BlockNode(id=entry.id, name=entry.name)
        raise FlowDescriptionError(f"Unsupported node entry {type(entry).__name__}", node_id=entry.id)

    def _wire(self, entry, node: FlowNode) -> None:
        if isinstance(entry, (ActivityEntry, ForkJoinEntry)):
            node.points_to = self._ref(entry.points_to, entry.id)
            node.fault_handler = self._ref(entry.fault_handler, entry.id)
            node.cancellation_handler = self._ref(entry.cancellation_handler, entry.id)
        elif isinstance(entry, ConditionEntry):
            node.when_true = self._ref(entry.when_true, entry.id)
            node.when_false = self._ref(entry.when_false, entry.id)
        elif isinstance(entry, SwitchEntry):
            seen = set()
            for case in entry.cases:
                identity = (type(case.value).__name__, json.dumps(case.value, sort_keys=True))
                if identity in seen:
                    raise FlowDescriptionError(
                        f"Switch {entry.id} repeats case value {identity[1]}", node_id=entry.id
                    )
                seen.add(identity)

                key = _case_key(case.value)
                if key in node.cases:
                    raise FlowDescriptionError(
                        f"Switch {entry.id} case value {identity[1]} collides with case {key!r}", node_id=entry.id
                    )
                node.cases[key] = self._ref(case.target, entry.id)
            node.default_case = self._ref(entry.default_case, entry.id)
        elif isinstance(entry, BlockEntry):
            node.inner_nodes = [self._ref(inner, entry.id) for inner in entry.inner_nodes]
            node.points_to = self._ref(entry.points_to, entry.id)

    def _ref(self, target: UUID | None, owner: UUID) -> FlowNode | None:
        if target is None:
            return None
        if target not in self._nodes:
            raise FlowDescriptionError(f"Node {owner} references unknown node {target}", node_id=owner)
        return self._nodes[target]


def _case_key(value: Any) -> Any:
    # Strings, ints and null keep their value; True == 1 == 1.0 as dict keys, and
    # arrays and objects are unhashable, so everything else keys by its JSON text
    if value is None or isinstance(value, str) or (isinstance(value, int) and not isinstance(value, bool)):
        return value
    return json.dumps(value, sort_keys=True)
