"""Projection of workflow flows into diagram documents."""

import logging
from collections.abc import Callable, Iterable

from ..errors import UnknownNodeVariantError
from ..models.flow import (
    ActivityNode,
    BlockNode,
    ConditionNode,
    FlowNode,
    ForkJoinNode,
    SwitchNode,
)
from .categories import Categories, CategoryTable
from .document import DiagramDocument, DocumentBuilder

logger = logging.getLogger(__name__)


def _id_of(node: FlowNode | None):
    return node.id if node is not None else None


class FlowGraphBuilder:
    """Projects every node of a flow into diagram nodes and links.

    Each call to ``generate`` owns a fresh document, so a builder may be
    reused for any number of flows.
    """

    def __init__(self, categories: CategoryTable | None = None):
        self.categories = categories or CategoryTable()
        self._visitors: dict[type[FlowNode], Callable[[DocumentBuilder, FlowNode], None]] = {
            ActivityNode: self._visit_activity,
            SwitchNode: self._visit_switch,
            ConditionNode: self._visit_condition,
            ForkJoinNode: self._visit_fork_join,
            BlockNode: self._visit_block,
        }

    def generate(self, flow_description: Iterable[FlowNode]) -> DiagramDocument:
        """Project a flow into a diagram document.

        Args:
            flow_description: Ordered, deduplicated collection of flow nodes

        Returns:
            DiagramDocument with all declared categories, nodes and links

        Raises:
            ValueError: If no flow description is given
            UnknownNodeVariantError: If a node is not a known variant
        """
        if flow_description is None:
            raise ValueError("flow_description must not be None")

        document = DocumentBuilder()
        for category, background in self.categories.items():
            document.declare_category(category, background)

        for node in flow_description:
            self._visitor_for(node)(document, node)

        result = document.build()
        logger.info(f"Projected flow into {len(result.nodes)} nodes and {len(result.links)} links")
        return result

    def _visitor_for(self, node: object) -> Callable[[DocumentBuilder, FlowNode], None]:
        for cls in type(node).__mro__:
            visitor = self._visitors.get(cls)
            if visitor is not None:
                logger.debug(f"Projecting {cls.__name__} {getattr(node, 'id', None)}")
                return visitor
        raise UnknownNodeVariantError(node)

    def _visit_activity(self, document: DocumentBuilder, node: ActivityNode) -> None:
        document.add_node(
            node.id,
            node.name or node.activity_type,
            self.categories.node_category(node),
            {"ActivityType": node.activity_type},
        )

        document.add_link(node.id, _id_of(node.points_to), Categories.NORMAL_FLOW)
        document.add_link(node.id, _id_of(node.fault_handler), Categories.FAULT_FLOW)
        document.add_link(node.id, _id_of(node.cancellation_handler), Categories.CANCELLATION_FLOW)

    def _visit_switch(self, document: DocumentBuilder, node: SwitchNode) -> None:
        self._add_flow_node(document, node)

        document.add_link(node.id, _id_of(node.default_case), Categories.DEFAULT)

        for value, target in node.cases.items():
            label = str(value) if value is not None else ""
            document.add_link(node.id, _id_of(target), Categories.NORMAL_FLOW, label)

    def _visit_condition(self, document: DocumentBuilder, node: ConditionNode) -> None:
        self._add_flow_node(document, node)

        document.add_link(node.id, _id_of(node.when_false), Categories.NORMAL_FLOW, "False")
        document.add_link(node.id, _id_of(node.when_true), Categories.NORMAL_FLOW, "True")

    def _visit_fork_join(self, document: DocumentBuilder, node: ForkJoinNode) -> None:
        self._add_flow_node(document, node)

        # Every fork rejoins the continuations owned by the join node
        continuations = (
            (_id_of(node.points_to), Categories.NORMAL_FLOW),
            (_id_of(node.fault_handler), Categories.FAULT_FLOW),
            (_id_of(node.cancellation_handler), Categories.CANCELLATION_FLOW),
        )

        for fork in node.forks:
            document.add_node(
                fork.id,
                fork.name,
                Categories.FORK,
                {"ActivityType": fork.activity_type},
            )
            document.add_link(node.id, fork.id, Categories.PARALLEL_FLOW)

            for target, category in continuations:
                document.add_link(fork.id, target, category)

    def _visit_block(self, document: DocumentBuilder, node: BlockNode) -> None:
        self._add_flow_node(document, node, {"Group": "Expanded"})

        for inner in node.inner_nodes:
            document.add_link(node.id, _id_of(inner), Categories.CONTAINS)

        document.add_link(node.id, _id_of(node.points_to), Categories.NORMAL_FLOW)

    def _add_flow_node(self, document: DocumentBuilder, node: FlowNode, properties: dict | None = None) -> None:
        document.add_node(node.id, node.name, self.categories.node_category(node), properties)


def project(flow_description: Iterable[FlowNode], categories: CategoryTable | None = None) -> DiagramDocument:
    """Project a flow with a one-off builder."""
    return FlowGraphBuilder(categories).generate(flow_description)
