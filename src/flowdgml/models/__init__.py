"""Workflow model and flow-description file models for flowdgml."""

from flowdgml.models.description import FlowDocument
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

__all__ = [
    "FlowNode",
    "ActivityNode",
    "ConditionNode",
    "SwitchNode",
    "Fork",
    "ForkJoinNode",
    "BlockNode",
    "FlowDescription",
    "FlowDocument",
]
