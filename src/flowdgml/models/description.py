"""Pydantic models for the JSON flow-description file."""

from typing import Annotated, Any, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class NodeEntry(BaseModel):
    """Fields shared by every node entry in a flow file."""
    id: UUID
    name: str | None = None

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class ActivityEntry(NodeEntry):
    type: Literal["activity"]
    activity_type: str = Field(alias="activityType")
    points_to: UUID | None = Field(alias="pointsTo", default=None)
    fault_handler: UUID | None = Field(alias="faultHandler", default=None)
    cancellation_handler: UUID | None = Field(alias="cancellationHandler", default=None)


class ConditionEntry(NodeEntry):
    type: Literal["condition"]
    when_true: UUID | None = Field(alias="whenTrue", default=None)
    when_false: UUID | None = Field(alias="whenFalse", default=None)


class CaseEntry(BaseModel):
    """A single switch case; ``value`` may be null."""
    value: Any = None
    target: UUID | None = None

    model_config = ConfigDict(extra="forbid")


class SwitchEntry(NodeEntry):
    type: Literal["switch"]
    cases: list[CaseEntry] = Field(default_factory=list)
    default_case: UUID | None = Field(alias="defaultCase", default=None)


class ForkEntry(BaseModel):
    id: UUID
    name: str | None = None
    activity_type: str = Field(alias="activityType")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class ForkJoinEntry(NodeEntry):
    type: Literal["forkJoin"]
    forks: list[ForkEntry] = Field(default_factory=list)
    points_to: UUID | None = Field(alias="pointsTo", default=None)
    fault_handler: UUID | None = Field(alias="faultHandler", default=None)
    cancellation_handler: UUID | None = Field(alias="cancellationHandler", default=None)


class BlockEntry(NodeEntry):
    type: Literal["block"]
    inner_nodes: list[UUID] = Field(alias="innerNodes", default_factory=list)
    points_to: UUID | None = Field(alias="pointsTo", default=None)


FlowNodeEntry = Annotated[
    Union[ActivityEntry, ConditionEntry, SwitchEntry, ForkJoinEntry, BlockEntry],
    Field(discriminator="type"),
]


class FlowDocument(BaseModel):
    """Complete flow-description file."""
    name: str | None = None
    nodes: list[FlowNodeEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")
