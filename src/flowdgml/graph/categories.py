"""Node and link categories with their display colours."""

import logging
from collections.abc import Mapping

from ..errors import CategoryConfigurationError
from ..models.flow import ActivityNode, BlockNode, ConditionNode, FlowNode, ForkJoinNode, SwitchNode

logger = logging.getLogger(__name__)


class Categories:
    """Enum-like class of DGML category identifiers."""
    ACTIVITY = "Activity"
    SWITCH = "Switch"
    CONDITION = "Condition"
    FORK = "Fork"
    BLOCK = "Block"

    NORMAL_FLOW = "NormalFlow"
    FAULT_FLOW = "FaultFlow"
    CANCELLATION_FLOW = "CancellationFlow"
    PARALLEL_FLOW = "ParallelFlow"
    DEFAULT = "Default"

    # Built into DGML viewers, never declared in the document
    CONTAINS = "Contains"


# Declaration order of the Categories section
DECLARED_CATEGORIES: tuple[str, ...] = (
    Categories.ACTIVITY,
    Categories.SWITCH,
    Categories.CONDITION,
    Categories.FORK,
    Categories.BLOCK,
    Categories.NORMAL_FLOW,
    Categories.FAULT_FLOW,
    Categories.CANCELLATION_FLOW,
    Categories.PARALLEL_FLOW,
    Categories.DEFAULT,
)

DEFAULT_PALETTE: dict[str, str] = {
    Categories.ACTIVITY: "#FF4F81BD",
    Categories.SWITCH: "#FFF79646",
    Categories.CONDITION: "#FFFFC000",
    Categories.FORK: "#FF8064A2",
    Categories.BLOCK: "#FF9BBB59",
    Categories.NORMAL_FLOW: "#FF000000",
    Categories.FAULT_FLOW: "#FFC0504D",
    Categories.CANCELLATION_FLOW: "#FF7F7F7F",
    Categories.PARALLEL_FLOW: "#FF4BACC6",
    Categories.DEFAULT: "#FF1F497D",
}

NODE_CATEGORIES: dict[type[FlowNode], str] = {
    ActivityNode: Categories.ACTIVITY,
    SwitchNode: Categories.SWITCH,
    ConditionNode: Categories.CONDITION,
    ForkJoinNode: Categories.FORK,
    BlockNode: Categories.BLOCK,
}


class CategoryTable:
    """Lookup of category backgrounds and node categories.

    Every declared category must resolve to a colour; a gap is reported when
    the table is built so that no projection ever runs against it.
    """

    def __init__(
        self,
        palette: Mapping[str, str] | None = None,
        declared: tuple[str, ...] = DECLARED_CATEGORIES,
    ):
        colours = dict(DEFAULT_PALETTE if palette is None else palette)
        missing = [category for category in declared if not colours.get(category)]
        if missing:
            raise CategoryConfigurationError(missing)

        self.declared = declared
        self._colours = colours

    @classmethod
    def with_overrides(cls, overrides: Mapping[str, str]) -> "CategoryTable":
        """Build a table from the default palette with some colours replaced."""
        palette = dict(DEFAULT_PALETTE)
        palette.update(overrides)
        if overrides:
            logger.debug(f"Palette overrides: {sorted(overrides)}")
        return cls(palette)

    def background_of(self, category: str) -> str:
        return self._colours[category]

    def node_category(self, node: FlowNode) -> str | None:
        """Category of a workflow node, or None when it has no category."""
        return NODE_CATEGORIES.get(type(node))

    def items(self) -> list[tuple[str, str]]:
        """Declared categories with their backgrounds, in declaration order."""
        return [(category, self._colours[category]) for category in self.declared]
