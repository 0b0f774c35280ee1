"""flowdgml - Render workflow graphs as DGML diagrams.

flowdgml projects control-flow programs built from activities, conditions,
switches, fork/joins and blocks into Directed Graph Markup Language
documents for graph-visualization tooling.
"""

__version__ = "0.1.0"
__author__ = "flowdgml"
__description__ = "Render workflow graphs as DGML diagrams"

from flowdgml.config import FlowDgmlConfig
from flowdgml.graph.builder import FlowGraphBuilder, project

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "FlowDgmlConfig",
    "FlowGraphBuilder",
    "project",
]
