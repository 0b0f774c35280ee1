"""Graph projection and rendering for flowdgml.

Projects workflow flows into diagram documents and renders them as DGML
(primary) or Mermaid.
"""

from .builder import FlowGraphBuilder, project
from .categories import Categories, CategoryTable
from .dgml import DgmlRenderer, read_dgml_summary
from .document import CategoryDeclaration, DiagramDocument, DiagramLink, DiagramNode, DocumentBuilder
from .framework import GraphRenderer, RendererRegistry
from .mermaid import MermaidRenderer

__all__ = [
    "FlowGraphBuilder",
    "project",
    "Categories",
    "CategoryTable",
    "DiagramDocument",
    "DiagramNode",
    "DiagramLink",
    "CategoryDeclaration",
    "DocumentBuilder",
    "GraphRenderer",
    "RendererRegistry",
    "DgmlRenderer",
    "MermaidRenderer",
    "read_dgml_summary",
]
