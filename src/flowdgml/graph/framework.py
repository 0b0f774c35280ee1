"""Renderer framework for diagram documents."""

import logging
from abc import ABC, abstractmethod

from .document import DiagramDocument

logger = logging.getLogger(__name__)


class GraphRenderer(ABC):
    """Abstract base class for diagram renderers."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def render(self, document: DiagramDocument) -> str:
        """Render a diagram document to string format."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format."""
        pass


class RendererRegistry:
    """Renderers indexed by format name."""

    def __init__(self, renderers: list[GraphRenderer] | None = None):
        self.renderers: dict[str, GraphRenderer] = {}
        for renderer in renderers or []:
            self.add_renderer(renderer)

    def add_renderer(self, renderer: GraphRenderer) -> None:
        self.renderers[renderer.format_name] = renderer

    def get(self, format_name: str) -> GraphRenderer:
        if format_name not in self.renderers:
            available = list(self.renderers.keys())
            raise ValueError(f"Unknown format '{format_name}'. Available: {available}")
        return self.renderers[format_name]

    def render(self, document: DiagramDocument, format_name: str = "dgml") -> str:
        """Render a document with the renderer registered for ``format_name``."""
        renderer = self.get(format_name)
        logger.info(f"Rendering diagram with {renderer.format_name} renderer")
        return renderer.render(document)
