"""Mermaid flowchart renderer for diagram documents."""

import logging
import re

from .categories import Categories
from .document import DiagramDocument, DiagramLink, DiagramNode
from .framework import GraphRenderer

logger = logging.getLogger(__name__)

_DASHED_CATEGORIES = {Categories.FAULT_FLOW, Categories.CANCELLATION_FLOW}


class MermaidRenderer(GraphRenderer):
    """Mermaid diagram renderer for projected flows."""

    @property
    def format_name(self) -> str:
        return "mermaid"

    def get_file_extension(self) -> str:
        return ".mmd"

    def render(self, document: DiagramDocument) -> str:
        """Render diagram document as Mermaid flowchart."""
        lines = ["flowchart TD", ""]

        if document.nodes:
            lines.append("    %% Nodes")
            for node in document.nodes:
                lines.append(f"    {self._render_node(node)}")
            lines.append("")

        if document.links:
            lines.append("    %% Links")
            for link in document.links:
                lines.append(f"    {self._render_link(link)}")
            lines.append("")

        lines.extend(self._render_styling(document))

        return "\n".join(lines) + "\n"

    def _render_node(self, node: DiagramNode) -> str:
        """Render a single node; shape follows the node category."""
        safe_id = self._get_safe_id(node.id)
        label = self._escape_label(node.label) or " "

        if node.category == Categories.CONDITION or node.category == Categories.SWITCH:
            # Branches: rhombus
            return f'{safe_id}{{"{label}"}}'
        elif node.category == Categories.FORK:
            # Forks and joins: parallelogram
            return f'{safe_id}[/"{label}"/]'
        elif node.properties.get("Group"):
            # Groups: subroutine
            return f'{safe_id}[["{label}"]]'
        else:
            return f'{safe_id}("{label}")'

    def _render_link(self, link: DiagramLink) -> str:
        """Render a single link."""
        source = self._get_safe_id(link.source)
        target = self._get_safe_id(link.target)

        if link.category == Categories.CONTAINS:
            arrow = "-.-"
        elif link.category in _DASHED_CATEGORIES:
            arrow = "-.->"
        elif link.category == Categories.PARALLEL_FLOW:
            arrow = "==>"
        else:
            arrow = "-->"

        text = link.label if link.label else self._link_caption(link.category)
        if text:
            return f"{source} {arrow}|{self._escape_label(text)}| {target}"
        return f"{source} {arrow} {target}"

    def _link_caption(self, category: str | None) -> str:
        if category == Categories.FAULT_FLOW:
            return "fault"
        if category == Categories.CANCELLATION_FLOW:
            return "cancel"
        if category == Categories.DEFAULT:
            return "default"
        return ""

    def _render_styling(self, document: DiagramDocument) -> list[str]:
        """Render one class per declared category, applied to its nodes."""
        lines = []
        used = {node.category for node in document.nodes if node.category}

        for category in document.categories:
            if category.id not in used:
                continue
            lines.append(f"    classDef {category.id} fill:{self._css_colour(category.background)}")
            members = [self._get_safe_id(node.id) for node in document.nodes if node.category == category.id]
            lines.append(f"    class {','.join(members)} {category.id}")

        return lines

    def _css_colour(self, background: str) -> str:
        # DGML uses #AARRGGBB
        if re.fullmatch(r"#[0-9A-Fa-f]{8}", background):
            return "#" + background[3:]
        return background

    def _escape_label(self, label: str) -> str:
        """Escape label for Mermaid rendering."""
        if not label:
            return ""

        label = label.replace('"', "'")
        label = label.replace("|", ":")

        return label

    def _get_safe_id(self, node_id: str) -> str:
        return "n_" + re.sub(r"[^a-zA-Z0-9_]", "_", node_id)
