"""DGML (Directed Graph Markup Language) writer and reader."""

import logging
import xml.etree.ElementTree as ET
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError as DefusedParseError
from defusedxml.ElementTree import parse as defused_parse

from ..errors import DgmlReadError
from .document import RESERVED_NODE_ATTRIBUTES, DiagramDocument
from .framework import GraphRenderer

logger = logging.getLogger(__name__)

DGML_NAMESPACE = "http://schemas.microsoft.com/vs/2009/dgml"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'


class DgmlRenderer(GraphRenderer):
    """Serializes diagram documents as DGML."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    @property
    def format_name(self) -> str:
        return "dgml"

    def get_file_extension(self) -> str:
        return ".dgml"

    def render(self, document: DiagramDocument) -> str:
        root = self.to_element(document)
        if self.indent > 0:
            ET.indent(root, space=" " * self.indent)
        return XML_DECLARATION + "\n" + ET.tostring(root, encoding="unicode") + "\n"

    def to_element(self, document: DiagramDocument) -> ET.Element:
        """Build the ``DirectedGraph`` element tree for a document."""
        root = ET.Element("DirectedGraph", {"xmlns": DGML_NAMESPACE})

        nodes = ET.SubElement(root, "Nodes")
        for node in document.nodes:
            element = ET.SubElement(nodes, "Node", {"Id": node.id, "Label": node.label})
            _set_optional(element, "Category", node.category)
            for key, value in node.properties.items():
                if key in RESERVED_NODE_ATTRIBUTES:
                    logger.warning(f"Skipping reserved property {key} on node {node.id}")
                    continue
                element.set(key, value)

        links = ET.SubElement(root, "Links")
        for link in document.links:
            element = ET.SubElement(links, "Link", {"Source": link.source, "Target": link.target})
            _set_optional(element, "Category", link.category)
            _set_optional(element, "Label", link.label)

        categories = ET.SubElement(root, "Categories")
        for category in document.categories:
            ET.SubElement(categories, "Category", {"Id": category.id, "Background": category.background})

        return root


def _set_optional(element: ET.Element, name: str, value: str | None) -> None:
    if value is not None:
        element.set(name, value)


@dataclass
class DgmlSummary:
    """Counts gathered from an existing DGML document."""
    node_count: int = 0
    link_count: int = 0
    categories: list[str] = field(default_factory=list)
    nodes_by_category: Counter = field(default_factory=Counter)
    links_by_category: Counter = field(default_factory=Counter)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def read_dgml_summary(path: Path) -> DgmlSummary:
    """Summarize a DGML file.

    Args:
        path: DGML file to read

    Returns:
        DgmlSummary with node, link and category counts

    Raises:
        DgmlReadError: If the file is missing or not a DGML document
    """
    try:
        root = defused_parse(str(path)).getroot()
    except (OSError, DefusedParseError, DefusedXmlException) as e:
        raise DgmlReadError(f"Cannot read DGML file {path}: {e}") from e

    if _local_name(root.tag) != "DirectedGraph":
        raise DgmlReadError(f"{path} is not a DGML document (root element is {_local_name(root.tag)!r})")

    summary = DgmlSummary()
    for element in root.iter():
        name = _local_name(element.tag)
        if name == "Node":
            summary.node_count += 1
            summary.nodes_by_category[element.get("Category", "")] += 1
        elif name == "Link":
            summary.link_count += 1
            summary.links_by_category[element.get("Category", "")] += 1
        elif name == "Category":
            summary.categories.append(element.get("Id", ""))

    logger.debug(f"Read {summary.node_count} nodes and {summary.link_count} links from {path}")
    return summary
