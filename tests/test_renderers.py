"""Tests for DGML and Mermaid rendering."""

import xml.etree.ElementTree as ET

import pytest

from flowdgml.errors import DgmlReadError
from flowdgml.graph import DgmlRenderer, MermaidRenderer, RendererRegistry, read_dgml_summary
from flowdgml.graph.categories import DECLARED_CATEGORIES, Categories
from flowdgml.graph.dgml import DGML_NAMESPACE
from flowdgml.graph.document import DiagramDocument, DiagramNode, DocumentBuilder
from flowdgml.models.flow import ActivityNode

NS = {"d": DGML_NAMESPACE}


@pytest.fixture
def small_document():
    builder = DocumentBuilder()
    builder.declare_category("Activity", "#FF4F81BD")
    builder.add_node("a", "Start", "Activity", {"ActivityType": "StartActivity"})
    builder.add_node("b", "")
    builder.add_link("a", "b", "NormalFlow")
    builder.add_link("a", "b", None, "True")
    return builder.build()


class TestDgmlRenderer:
    """Tests for DGML serialization."""

    def test_document_sections(self, small_document):
        text = DgmlRenderer().render(small_document)
        root = ET.fromstring(text.split("\n", 1)[1])

        assert root.tag == f"{{{DGML_NAMESPACE}}}DirectedGraph"
        assert [child.tag.split("}")[1] for child in root] == ["Nodes", "Links", "Categories"]

    def test_node_attributes(self, small_document):
        root = ET.fromstring(DgmlRenderer().render(small_document).split("\n", 1)[1])
        nodes = root.findall("d:Nodes/d:Node", NS)

        assert nodes[0].attrib == {
            "Id": "a",
            "Label": "Start",
            "Category": "Activity",
            "ActivityType": "StartActivity",
        }
        assert nodes[1].attrib == {"Id": "b", "Label": ""}

    def test_optional_link_attributes_are_omitted(self, small_document):
        root = ET.fromstring(DgmlRenderer().render(small_document).split("\n", 1)[1])
        links = root.findall("d:Links/d:Link", NS)

        assert links[0].attrib == {"Source": "a", "Target": "b", "Category": "NormalFlow"}
        assert links[1].attrib == {"Source": "a", "Target": "b", "Label": "True"}

    def test_category_declarations(self, small_document):
        root = ET.fromstring(DgmlRenderer().render(small_document).split("\n", 1)[1])
        categories = root.findall("d:Categories/d:Category", NS)

        assert [c.attrib for c in categories] == [{"Id": "Activity", "Background": "#FF4F81BD"}]

    def test_xml_declaration_and_indent(self, small_document):
        text = DgmlRenderer(indent=4).render(small_document)

        assert text.startswith('<?xml version="1.0" encoding="utf-8"?>\n<DirectedGraph')
        assert "\n    <Nodes>" in text

    def test_no_indent(self, small_document):
        text = DgmlRenderer(indent=0).render(small_document)

        assert text.count("\n") == 2

    def test_labels_are_escaped(self):
        builder = DocumentBuilder()
        builder.add_node("a", 'x < y & "z"')

        text = DgmlRenderer().render(builder.build())
        root = ET.fromstring(text.split("\n", 1)[1])

        assert root.find("d:Nodes/d:Node", NS).get("Label") == 'x < y & "z"'

    def test_reserved_properties_do_not_overwrite_node_attributes(self):
        node = DiagramNode(id="a", label="Work", category=Categories.ACTIVITY, properties={"Label": "x", "Group": "Expanded"})
        text = DgmlRenderer().render(DiagramDocument(nodes=(node,)))
        root = ET.fromstring(text.split("\n", 1)[1])

        element = root.find("d:Nodes/d:Node", NS)
        assert element.get("Label") == "Work"
        assert element.get("Group") == "Expanded"


class TestDgmlSummary:
    """Tests for reading existing DGML files."""

    def test_round_trip_counts(self, tmp_path, builder, order_flow):
        path = tmp_path / "order.dgml"
        path.write_text(DgmlRenderer().render(builder.generate(order_flow)), encoding="utf-8")

        summary = read_dgml_summary(path)

        assert summary.node_count == 11
        assert summary.link_count == 19
        assert summary.categories == list(DECLARED_CATEGORIES)
        assert summary.nodes_by_category[Categories.FORK] == 3
        assert summary.links_by_category[Categories.CONTAINS] == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(DgmlReadError):
            read_dgml_summary(tmp_path / "missing.dgml")

    def test_not_dgml(self, tmp_path):
        path = tmp_path / "other.xml"
        path.write_text("<Graph/>", encoding="utf-8")

        with pytest.raises(DgmlReadError, match="not a DGML document"):
            read_dgml_summary(path)

    def test_entities_are_rejected(self, tmp_path):
        path = tmp_path / "evil.dgml"
        path.write_text(
            '<?xml version="1.0"?><!DOCTYPE d [<!ENTITY e "boom">]>'
            "<DirectedGraph><Nodes><Node Id='&e;'/></Nodes></DirectedGraph>",
            encoding="utf-8",
        )

        with pytest.raises(DgmlReadError):
            read_dgml_summary(path)


class TestMermaidRenderer:
    """Tests for Mermaid rendering."""

    def test_flowchart_header(self, small_document):
        text = MermaidRenderer().render(small_document)

        assert text.startswith("flowchart TD\n")

    def test_nodes_and_links(self, builder):
        failed = ActivityNode(name="Failed", activity_type="Log")
        work = ActivityNode(name="Work", activity_type="Work").on_fault(failed)

        text = MermaidRenderer().render(builder.generate([work, failed]))

        work_id = "n_" + str(work.id).replace("-", "_")
        failed_id = "n_" + str(failed.id).replace("-", "_")
        assert f'{work_id}("Work")' in text
        assert f"{work_id} -.->|fault| {failed_id}" in text

    def test_category_styling(self, small_document):
        text = MermaidRenderer().render(small_document)

        assert "classDef Activity fill:#4F81BD" in text
        assert "class n_a Activity" in text

    def test_labelled_link(self, small_document):
        text = MermaidRenderer().render(small_document)

        assert "n_a -->|True| n_b" in text

    def test_long_labels_are_kept_whole(self):
        label = "Send the quarterly compliance report to every regional manager"
        builder = DocumentBuilder()
        builder.add_node("a", label, Categories.ACTIVITY)

        text = MermaidRenderer().render(builder.build())

        assert f'n_a("{label}")' in text


class TestRendererRegistry:
    """Tests for renderer lookup."""

    def test_unknown_format(self, small_document):
        registry = RendererRegistry([DgmlRenderer()])

        with pytest.raises(ValueError, match="Unknown format 'svg'"):
            registry.render(small_document, "svg")

    def test_dispatch_by_format(self, small_document):
        registry = RendererRegistry([DgmlRenderer(), MermaidRenderer()])

        assert registry.render(small_document, "mermaid").startswith("flowchart TD")
        assert registry.get("dgml").get_file_extension() == ".dgml"
