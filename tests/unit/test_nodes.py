"""Unit tests for document tree nodes and visitor dispatch."""

import pytest

from confluence2md.ast import Element, ElementKind, NodeVisitor, Text, classify_tag


@pytest.mark.unit
class TestClassifyTag:
    """Test the tag to element kind mapping."""

    @pytest.mark.parametrize(
        "tag,kind",
        [
            ("ac:image", ElementKind.IMAGE),
            ("ac:link", ElementKind.LINK),
            ("ac:structured-macro", ElementKind.MACRO),
            ("h1", ElementKind.HEADING),
            ("H6", ElementKind.HEADING),
            ("p", ElementKind.PARAGRAPH),
            ("br", ElementKind.LINE_BREAK),
            ("pre", ElementKind.PREFORMATTED),
            ("ul", ElementKind.UNORDERED_LIST),
            ("ol", ElementKind.ORDERED_LIST),
            ("table", ElementKind.TABLE),
            ("a", ElementKind.HYPERLINK),
            ("strong", ElementKind.INLINE),
            ("span", ElementKind.INLINE),
            ("div", ElementKind.CONTAINER),
            ("ac:rich-text-body", ElementKind.CONTAINER),
            ("ac:layout-section", ElementKind.CONTAINER),
            ("h7", ElementKind.UNKNOWN),
            ("ac:parameter", ElementKind.UNKNOWN),
            ("blink", ElementKind.UNKNOWN),
        ],
    )
    def test_kinds(self, tag, kind) -> None:
        """Test recognised and unknown tags."""
        assert classify_tag(tag) is kind


@pytest.mark.unit
class TestElement:
    """Test element navigation helpers."""

    def _tree(self) -> Element:
        return Element(
            "root",
            children=[
                Text(" lead "),
                Element("p", {"Class": "x"}, [Text("one "), Element("strong", children=[Text("two")])]),
                Element("ul", children=[Element("li", children=[Text("i")]), Text("\n"), Element("li")]),
            ],
        )

    def test_text_content_and_trimmed_text(self) -> None:
        """Test text flattening."""
        tree = self._tree()

        assert tree.text_content() == " lead one twoi\n"
        assert tree.text() == "lead one twoi"

    def test_get_is_case_insensitive(self) -> None:
        """Test attribute lookup."""
        paragraph = self._tree().find("p")

        assert paragraph.get("class") == "x"
        assert paragraph.get("missing", "d") == "d"

    def test_children_named(self) -> None:
        """Test filtering of direct children."""
        items = self._tree().find("ul").children_named("LI")

        assert len(items) == 2

    def test_find_returns_first_descendant(self) -> None:
        """Test depth-first search."""
        tree = self._tree()

        assert tree.find("strong").text() == "two"
        assert tree.find("table") is None

    def test_iter_descendants_in_document_order(self) -> None:
        """Test traversal order."""
        assert [e.tag for e in self._tree().iter_descendants()] == ["p", "strong", "ul", "li", "li"]

    def test_kind_and_name(self) -> None:
        """Test derived properties."""
        element = Element("AC:Image")

        assert element.name == "ac:image"
        assert element.kind is ElementKind.IMAGE


def _record(name):
    def method(self, node, seen):
        seen.append((name, node.tag))

    return method


class _KindRecorder(NodeVisitor):
    """Visitor recording which method each node was routed to."""

    visit_image = _record("image")
    visit_link = _record("link")
    visit_macro = _record("macro")
    visit_heading = _record("heading")
    visit_paragraph = _record("paragraph")
    visit_line_break = _record("line_break")
    visit_preformatted = _record("preformatted")
    visit_unordered_list = _record("unordered_list")
    visit_ordered_list = _record("ordered_list")
    visit_table = _record("table")
    visit_hyperlink = _record("hyperlink")
    visit_inline = _record("inline")
    visit_container = _record("container")
    visit_unknown = _record("unknown")

    def visit_text(self, node, seen):
        seen.append(("text", node.content))


@pytest.mark.unit
class TestNodeVisitor:
    """Test kind-based dispatch."""

    def test_dispatch_and_extra_arguments(self) -> None:
        """Test that each node reaches its method with the threaded argument."""
        seen = []
        visitor = _KindRecorder()

        for node in [Element("ac:image"), Element("h3"), Element("x-custom"), Text("t")]:
            visitor.visit(node, seen)

        assert seen == [("image", "ac:image"), ("heading", "h3"), ("unknown", "x-custom"), ("text", "t")]

    def test_every_kind_has_a_method(self) -> None:
        """Test that the dispatch table covers the whole enum."""
        assert set(NodeVisitor._DISPATCH) == set(ElementKind)


@pytest.mark.unit
class TestDeepTrees:
    """Test tree helpers on chains deeper than the recursion limit."""

    @staticmethod
    def _chain(depth: int) -> Element:
        root = Element("root")
        current = root
        for index in range(depth):
            child = Element("div", children=[Text(str(index % 10))])
            current.children.append(child)
            current = child
        current.children.append(Element("p", children=[Text("!")]))
        return root

    def test_text_content_in_document_order(self) -> None:
        root = self._chain(2000)

        assert root.text_content() == "0123456789" * 200 + "!"

    def test_iter_descendants_in_document_order(self) -> None:
        root = self._chain(2000)
        names = [element.name for element in root.iter_descendants()]

        assert names == ["div"] * 2000 + ["p"]
        assert root.find("p").text() == "!"
