#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/ast/visitors.py
"""Visitor pattern implementation for document tree traversal.

Elements are dispatched on their :class:`~confluence2md.ast.nodes.ElementKind`
through an explicit table rather than by inspecting tag strings at each call
site. Unknown elements go to :meth:`NodeVisitor.visit_unknown`, which keeps the
open-ended default behaviour in one place.

Every visit method receives the node plus whatever extra positional arguments
the caller threads through the traversal (the Markdown renderer passes its
render context this way).

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from confluence2md.ast.nodes import Element, ElementKind, Node, Text


class NodeVisitor(ABC):
    """Abstract base class for document tree visitors.

    Subclasses implement one ``visit_*`` method per :class:`ElementKind`
    plus :meth:`visit_text`.

    Examples
    --------
    A visitor that collects heading text:

        >>> class HeadingCollector(NodeVisitor):
        ...     def visit_heading(self, node, found):
        ...         found.append(node.text())
        ...     def generic_visit(self, node, found):
        ...         for child in node.children:
        ...             self.visit(child, found)
        ...     visit_image = visit_link = visit_macro = generic_visit
        ...     # ... remaining kinds ...

    """

    _DISPATCH: dict[ElementKind, str] = {
        ElementKind.IMAGE: "visit_image",
        ElementKind.LINK: "visit_link",
        ElementKind.MACRO: "visit_macro",
        ElementKind.HEADING: "visit_heading",
        ElementKind.PARAGRAPH: "visit_paragraph",
        ElementKind.LINE_BREAK: "visit_line_break",
        ElementKind.PREFORMATTED: "visit_preformatted",
        ElementKind.UNORDERED_LIST: "visit_unordered_list",
        ElementKind.ORDERED_LIST: "visit_ordered_list",
        ElementKind.TABLE: "visit_table",
        ElementKind.HYPERLINK: "visit_hyperlink",
        ElementKind.INLINE: "visit_inline",
        ElementKind.CONTAINER: "visit_container",
        ElementKind.UNKNOWN: "visit_unknown",
    }

    def visit(self, node: Node, *args: Any) -> Any:
        """Visit any node."""
        return node.accept(self, *args)

    def visit_element(self, node: Element, *args: Any) -> Any:
        """Route an element to the method registered for its kind."""
        method = getattr(self, self._DISPATCH[node.kind])
        return method(node, *args)

    @abstractmethod
    def visit_text(self, node: Text, *args: Any) -> Any:
        """Visit a text node."""

    @abstractmethod
    def visit_image(self, node: Element, *args: Any) -> Any:
        """Visit an ``ac:image`` element."""

    @abstractmethod
    def visit_link(self, node: Element, *args: Any) -> Any:
        """Visit an ``ac:link`` element."""

    @abstractmethod
    def visit_macro(self, node: Element, *args: Any) -> Any:
        """Visit an ``ac:structured-macro`` element."""

    @abstractmethod
    def visit_heading(self, node: Element, *args: Any) -> Any:
        """Visit an ``h1``-``h6`` element."""

    @abstractmethod
    def visit_paragraph(self, node: Element, *args: Any) -> Any:
        """Visit a ``p`` element."""

    @abstractmethod
    def visit_line_break(self, node: Element, *args: Any) -> Any:
        """Visit a ``br`` element."""

    @abstractmethod
    def visit_preformatted(self, node: Element, *args: Any) -> Any:
        """Visit a ``pre`` element."""

    @abstractmethod
    def visit_unordered_list(self, node: Element, *args: Any) -> Any:
        """Visit a ``ul`` element."""

    @abstractmethod
    def visit_ordered_list(self, node: Element, *args: Any) -> Any:
        """Visit an ``ol`` element."""

    @abstractmethod
    def visit_table(self, node: Element, *args: Any) -> Any:
        """Visit a ``table`` element."""

    @abstractmethod
    def visit_hyperlink(self, node: Element, *args: Any) -> Any:
        """Visit an ``a`` element."""

    @abstractmethod
    def visit_inline(self, node: Element, *args: Any) -> Any:
        """Visit a bold/italic/monospace/span element."""

    @abstractmethod
    def visit_container(self, node: Element, *args: Any) -> Any:
        """Visit a block-level wrapper element."""

    @abstractmethod
    def visit_unknown(self, node: Element, *args: Any) -> Any:
        """Visit any element without a recognised kind."""
