#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/renderers/markdown.py
"""Markdown rendering of storage-format document trees.

This module provides :class:`StorageMarkdownRenderer`, which walks a tree
built by :class:`~confluence2md.parsers.storage.StorageParser` and produces
Markdown text together with the asset references discovered on the way.

Attachment-bearing elements are rendered with ``ATTACH://<name>``
placeholder tokens in place of their target. The tokens are substituted in a
later pass by :class:`~confluence2md.resolver.AttachmentResolver`, once the
caller knows which attachments are available locally.

Every visit method returns the Markdown contributed by its node. The
references are collected in a :class:`~confluence2md.renderers.base.RenderContext`
passed along with each call, so a renderer instance holds no per-document
state.

Elements whose Markdown wraps their rendered children (headings, paragraphs,
macros, containers and unknown elements) are not rendered recursively. Their
``expand_*`` methods name the children to render and how to finish the joined
result, and :func:`~confluence2md.renderers.base.render_tree` walks the tree
with an explicit stack, so nesting depth is not limited by the interpreter's
recursion limit.

"""

from __future__ import annotations

import logging
from typing import Optional

from confluence2md.ast.nodes import Element, ElementKind, Node, Text
from confluence2md.ast.visitors import NodeVisitor
from confluence2md.constants import (
    ATTR_AC_ALT,
    ATTR_AC_NAME,
    ATTR_ALT,
    ATTR_HREF,
    ATTR_RI_CONTENT_TITLE,
    ATTR_RI_FILENAME,
    ATTR_RI_VALUE,
    BLOCK_SEPARATOR,
    LIST_ITEM_TAG,
    MACRO_ALT_PARAMETER,
    MACRO_ATTACHMENT_PARAMETERS,
    MACRO_URL_PARAMETER,
    PLACEHOLDER_SCHEME,
    SOFT_LINE_BREAK,
    TAG_AC_PARAMETER,
    TAG_AC_PLAIN_TEXT_LINK_BODY,
    TAG_AC_RICH_TEXT_BODY,
    TAG_RI_ATTACHMENT,
    TAG_RI_PAGE,
    TAG_RI_URL,
)
from confluence2md.options.markdown import MarkdownRendererOptions
from confluence2md.renderers.base import BaseRenderer, Expansion, RenderContext, render_tree
from confluence2md.renderers.inline import format_inline
from confluence2md.renderers.table import TableRenderer
from confluence2md.types import RenderResult

logger = logging.getLogger(__name__)

# Kinds the table renderer hands back when embeds in tables are enabled
_EMBED_KINDS = frozenset({ElementKind.IMAGE, ElementKind.LINK, ElementKind.MACRO})


def placeholder(name: str) -> str:
    """Return the placeholder token for an attachment name.

    Examples
    --------
    >>> placeholder("diagram v2.png")
    'ATTACH://diagram v2.png'

    """
    return f"{PLACEHOLDER_SCHEME}{name}"


def attachment_filename(node: Element) -> str:
    """Return the filename of an ``ri:attachment`` element."""
    return (node.get(ATTR_RI_FILENAME) or node.text()).strip()


def _block(inner: str) -> str:
    return inner + BLOCK_SEPARATOR if inner.strip() else ""


def _trimmed_block(inner: str) -> str:
    inner = inner.strip()
    return inner + BLOCK_SEPARATOR if inner else ""


def _transparent(inner: str) -> str:
    return inner


class StorageMarkdownRenderer(NodeVisitor, BaseRenderer):
    """Render a storage-format document tree to Markdown.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Markdown rendering options

    Examples
    --------
        >>> from confluence2md.parsers import StorageParser
        >>> root, _ = StorageParser().parse("<h1>Title</h1><p>Hello <strong>World</strong></p>")
        >>> StorageMarkdownRenderer().render(root).text
        '# Title\\n\\nHello **World**\\n\\n'

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        """Initialize the renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self._tables = TableRenderer(options, embed_renderer=self.render_embed)
        self._expanders = {
            ElementKind.MACRO: self.expand_macro,
            ElementKind.HEADING: self.expand_heading,
            ElementKind.PARAGRAPH: self.expand_paragraph,
            ElementKind.CONTAINER: self.expand_container,
            ElementKind.UNKNOWN: self.expand_unknown,
        }

    def render(self, root: Element) -> RenderResult:
        """Render a document tree.

        Parameters
        ----------
        root : Element
            Tree root as returned by the parser

        Returns
        -------
        RenderResult
            Markdown with placeholder tokens, and the asset references in
            document order

        """
        context = RenderContext()
        parts = []
        for child in root.children:
            if isinstance(child, Text):
                text = child.content.strip()
                if text:
                    parts.append(text + BLOCK_SEPARATOR)
            else:
                parts.append(self.render_node(child, context))
        return RenderResult(text="".join(parts), references=tuple(context.references))

    def render_node(self, node: Node, context: RenderContext) -> str:
        """Render a node and its subtree."""
        return render_tree(self.expand(node, context), lambda child: self.expand(child, context))

    def expand(self, node: Node, context: RenderContext) -> Expansion:
        """Expand an element that wraps its children, or render any other node directly."""
        if isinstance(node, Element):
            expander = self._expanders.get(node.kind)
            if expander is not None:
                return expander(node, context)
        return self.visit(node, context)

    def render_embed(self, node: Element, context: RenderContext) -> Optional[str]:
        """Render an image, link or macro found inside a table cell.

        Returns None for any other element so the table renderer flattens it.
        """
        if node.kind not in _EMBED_KINDS:
            return None
        return self.render_node(node, context).strip()

    # ------------------------------------------------------------------
    # Confluence custom elements
    # ------------------------------------------------------------------

    def visit_image(self, node: Element, context: RenderContext) -> str:
        """Render an ``ac:image`` element.

        An attachment resource wins over a URL resource. An image with
        neither renders to nothing.
        """
        alt = node.get(ATTR_AC_ALT) or node.get(ATTR_ALT) or node.text()

        attachment = node.find(TAG_RI_ATTACHMENT)
        if attachment is not None:
            name = attachment_filename(attachment)
            if name:
                context.add_attachment(name)
                return f"![{alt or name}]({placeholder(name)})"

        url_node = node.find(TAG_RI_URL)
        if url_node is not None:
            url = (url_node.get(ATTR_RI_VALUE) or url_node.text()).strip()
            if url:
                context.add_external(url)
                return f"![{alt}]({url})"

        return ""

    def visit_link(self, node: Element, context: RenderContext) -> str:
        """Render an ``ac:link`` element."""
        body = node.find(TAG_AC_PLAIN_TEXT_LINK_BODY)
        text = body.text() if body is not None else node.text()

        attachment = node.find(TAG_RI_ATTACHMENT)
        if attachment is not None:
            name = attachment_filename(attachment)
            if name:
                context.add_attachment(name)
                return f"[{text or self.options.attachment_link_text}]({placeholder(name)})"

        if text:
            return text
        page = node.find(TAG_RI_PAGE)
        if page is not None:
            return (page.get(ATTR_RI_CONTENT_TITLE) or "").strip()
        return ""

    def visit_macro(self, node: Element, context: RenderContext) -> str:
        """Render an ``ac:structured-macro`` element."""
        return self.render_node(node, context)

    def expand_macro(self, node: Element, context: RenderContext) -> Expansion:
        """Expand an ``ac:structured-macro`` element.

        Image-like macros become images. Any other macro renders its rich
        text body, or its own children when it has none, as a block.
        """
        macro_name = (node.get(ATTR_AC_NAME) or "").strip().lower()
        if macro_name in self.options.image_macros:
            image = self._render_image_macro(self.macro_parameters(node), context)
            if image is not None:
                return image

        body = node.find(TAG_AC_RICH_TEXT_BODY)
        if body is not None:
            return body.children, _block
        logger.debug("Macro %r has no rich text body, rendering its children", macro_name)
        children = [
            child
            for child in node.children
            if not (isinstance(child, Element) and child.name == TAG_AC_PARAMETER)
        ]
        return children, _block

    @staticmethod
    def macro_parameters(node: Element) -> dict[str, str]:
        """Collect the ``ac:parameter`` children of a macro.

        A parameter holding an ``ri:attachment`` element instead of text
        takes the attachment's filename as its value. The first occurrence
        of a parameter name wins.
        """
        params: dict[str, str] = {}
        for param in node.children_named(TAG_AC_PARAMETER):
            key = (param.get(ATTR_AC_NAME) or "").strip().lower()
            value = param.text()
            if not value:
                attachment = param.find(TAG_RI_ATTACHMENT)
                if attachment is not None:
                    value = attachment_filename(attachment)
            params.setdefault(key, value)
        return params

    @staticmethod
    def _render_image_macro(params: dict[str, str], context: RenderContext) -> Optional[str]:
        alt = params.get(MACRO_ALT_PARAMETER, "")
        for key in MACRO_ATTACHMENT_PARAMETERS:
            name = params.get(key)
            if name:
                context.add_attachment(name)
                return f"![{alt or name}]({placeholder(name)})"

        url = params.get(MACRO_URL_PARAMETER)
        if url:
            context.add_external(url)
            return f"![{alt}]({url})"
        return None

    # ------------------------------------------------------------------
    # Block elements
    # ------------------------------------------------------------------

    def visit_heading(self, node: Element, context: RenderContext) -> str:
        """Render an ``h1``-``h6`` element."""
        return self.render_node(node, context)

    def expand_heading(self, node: Element, context: RenderContext) -> Expansion:
        """Expand an ``h1``-``h6`` element."""
        prefix = "#" * int(node.name[1]) + " "
        return node.children, lambda inner: prefix + inner.strip() + BLOCK_SEPARATOR

    def visit_paragraph(self, node: Element, context: RenderContext) -> str:
        """Render a ``p`` element; empty paragraphs vanish."""
        return self.render_node(node, context)

    def expand_paragraph(self, node: Element, context: RenderContext) -> Expansion:
        return node.children, _trimmed_block

    def visit_line_break(self, node: Element, context: RenderContext) -> str:
        """Render a ``br`` element as a soft line break."""
        return SOFT_LINE_BREAK

    def visit_preformatted(self, node: Element, context: RenderContext) -> str:
        """Render a ``pre`` element as a fenced code block, verbatim."""
        fence = self.options.code_fence
        return f"{fence}\n{node.text_content()}\n{fence}{BLOCK_SEPARATOR}"

    def visit_unordered_list(self, node: Element, context: RenderContext) -> str:
        """Render a ``ul`` element, one line per direct list item."""
        items = node.children_named(LIST_ITEM_TAG)
        if not items:
            return ""
        return "\n".join(f"- {item.text()}" for item in items) + BLOCK_SEPARATOR

    def visit_ordered_list(self, node: Element, context: RenderContext) -> str:
        """Render an ``ol`` element, numbering direct list items from 1."""
        items = node.children_named(LIST_ITEM_TAG)
        if not items:
            return ""
        return "\n".join(f"{index}. {item.text()}" for index, item in enumerate(items, start=1)) + BLOCK_SEPARATOR

    def visit_table(self, node: Element, context: RenderContext) -> str:
        """Render a ``table`` element as a pipe table."""
        return self._tables.render_table(node, context)

    def visit_container(self, node: Element, context: RenderContext) -> str:
        """Render a block wrapper, separating it from what follows."""
        return self.render_node(node, context)

    def expand_container(self, node: Element, context: RenderContext) -> Expansion:
        return node.children, _block

    # ------------------------------------------------------------------
    # Inline elements
    # ------------------------------------------------------------------

    def visit_hyperlink(self, node: Element, context: RenderContext) -> str:
        """Render an ``a`` element; without ``href`` only the text remains."""
        href = (node.get(ATTR_HREF) or "").strip()
        text = node.text() or href
        return f"[{text}]({href})" if href else text

    def visit_inline(self, node: Element, context: RenderContext) -> str:
        """Render bold, italic, monospace or span text."""
        return format_inline(node)

    def visit_text(self, node: Text, context: RenderContext) -> str:
        """Emit text verbatim."""
        return node.content

    def visit_unknown(self, node: Element, context: RenderContext) -> str:
        """Render an unrecognised element transparently."""
        return self.render_node(node, context)

    def expand_unknown(self, node: Element, context: RenderContext) -> Expansion:
        return node.children, _transparent
