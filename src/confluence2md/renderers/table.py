#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/renderers/table.py
"""Markdown pipe-table rendering for storage-format tables.

Markdown table cells hold a single line, so cell content is flattened:
paragraphs and explicit line breaks become ``<br/>`` separators, nested lists
become ``<br/>``-joined item lines, and emphasis and hyperlinks keep their
inline Markdown form.

Rows are rendered positionally. A row with fewer or more cells than the
header is emitted as-is; no padding or truncation takes place.

"""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional, Sequence

from confluence2md.ast.nodes import Element, Node, Text
from confluence2md.constants import (
    INLINE_TAGS,
    LIST_ITEM_TAG,
    PLACEHOLDER_SCHEME,
    TABLE_CELL_BREAK,
    TABLE_CELL_TAGS,
    TABLE_ROW_TAG,
    TABLE_SECTION_TAGS,
    TABLE_SEPARATOR_CELL,
)
from confluence2md.options.markdown import MarkdownRendererOptions
from confluence2md.renderers.base import Expansion, RenderContext, render_tree
from confluence2md.renderers.inline import format_inline

logger = logging.getLogger(__name__)

EmbedRenderer = Callable[[Element, RenderContext], Optional[str]]

_NEWLINES = re.compile(r"\n+")
_BREAK_RUN = re.compile(r"(?:\s*<br/>\s*){3,}")
_EDGE_BREAKS = re.compile(r"^(?:\s*<br/>\s*)+|(?:\s*<br/>\s*)+$")


def escape_pipes(text: str, keep: Sequence[str] = ()) -> str:
    """Escape ``|`` for use inside a table cell.

    Parameters
    ----------
    text : str
        Cell text
    keep : sequence of str, default ()
        Substrings to leave untouched, such as placeholder tokens

    Examples
    --------
    >>> escape_pipes("a|b ATTACH://x|y.png", ["ATTACH://x|y.png"])
    'a\\\\|b ATTACH://x|y.png'

    """
    if not keep:
        return text.replace("|", "\\|")
    pattern = re.compile("|".join(re.escape(token) for token in sorted(set(keep), key=len, reverse=True)))
    parts = []
    position = 0
    for match in pattern.finditer(text):
        parts.append(text[position : match.start()].replace("|", "\\|"))
        parts.append(match.group(0))
        position = match.end()
    parts.append(text[position:].replace("|", "\\|"))
    return "".join(parts)


def _keep(inner: str) -> str:
    return inner


def _paragraph(inner: str) -> str:
    inner = inner.strip()
    return inner + TABLE_CELL_BREAK if inner else ""


class TableRenderer:
    """Render ``table`` elements as Markdown pipe tables.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Rendering options
    embed_renderer : callable, optional
        Called for custom elements inside cells when
        ``options.render_embeds_in_tables`` is set. Returns the Markdown for
        the element, or None to flatten it like any other element.

    """

    def __init__(
        self,
        options: MarkdownRendererOptions | None = None,
        embed_renderer: EmbedRenderer | None = None,
    ):
        """Initialize the table renderer."""
        self.options = options or MarkdownRendererOptions()
        self._embed_renderer = embed_renderer

    def render_table(self, node: Element, context: RenderContext | None = None) -> str:
        """Render a table element.

        Parameters
        ----------
        node : Element
            The ``table`` element
        context : RenderContext, optional
            Accumulator for references found inside cells

        Returns
        -------
        str
            Header row, separator row and data rows followed by a blank
            line, or an empty string for a table without rows

        """
        context = context if context is not None else RenderContext()
        rows = self.collect_rows(node)
        if not rows:
            return ""

        header = [self.render_cell(cell, context) for cell in self.collect_cells(rows[0])]
        lines = [
            self._format_row(header),
            "|" + "|".join(TABLE_SEPARATOR_CELL for _ in header) + "|",
        ]
        for row in rows[1:]:
            cells = [self.render_cell(cell, context) for cell in self.collect_cells(row)]
            if len(cells) != len(header):
                logger.debug("Table row has %d cells, header has %d", len(cells), len(header))
            lines.append(self._format_row(cells))
        return "\n".join(lines) + "\n\n"

    @staticmethod
    def collect_rows(node: Element) -> list[Element]:
        """Return the rows of a table, looking through thead/tbody/tfoot."""
        rows = []
        for child in node.element_children():
            if child.name == TABLE_ROW_TAG:
                rows.append(child)
            elif child.name in TABLE_SECTION_TAGS:
                rows.extend(child.children_named(TABLE_ROW_TAG))
        return rows

    @staticmethod
    def collect_cells(row: Element) -> list[Element]:
        """Return the header and data cells of a row in order."""
        return row.children_named(*TABLE_CELL_TAGS)

    def render_cell(self, cell: Element, context: RenderContext | None = None) -> str:
        """Flatten a cell to single-line Markdown.

        Newlines collapse to spaces, runs of three or more ``<br/>``
        separators collapse to two, the result is trimmed and pipe
        characters are escaped. Placeholder tokens of attachments embedded
        in the cell are left unescaped so they still match their reference.
        """
        context = context if context is not None else RenderContext()
        first_reference = len(context.references)
        text = render_tree((cell.children, _keep), lambda node: self._flatten_node(node, context))
        text = _NEWLINES.sub(" ", text)
        text = _BREAK_RUN.sub(TABLE_CELL_BREAK * 2, text)
        text = text.strip()
        if self.options.strip_trailing_cell_breaks:
            text = _EDGE_BREAKS.sub("", text).strip()
        tokens = [
            PLACEHOLDER_SCHEME + reference.name
            for reference in context.references[first_reference:]
            if reference.is_attachment and reference.name
        ]
        return escape_pipes(text, tokens)

    def _flatten_node(self, node: Node, context: RenderContext) -> Expansion:
        if isinstance(node, Text):
            return node.content
        name = node.name
        if name == "br":
            return TABLE_CELL_BREAK
        if name == "p":
            return node.children, _paragraph
        if name in INLINE_TAGS:
            return format_inline(node)
        if name == "a":
            href = node.get("href") or ""
            text = node.text() or href
            return f"[{text}]({href})" if href else text
        if name in ("ul", "ol"):
            return self._flatten_list(node, ordered=name == "ol")
        if self.options.render_embeds_in_tables and self._embed_renderer is not None:
            embedded = self._embed_renderer(node, context)
            if embedded is not None:
                return embedded
        return node.children, _keep

    @staticmethod
    def _flatten_list(node: Element, ordered: bool) -> str:
        items = []
        for item in node.children_named(LIST_ITEM_TAG):
            text = item.text()
            if not text:
                continue
            marker = f"{len(items) + 1}." if ordered else "-"
            items.append(f"{marker} {text}")
        return TABLE_CELL_BREAK.join(items)

    @staticmethod
    def _format_row(cells: list[str]) -> str:
        return "| " + " | ".join(cells) + " |"
