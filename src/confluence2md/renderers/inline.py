#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/renderers/inline.py
"""Inline emphasis formatting.

Emphasis in storage-format pages is not nested in practice, so the formatter
works on the element's flattened text rather than on rendered children.
"""

from __future__ import annotations

from confluence2md.ast.nodes import Element
from confluence2md.constants import BOLD_TAGS, ITALIC_TAGS, MONOSPACE_TAGS


def format_inline(node: Element) -> str:
    """Render a bold, italic, monospace or span element as inline Markdown.

    Parameters
    ----------
    node : Element
        The inline element

    Returns
    -------
    str
        ``**text**``, ``*text*`` or ```text``` for the emphasis tags, the
        trimmed text for anything else, and an empty string when the element
        has no text

    Examples
    --------
    >>> from confluence2md.ast.nodes import Text
    >>> format_inline(Element("strong", children=[Text(" World ")]))
    '**World**'

    """
    text = node.text()
    if not text:
        return ""
    name = node.name
    if name in BOLD_TAGS:
        return f"**{text}**"
    if name in ITALIC_TAGS:
        return f"*{text}*"
    if name in MONOSPACE_TAGS:
        return f"`{text}`"
    return text
