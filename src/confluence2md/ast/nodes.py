#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/ast/nodes.py
"""Document tree for Confluence storage-format markup.

The tree mirrors the markup closely: an :class:`Element` keeps its qualified
tag name (``ac:image``, ``ri:attachment``, ``p``), its attributes in source
order and its children; a :class:`Text` node keeps a literal string. Both the
strict XML parse and the permissive HTML fallback produce this same shape, so
rendering does not care which parser built the tree.

Element Kinds
-------------
Rendering dispatches on :class:`ElementKind`, a closed set of recognised
element kinds plus ``UNKNOWN`` for everything else:

    - IMAGE, LINK, MACRO: Confluence custom elements
    - HEADING, PARAGRAPH, LINE_BREAK, PREFORMATTED
    - UNORDERED_LIST, ORDERED_LIST, TABLE, HYPERLINK
    - INLINE: bold/italic/monospace/span
    - CONTAINER: wrappers that force block separation
    - UNKNOWN: transparent, children rendered in place

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional, Union

from confluence2md.constants import (
    CONTAINER_TAGS,
    HEADING_TAGS,
    INLINE_TAGS,
    TAG_AC_IMAGE,
    TAG_AC_LINK,
    TAG_AC_STRUCTURED_MACRO,
)


class ElementKind(str, Enum):
    """Recognised element kinds of the storage format."""

    IMAGE = "image"
    LINK = "link"
    MACRO = "macro"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LINE_BREAK = "line_break"
    PREFORMATTED = "preformatted"
    UNORDERED_LIST = "unordered_list"
    ORDERED_LIST = "ordered_list"
    TABLE = "table"
    HYPERLINK = "hyperlink"
    INLINE = "inline"
    CONTAINER = "container"
    UNKNOWN = "unknown"


_SIMPLE_KINDS: dict[str, ElementKind] = {
    TAG_AC_IMAGE: ElementKind.IMAGE,
    TAG_AC_LINK: ElementKind.LINK,
    TAG_AC_STRUCTURED_MACRO: ElementKind.MACRO,
    "p": ElementKind.PARAGRAPH,
    "br": ElementKind.LINE_BREAK,
    "pre": ElementKind.PREFORMATTED,
    "ul": ElementKind.UNORDERED_LIST,
    "ol": ElementKind.ORDERED_LIST,
    "table": ElementKind.TABLE,
    "a": ElementKind.HYPERLINK,
}


def classify_tag(tag: str) -> ElementKind:
    """Map a qualified tag name to its element kind.

    Parameters
    ----------
    tag : str
        Qualified tag name; matching is case-insensitive

    Returns
    -------
    ElementKind
        The recognised kind, or ``ElementKind.UNKNOWN``

    """
    name = tag.lower()
    kind = _SIMPLE_KINDS.get(name)
    if kind is not None:
        return kind
    if name in HEADING_TAGS:
        return ElementKind.HEADING
    if name in INLINE_TAGS:
        return ElementKind.INLINE
    if name in CONTAINER_TAGS:
        return ElementKind.CONTAINER
    return ElementKind.UNKNOWN


class Node(ABC):
    """Base class for document tree nodes."""

    @abstractmethod
    def accept(self, visitor: Any, *args: Any) -> Any:
        """Dispatch to the visitor method for this node."""

    @abstractmethod
    def text_content(self) -> str:
        """Return the concatenated text of this node and its descendants."""


@dataclass
class Text(Node):
    """A literal run of character data."""

    content: str = ""

    def accept(self, visitor: Any, *args: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self, *args)

    def text_content(self) -> str:
        """Return the literal text."""
        return self.content


@dataclass
class Element(Node):
    """A markup element.

    Parameters
    ----------
    tag : str
        Qualified tag name, e.g. ``"ac:structured-macro"`` or ``"p"``
    attributes : dict
        Attribute name to value, in source order
    children : list of Node
        Child nodes in document order

    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Union[Element, Text]] = field(default_factory=list)

    @property
    def kind(self) -> ElementKind:
        """The element kind used for render dispatch."""
        return classify_tag(self.tag)

    @property
    def name(self) -> str:
        """Lower-cased tag name."""
        return self.tag.lower()

    def accept(self, visitor: Any, *args: Any) -> Any:
        """Dispatch to the visitor method for this element's kind."""
        return visitor.visit_element(self, *args)

    def get(self, attribute: str, default: Optional[str] = None) -> Optional[str]:
        """Return an attribute value, ignoring case of the attribute name."""
        if attribute in self.attributes:
            return self.attributes[attribute]
        lowered = attribute.lower()
        for key, value in self.attributes.items():
            if key.lower() == lowered:
                return value
        return default

    def text_content(self) -> str:
        """Return the concatenated text of all descendants."""
        parts = []
        stack: list[Union[Element, Text]] = list(reversed(self.children))
        while stack:
            node = stack.pop()
            if isinstance(node, Text):
                parts.append(node.content)
            else:
                stack.extend(reversed(node.children))
        return "".join(parts)

    def text(self) -> str:
        """Return the trimmed text content."""
        return self.text_content().strip()

    def element_children(self) -> Iterator[Element]:
        """Iterate over direct child elements."""
        for child in self.children:
            if isinstance(child, Element):
                yield child

    def children_named(self, *tags: str) -> list[Element]:
        """Return direct child elements whose tag is one of ``tags``."""
        wanted = {tag.lower() for tag in tags}
        return [child for child in self.element_children() if child.name in wanted]

    def iter_descendants(self) -> Iterator[Element]:
        """Iterate over descendant elements in document order."""
        stack = list(reversed(list(self.element_children())))
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(list(element.element_children())))

    def find(self, tag: str) -> Optional[Element]:
        """Return the first descendant element with the given tag, if any."""
        wanted = tag.lower()
        for element in self.iter_descendants():
            if element.name == wanted:
                return element
        return None
