#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/parsers/storage.py
"""Confluence storage format to document tree parser.

Storage-format markup is an XHTML dialect that uses the ``ac:`` and ``ri:``
prefixes without declaring them, so on its own it is never valid XML. The
parser wraps the markup in a synthetic root that declares both namespaces and
parses it strictly with ``defusedxml``. When that fails (HTML entities such as
``&nbsp;``, unclosed tags, stray ampersands) the original, unwrapped markup
is parsed again with BeautifulSoup, which always produces a best-effort tree.

Both paths yield the same tree shape: qualified tag names such as
``ac:image`` and attribute names such as ``ri:filename``.

"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

import defusedxml.ElementTree as ET
from bs4 import BeautifulSoup
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag
from bs4.exceptions import FeatureNotFound, ParserRejectedMarkup
from defusedxml import DefusedXmlException

from confluence2md.ast.nodes import Element, Text
from confluence2md.constants import (
    CONTENT_PREFIX,
    FALLBACK_ROOT_TAG,
    RESOURCE_PREFIX,
    SYNTHETIC_ROOT_TAG,
    XML_NAMESPACE,
)
from confluence2md.exceptions import DependencyError
from confluence2md.options.storage import StorageParserOptions
from confluence2md.parsers.base import BaseParser
from confluence2md.types import ParseResult
from confluence2md.utils.storage import strip_invisible_chars

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element as XmlElement

logger = logging.getLogger(__name__)

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")
_QUALIFIED_NAME = re.compile(r"^\{([^}]*)\}(.*)$")

# Strings BeautifulSoup keeps in the tree that are not document text
_NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


class StorageParser(BaseParser):
    """Parse storage-format markup into a document tree.

    Parameters
    ----------
    options : StorageParserOptions or None, default = None
        Parser configuration

    Examples
    --------
        >>> parser = StorageParser()
        >>> root, well_formed = parser.parse("<p>Hello</p>")
        >>> well_formed
        True
        >>> root.children[0].tag
        'p'

    """

    def __init__(self, options: StorageParserOptions | None = None):
        """Initialize the parser with options."""
        BaseParser._validate_options_type(options, StorageParserOptions, "storage")
        options = options or StorageParserOptions()
        super().__init__(options)
        self.options: StorageParserOptions = options
        self._prefixes = {
            options.content_namespace: CONTENT_PREFIX,
            options.resource_namespace: RESOURCE_PREFIX,
            XML_NAMESPACE: "xml",
        }

    def parse(self, raw: str) -> ParseResult:
        """Parse raw storage-format markup.

        Parameters
        ----------
        raw : str
            Storage-format markup (a page body, without any root element)

        Returns
        -------
        ParseResult
            The tree root and whether the strict XML pass succeeded. The root
            is the synthetic ``root`` element on the strict path and a
            ``body`` element on the fallback path.

        Raises
        ------
        DependencyError
            If the configured fallback parser backend is not installed.

        """
        if self.options.strip_null_bytes:
            raw = strip_invisible_chars(raw)

        try:
            root = self._parse_strict(raw)
        except (ET.ParseError, DefusedXmlException, ValueError) as exc:
            logger.info("Storage markup is not well-formed XML (%s); falling back to HTML parsing", exc)
            return ParseResult(self._parse_permissive(raw), False)

        logger.debug("Parsed storage markup as XML")
        return ParseResult(root, True)

    def wrap(self, raw: str) -> str:
        """Wrap raw markup in a root element declaring the storage namespaces."""
        body = _XML_DECLARATION.sub("", raw, count=1)
        return (
            '<?xml version="1.0"?>'
            f'<{SYNTHETIC_ROOT_TAG} xmlns:{CONTENT_PREFIX}="{self.options.content_namespace}"'
            f' xmlns:{RESOURCE_PREFIX}="{self.options.resource_namespace}">'
            f"{body}</{SYNTHETIC_ROOT_TAG}>"
        )

    def _parse_strict(self, raw: str) -> Element:
        xml_root = ET.fromstring(self.wrap(raw))
        return self._convert_xml_element(xml_root)

    def _qualify(self, name: str) -> str:
        """Turn ``{uri}local`` into ``prefix:local`` for known namespaces."""
        match = _QUALIFIED_NAME.match(name)
        if not match:
            return name
        uri, local = match.groups()
        prefix = self._prefixes.get(uri)
        return f"{prefix}:{local}" if prefix else local

    def _convert_xml_element(self, xml_root: XmlElement) -> Element:
        """Convert an ElementTree tree without recursing, so nesting depth is unbounded."""
        root = self._element_from_xml(xml_root)
        stack = [(xml_root, root)]
        while stack:
            xml_element, element = stack.pop()
            if xml_element.text:
                element.children.append(Text(xml_element.text))
            for xml_child in xml_element:
                if isinstance(xml_child.tag, str):
                    child = self._element_from_xml(xml_child)
                    element.children.append(child)
                    stack.append((xml_child, child))
                if xml_child.tail:
                    element.children.append(Text(xml_child.tail))
        return root

    def _element_from_xml(self, xml_element: XmlElement) -> Element:
        return Element(
            tag=self._qualify(xml_element.tag),
            attributes={self._qualify(key): value for key, value in xml_element.attrib.items()},
        )

    def _parse_permissive(self, raw: str) -> Element:
        try:
            soup = BeautifulSoup(raw, self.options.html_parser)
        except FeatureNotFound as exc:
            raise DependencyError(
                "storage parser",
                missing_packages=[(self.options.html_parser, "")],
                original_error=exc,
            ) from exc
        except ParserRejectedMarkup as exc:
            logger.warning("HTML fallback parser rejected the markup (%s); producing an empty document", exc)
            return Element(tag=FALLBACK_ROOT_TAG)

        body = soup.find("body")
        source = body if isinstance(body, Tag) else soup
        return self._convert_soup(source)

    def _convert_soup(self, source: Tag) -> Element:
        """Convert a BeautifulSoup tree without recursing."""
        root = Element(tag=FALLBACK_ROOT_TAG)
        stack = [(source, root)]
        while stack:
            tag, element = stack.pop()
            for child in tag.children:
                if isinstance(child, Tag):
                    converted = Element(tag=child.name, attributes=self._soup_attributes(child))
                    element.children.append(converted)
                    stack.append((child, converted))
                elif isinstance(child, NavigableString) and not isinstance(child, _NON_TEXT_STRINGS):
                    element.children.append(Text(str(child)))
        return root

    @staticmethod
    def _soup_attributes(tag: Tag) -> dict[str, str]:
        # Multi-valued attributes such as class come back as lists
        return {
            key: " ".join(value) if isinstance(value, list) else str(value) for key, value in tag.attrs.items()
        }
