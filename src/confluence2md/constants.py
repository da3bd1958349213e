#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the confluence2md library.

This module centralizes the tag vocabulary of the Confluence storage format,
the placeholder scheme used for attachment references, and the default values
of every configurable option.

Constants are organized by category:
1. Type Definitions - Literal types
2. Storage Format Vocabulary - namespaces, custom elements, tag groups
3. Markdown Output - fences, separators, placeholder scheme
4. Attachment Resolution - download URLs, image detection, extension inference
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html.parser", "lxml", "html5lib"]

# =============================================================================
# Storage Format Vocabulary
# =============================================================================

CONTENT_PREFIX = "ac"
RESOURCE_PREFIX = "ri"

DEFAULT_CONTENT_NAMESPACE = "http://atlassian.com/content"
DEFAULT_RESOURCE_NAMESPACE = "http://atlassian.com/resource"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

# Synthetic root wrapped around the raw markup for the strict XML pass
SYNTHETIC_ROOT_TAG = "root"
# Root of the permissive HTML pass when no <body> is produced
FALLBACK_ROOT_TAG = "body"

# Custom elements
TAG_AC_IMAGE = "ac:image"
TAG_AC_LINK = "ac:link"
TAG_AC_STRUCTURED_MACRO = "ac:structured-macro"
TAG_AC_PARAMETER = "ac:parameter"
TAG_AC_RICH_TEXT_BODY = "ac:rich-text-body"
TAG_AC_PLAIN_TEXT_LINK_BODY = "ac:plain-text-link-body"
TAG_RI_ATTACHMENT = "ri:attachment"
TAG_RI_URL = "ri:url"
TAG_RI_PAGE = "ri:page"

# Custom attributes
ATTR_AC_NAME = "ac:name"
ATTR_AC_ALT = "ac:alt"
ATTR_ALT = "alt"
ATTR_RI_FILENAME = "ri:filename"
ATTR_RI_VALUE = "ri:value"
ATTR_RI_CONTENT_TITLE = "ri:content-title"
ATTR_HREF = "href"

# Structured macro parameters naming an attachment, in lookup order
MACRO_ATTACHMENT_PARAMETERS = ("attachment", "file", "name")
MACRO_URL_PARAMETER = "url"
MACRO_ALT_PARAMETER = "alt"

DEFAULT_IMAGE_MACROS = ("image", "thumbnail", "view-file")

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
LIST_ITEM_TAG = "li"
TABLE_ROW_TAG = "tr"
TABLE_CELL_TAGS = frozenset({"th", "td"})
TABLE_SECTION_TAGS = frozenset({"thead", "tbody", "tfoot"})

BOLD_TAGS = frozenset({"strong", "b"})
ITALIC_TAGS = frozenset({"em", "i"})
MONOSPACE_TAGS = frozenset({"code"})
INLINE_TAGS = BOLD_TAGS | ITALIC_TAGS | MONOSPACE_TAGS | frozenset({"span"})

# Wrappers that force block separation after their content
CONTAINER_TAGS = frozenset(
    {
        "div",
        "section",
        "article",
        "header",
        "footer",
        "aside",
        "main",
        "nav",
        TAG_AC_RICH_TEXT_BODY,
        "ac:layout",
        "ac:layout-section",
    }
)

# =============================================================================
# Markdown Output
# =============================================================================

PLACEHOLDER_SCHEME = "ATTACH://"

BLOCK_SEPARATOR = "\n\n"
SOFT_LINE_BREAK = "  \n"
DEFAULT_CODE_FENCE = "```"
DEFAULT_ATTACHMENT_LINK_TEXT = "attachment"

TABLE_CELL_BREAK = "<br/>"
TABLE_SEPARATOR_CELL = " --- "

# =============================================================================
# Attachment Resolution
# =============================================================================

DEFAULT_DOWNLOAD_URL_TEMPLATE = "{base_url}/download/attachments/{page_id}/{filename}"
DEFAULT_GALLERY_HEADING = "Attachments"
DEFAULT_EMIT_GALLERY = True

# Characters kept unescaped when percent-encoding attachment names
URI_COMPONENT_SAFE_CHARS = "-_.!~*'()"

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".bmp")

# Content-type fragment -> extension, checked in order
CONTENT_TYPE_EXTENSIONS = (
    ("png", ".png"),
    ("jpeg", ".jpg"),
    ("jpg", ".jpg"),
    ("gif", ".gif"),
    ("webp", ".webp"),
    ("svg", ".svg"),
    ("pdf", ".pdf"),
    ("bmp", ".bmp"),
)
DEFAULT_BINARY_EXTENSION = ".bin"

DEFAULT_TITLE_WORDS = 5
