#  Copyright (c) 2025 Tom Villani, Ph.D.
"""confluence2md - Convert Confluence storage-format pages to Markdown.

Confluence stores page bodies in an XHTML dialect with custom ``ac:`` and
``ri:`` elements for macros, images, links and attachments. confluence2md
parses that markup (falling back to permissive HTML parsing when it is not
well-formed), renders it to Markdown and resolves attachment references
against the attachments the caller has available.

Conversion happens in two phases so the caller can fetch assets in between:

1. Render: markup to Markdown with ``ATTACH://<name>`` placeholders, plus the
   list of referenced attachments and external images.
2. Resolve: placeholders replaced with local paths, remote download URLs, or
   removed; an attachments section is appended when nothing is referenced
   inline.

Examples
--------
One-shot conversion with a known inventory:

    >>> from confluence2md import ResolvedAsset, convert_page
    >>> convert_page(
    ...     '<p><ac:image><ri:attachment ri:filename="diagram v2.png"/></ac:image></p>',
    ...     [ResolvedAsset(title="diagram v2.png", download_path="/local/diagram_v2.png")],
    ... )
    '![diagram v2.png](/local/diagram_v2.png)\\n\\n'

Two-phase conversion:

    >>> from confluence2md import render_storage, resolve_attachments
    >>> rendered = render_storage(page_body)  # doctest: +SKIP
    >>> wanted = select_referenced_assets(listing, rendered.references)  # doctest: +SKIP
    >>> markdown = resolve_attachments(rendered, download(wanted))  # doctest: +SKIP

"""

from confluence2md.api import convert_page, parse_storage, render_storage, resolve_attachments
from confluence2md.ast import Element, ElementKind, NodeVisitor, Text
from confluence2md.exceptions import (
    Confluence2MdError,
    DependencyError,
    FileError,
    InvalidOptionsError,
    MalformedFileError,
    OutputWriteError,
    RenderingError,
    ValidationError,
)
from confluence2md.options import (
    AttachmentResolverOptions,
    MarkdownRendererOptions,
    StorageParserOptions,
)
from confluence2md.parsers import StorageParser
from confluence2md.renderers import StorageMarkdownRenderer
from confluence2md.resolver import AttachmentResolver
from confluence2md.types import (
    AssetKind,
    AssetReference,
    AttachmentReplacement,
    ParseResult,
    RenderResult,
    ResolvedAsset,
)
from confluence2md.utils.attachments import load_inventory, select_referenced_assets

__version__ = "0.1.0"

__all__ = [
    "AssetKind",
    "AssetReference",
    "AttachmentReplacement",
    "AttachmentResolver",
    "AttachmentResolverOptions",
    "Confluence2MdError",
    "DependencyError",
    "Element",
    "ElementKind",
    "FileError",
    "InvalidOptionsError",
    "MalformedFileError",
    "MarkdownRendererOptions",
    "NodeVisitor",
    "OutputWriteError",
    "ParseResult",
    "RenderResult",
    "RenderingError",
    "ResolvedAsset",
    "StorageMarkdownRenderer",
    "StorageParser",
    "StorageParserOptions",
    "Text",
    "ValidationError",
    "__version__",
    "convert_page",
    "load_inventory",
    "parse_storage",
    "render_storage",
    "resolve_attachments",
    "select_referenced_assets",
]
