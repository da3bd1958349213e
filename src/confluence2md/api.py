#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/api.py
"""Functional entry points for the conversion engine.

The engine runs in two phases. :func:`render_storage` parses storage-format
markup and renders it to Markdown with ``ATTACH://`` placeholders, returning
the references it found. The caller then lists or downloads the attachments
it needs and passes them to :func:`resolve_attachments`.
:func:`convert_page` chains both phases when the inventory is already known.

None of these functions touch the network or the filesystem.

Examples
--------
    >>> from confluence2md.api import render_storage, resolve_attachments
    >>> from confluence2md.types import ResolvedAsset
    >>> rendered = render_storage('<ac:image><ri:attachment ri:filename="a.png"/></ac:image>')
    >>> rendered.text
    '![a.png](ATTACH://a.png)'
    >>> resolve_attachments(rendered, [ResolvedAsset("a.png", download_path="./a.png")])
    '![a.png](./a.png)'

"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from confluence2md.options.markdown import MarkdownRendererOptions
from confluence2md.options.resolver import AttachmentResolverOptions
from confluence2md.options.storage import StorageParserOptions
from confluence2md.parsers.storage import StorageParser
from confluence2md.renderers.markdown import StorageMarkdownRenderer
from confluence2md.resolver import AttachmentResolver
from confluence2md.types import ParseResult, RenderResult, ResolvedAsset

logger = logging.getLogger(__name__)


def parse_storage(raw: str, parser_options: Optional[StorageParserOptions] = None) -> ParseResult:
    """Parse storage-format markup into a document tree.

    Parameters
    ----------
    raw : str
        Storage-format markup
    parser_options : StorageParserOptions, optional
        Parser configuration

    Returns
    -------
    ParseResult
        Tree root and the well-formedness flag

    """
    return StorageParser(parser_options).parse(raw)


def render_storage(
    raw: str,
    parser_options: Optional[StorageParserOptions] = None,
    renderer_options: Optional[MarkdownRendererOptions] = None,
) -> RenderResult:
    """Parse and render storage-format markup to Markdown with placeholders."""
    root, well_formed = parse_storage(raw, parser_options)
    if not well_formed:
        logger.debug("Rendering best-effort tree from malformed markup")
    return StorageMarkdownRenderer(renderer_options).render(root)


def resolve_attachments(
    rendered: RenderResult,
    inventory: Iterable[ResolvedAsset] = (),
    resolver_options: Optional[AttachmentResolverOptions] = None,
) -> str:
    """Substitute the placeholders of a render result.

    Parameters
    ----------
    rendered : RenderResult
        Output of :func:`render_storage`
    inventory : iterable of ResolvedAsset, default ()
        Attachments available to the caller
    resolver_options : AttachmentResolverOptions, optional
        Remote URL fallback and gallery configuration

    Returns
    -------
    str
        Final Markdown without placeholder tokens

    """
    return AttachmentResolver(resolver_options).resolve(rendered.text, rendered.references, inventory)


def convert_page(
    raw: str,
    inventory: Iterable[ResolvedAsset] = (),
    *,
    title: Optional[str] = None,
    parser_options: Optional[StorageParserOptions] = None,
    renderer_options: Optional[MarkdownRendererOptions] = None,
    resolver_options: Optional[AttachmentResolverOptions] = None,
) -> str:
    """Convert a page body to final Markdown in one call.

    Parameters
    ----------
    raw : str
        Storage-format page body
    inventory : iterable of ResolvedAsset, default ()
        Attachments available to the caller
    title : str, optional
        Page title, emitted as a level-one heading before the body
    parser_options, renderer_options, resolver_options : optional
        Per-stage configuration

    Returns
    -------
    str
        Final Markdown

    """
    rendered = render_storage(raw, parser_options, renderer_options)
    markdown = resolve_attachments(rendered, inventory, resolver_options)
    if title:
        markdown = f"# {title}\n\n" + markdown
    return markdown
