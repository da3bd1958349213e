#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers turning a storage-format document tree into Markdown."""

from confluence2md.renderers.base import BaseRenderer, RenderContext, render_tree
from confluence2md.renderers.inline import format_inline
from confluence2md.renderers.markdown import StorageMarkdownRenderer
from confluence2md.renderers.table import TableRenderer

__all__ = [
    "BaseRenderer",
    "RenderContext",
    "StorageMarkdownRenderer",
    "TableRenderer",
    "format_inline",
    "render_tree",
]
