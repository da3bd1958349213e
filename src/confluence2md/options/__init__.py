#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the confluence2md conversion stages.

Each stage has its own frozen Options dataclass:

- :class:`StorageParserOptions` for the Document Parser
- :class:`MarkdownRendererOptions` for the Markdown renderers
- :class:`AttachmentResolverOptions` for placeholder resolution
"""

from __future__ import annotations

from confluence2md.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from confluence2md.options.markdown import MarkdownRendererOptions
from confluence2md.options.resolver import AttachmentResolverOptions
from confluence2md.options.storage import StorageParserOptions

__all__ = [
    "AttachmentResolverOptions",
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownRendererOptions",
    "StorageParserOptions",
]
