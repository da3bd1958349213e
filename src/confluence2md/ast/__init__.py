#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/ast/__init__.py
"""Document tree for storage-format markup.

- nodes: :class:`Element` and :class:`Text` nodes, :class:`ElementKind`
- visitors: :class:`NodeVisitor` with explicit kind-based dispatch

"""

from __future__ import annotations

from confluence2md.ast.nodes import Element, ElementKind, Node, Text, classify_tag
from confluence2md.ast.visitors import NodeVisitor

__all__ = ["Element", "ElementKind", "Node", "NodeVisitor", "Text", "classify_tag"]
