#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/renderers/base.py
"""Base classes shared by the Markdown renderers.

:class:`RenderContext` is the accumulator threaded through a single render
call. It is created per call and never stored on the renderer, so one
renderer instance can serve many documents, including concurrently.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Iterator, Sequence, Union

from confluence2md.ast.nodes import Element, Node
from confluence2md.exceptions import InvalidOptionsError
from confluence2md.options.base import BaseRendererOptions
from confluence2md.types import AssetReference, RenderResult


# A node either renders to finished text, or expands into the children to
# render next and the function that turns their joined output into its own.
Expansion = Union[str, tuple[Sequence[Node], Callable[[str], str]]]


@dataclass
class _Frame:
    children: Iterator[Node]
    finish: Callable[[str], str]
    parts: list[str] = field(default_factory=list)


def render_tree(expansion: Expansion, expand: Callable[[Node], Expansion]) -> str:
    """Render a subtree with an explicit stack instead of recursion.

    Parameters
    ----------
    expansion : Expansion
        Expansion of the subtree root
    expand : callable
        Returns the expansion of any node below the root

    Returns
    -------
    str
        The finished text of the root

    Examples
    --------
    >>> from confluence2md.ast.nodes import Text
    >>> def expand(node):
    ...     if isinstance(node, Text):
    ...         return node.content
    ...     return node.children, lambda inner: f"[{inner}]"
    >>> tree = Element("a", children=[Text("x"), Element("b", children=[Text("y")])])
    >>> render_tree(expand(tree), expand)
    '[x[y]]'

    """
    if isinstance(expansion, str):
        return expansion
    children, finish = expansion
    stack = [_Frame(iter(children), finish)]
    while True:
        frame = stack[-1]
        child = next(frame.children, None)
        if child is not None:
            child_expansion = expand(child)
            if isinstance(child_expansion, str):
                frame.parts.append(child_expansion)
            else:
                stack.append(_Frame(iter(child_expansion[0]), child_expansion[1]))
            continue

        stack.pop()
        text = frame.finish("".join(frame.parts))
        if not stack:
            return text
        stack[-1].parts.append(text)


@dataclass
class RenderContext:
    """Per-call render state: the asset references discovered so far."""

    references: list[AssetReference] = field(default_factory=list)

    def add_attachment(self, name: str) -> None:
        """Record a reference to a page attachment."""
        self.references.append(AssetReference.attachment(name))

    def add_external(self, url: str) -> None:
        """Record a reference to an external URL."""
        self.references.append(AssetReference.external(url))


class BaseRenderer(ABC):
    """Abstract base class for document tree renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def render(self, root: Element) -> RenderResult:
        """Render a document tree.

        Implementations are pure: no I/O and no state kept between calls.
        """
