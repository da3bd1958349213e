#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for rendering the document tree to Markdown."""

from __future__ import annotations

from dataclasses import dataclass, field

from confluence2md.constants import (
    DEFAULT_ATTACHMENT_LINK_TEXT,
    DEFAULT_CODE_FENCE,
    DEFAULT_IMAGE_MACROS,
)
from confluence2md.options.base import BaseRendererOptions


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Configuration options for the storage-to-Markdown renderer.

    Parameters
    ----------
    code_fence : str, default "```"
        Fence placed around ``pre`` blocks.
    attachment_link_text : str, default "attachment"
        Link text for attachment links without a plain-text body.
    image_macros : tuple of str, default ("image", "thumbnail", "view-file")
        Structured macro names rendered as embedded images.
    strip_trailing_cell_breaks : bool, default False
        Remove ``<br/>`` separators at the start and end of table cells.
        Confluence wraps most cell content in ``<p>``, which otherwise leaves
        every cell ending in ``<br/>``.
    render_embeds_in_tables : bool, default False
        Render ``ac:image``, ``ac:link`` and image macros inside table cells
        with the same handlers used outside tables, so their attachment
        references are recorded. When False, such elements are flattened to
        their text like any other nested element.

    """

    code_fence: str = field(
        default=DEFAULT_CODE_FENCE,
        metadata={"help": "Fence placed around preformatted blocks"},
    )
    attachment_link_text: str = field(
        default=DEFAULT_ATTACHMENT_LINK_TEXT,
        metadata={"help": "Link text for attachment links without a body"},
    )
    image_macros: tuple[str, ...] = field(
        default=DEFAULT_IMAGE_MACROS,
        metadata={"help": "Structured macro names rendered as images"},
    )
    strip_trailing_cell_breaks: bool = field(
        default=False,
        metadata={"help": "Strip leading/trailing <br/> separators from table cells"},
    )
    render_embeds_in_tables: bool = field(
        default=False,
        metadata={"help": "Render images and attachment links inside table cells"},
    )

    def __post_init__(self) -> None:
        """Validate renderer options.

        Raises
        ------
        ValueError
            If the code fence is too short or contains mixed characters.

        """
        super().__post_init__()
        if len(self.code_fence) < 3 or len(set(self.code_fence)) != 1 or self.code_fence[0] not in "`~":
            raise ValueError(f"code_fence must be three or more backticks or tildes, got {self.code_fence!r}")
        if isinstance(self.image_macros, str):
            raise ValueError("image_macros must be a sequence of macro names, not a string")
        object.__setattr__(self, "image_macros", tuple(name.lower() for name in self.image_macros))
