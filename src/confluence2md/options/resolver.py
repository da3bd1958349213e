#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for attachment placeholder resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from confluence2md.constants import (
    DEFAULT_DOWNLOAD_URL_TEMPLATE,
    DEFAULT_EMIT_GALLERY,
    DEFAULT_GALLERY_HEADING,
    IMAGE_EXTENSIONS,
)
from confluence2md.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class AttachmentResolverOptions(CloneFrozenMixin):
    """Configuration options for resolving ``ATTACH://`` placeholders.

    Parameters
    ----------
    base_url : str or None, default None
        Confluence site base URL, e.g. ``https://confluence.example.com``.
        Relative download links are joined onto it.
    page_id : str or None, default None
        Id of the page owning the attachments. Together with ``base_url`` it
        enables the download URL template fallback.
    download_url_template : str
        Template for the remote URL of an attachment missing from the
        inventory. Receives ``base_url``, ``page_id`` and the
        percent-encoded ``filename``.
    emit_gallery : bool, default True
        Append an attachments section when the page has no inline
        attachment references but the inventory is not empty.
    gallery_heading : str, default "Attachments"
        Heading text of the appended attachments section.
    image_extensions : tuple of str
        Extensions treated as images in the attachments section.

    """

    base_url: Optional[str] = field(
        default=None,
        metadata={"help": "Confluence base URL used to build remote attachment URLs"},
    )
    page_id: Optional[str] = field(
        default=None,
        metadata={"help": "Page id used in the download URL template"},
    )
    download_url_template: str = field(
        default=DEFAULT_DOWNLOAD_URL_TEMPLATE,
        metadata={"help": "Template for remote URLs of attachments missing from the inventory"},
    )
    emit_gallery: bool = field(
        default=DEFAULT_EMIT_GALLERY,
        metadata={"help": "Append an attachments section when nothing is referenced inline"},
    )
    gallery_heading: str = field(
        default=DEFAULT_GALLERY_HEADING,
        metadata={"help": "Heading of the appended attachments section"},
    )
    image_extensions: tuple[str, ...] = field(
        default=IMAGE_EXTENSIONS,
        metadata={"help": "File extensions treated as images"},
    )

    def __post_init__(self) -> None:
        """Validate resolver options.

        Raises
        ------
        ValueError
            If the template lacks the ``{filename}`` field.

        """
        if "{filename}" not in self.download_url_template:
            raise ValueError("download_url_template must contain a {filename} field")
        if self.base_url is not None:
            object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "image_extensions", tuple(ext.lower() for ext in self.image_extensions))

    @property
    def has_remote_fallback(self) -> bool:
        """Whether unmatched references can be given a remote URL."""
        return bool(self.base_url) and bool(self.page_id)
