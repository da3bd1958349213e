#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/types.py
"""Value types exchanged between the conversion stages.

The render stage produces a :class:`RenderResult` holding Markdown text with
``ATTACH://<name>`` placeholder tokens and the ordered list of
:class:`AssetReference` objects discovered along the way. The caller then
acquires the assets and hands an inventory of :class:`ResolvedAsset` records
to the resolver, which substitutes the placeholders.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, NamedTuple, Optional

if TYPE_CHECKING:
    from confluence2md.ast.nodes import Element


class AssetKind(str, Enum):
    """Kind of asset an embedded element points at."""

    ATTACHMENT = "attachment"
    EXTERNAL = "external"


@dataclass(frozen=True)
class AssetReference:
    """An asset reference discovered while rendering.

    Parameters
    ----------
    kind : AssetKind
        Whether the reference names a page attachment or an external URL
    name : str or None
        Attachment filename (attachment references only)
    url : str or None
        Target URL (external references only)

    """

    kind: AssetKind
    name: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def attachment(cls, name: str) -> AssetReference:
        """Create a reference to a page attachment."""
        return cls(kind=AssetKind.ATTACHMENT, name=name)

    @classmethod
    def external(cls, url: str) -> AssetReference:
        """Create a reference to an external URL."""
        return cls(kind=AssetKind.EXTERNAL, url=url)

    @property
    def is_attachment(self) -> bool:
        """Return True for attachment references."""
        return self.kind is AssetKind.ATTACHMENT


@dataclass(frozen=True)
class ResolvedAsset:
    """An asset known to exist on the server, supplied by the caller.

    Parameters
    ----------
    title : str
        Attachment title as listed by the server (usually the filename)
    download_path : str or None
        Local path of the downloaded copy, if the caller downloaded it
    content_type : str or None
        Media type reported by the server
    download_url : str or None
        Remote download link, absolute or relative to the server base URL

    """

    title: str
    download_path: Optional[str] = None
    content_type: Optional[str] = None
    download_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResolvedAsset:
        """Build an asset from a flat record or a REST attachment listing item.

        Flat records use the field names of this class. REST items carry the
        download link under ``_links.download`` and the media type under
        ``metadata.mediaType`` (falling back to ``type``).
        """
        links = data.get("_links") or {}
        metadata = data.get("metadata") or {}
        content_type = data.get("content_type") or data.get("contentType") or metadata.get("mediaType")
        if not content_type and "_links" in data:
            content_type = data.get("type")
        return cls(
            title=str(data.get("title") or ""),
            download_path=data.get("download_path") or data.get("downloadPath") or None,
            content_type=(content_type or "").lower() or None,
            download_url=data.get("download_url") or links.get("download") or None,
        )


class ParseResult(NamedTuple):
    """Result of parsing storage-format markup.

    ``well_formed`` is False when the strict XML pass failed and the tree was
    produced by the permissive HTML parser instead.
    """

    root: Element
    well_formed: bool


@dataclass(frozen=True)
class RenderResult:
    """Markdown text with placeholder tokens plus the references behind them."""

    text: str
    references: tuple[AssetReference, ...] = ()


@dataclass(frozen=True)
class AttachmentReplacement:
    """How one distinct attachment name was resolved.

    Parameters
    ----------
    original_name : str
        Name as it appeared in the storage markup
    sanitized_name : str
        Filesystem-safe variant of the name
    encoded_name : str
        Percent-encoded variant of the name
    local_path : str or None
        Local path from the matching inventory asset
    remote_url : str or None
        Server URL from the matching asset or the download URL template
    asset : ResolvedAsset or None
        The matching inventory asset, if any

    """

    original_name: str
    sanitized_name: str
    encoded_name: str
    local_path: Optional[str] = None
    remote_url: Optional[str] = None
    asset: Optional[ResolvedAsset] = None

    @property
    def target(self) -> str:
        """Substitution target: local path, else remote URL, else empty."""
        return self.local_path or self.remote_url or ""

    @property
    def placeholder_forms(self) -> tuple[str, str, str]:
        """The three textual forms a placeholder for this name may take."""
        return (self.original_name, self.sanitized_name, self.encoded_name)
