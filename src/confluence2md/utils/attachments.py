#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/utils/attachments.py
"""Attachment naming and inventory helpers.

An attachment name can reach a placeholder token in three textual forms: as
written in the storage markup, sanitized for the filesystem, or
percent-encoded for a URL. The helpers here compute those forms, build remote
download URLs, pick local filenames and load the caller's inventory.

"""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import quote

from confluence2md.constants import (
    CONTENT_TYPE_EXTENSIONS,
    DEFAULT_BINARY_EXTENSION,
    IMAGE_EXTENSIONS,
    URI_COMPONENT_SAFE_CHARS,
)
from confluence2md.exceptions import ValidationError
from confluence2md.options.resolver import AttachmentResolverOptions
from confluence2md.types import AssetReference, ResolvedAsset

logger = logging.getLogger(__name__)

_ILLEGAL_PATH_CHARS = re.compile(r'[\\/:*?"<>|]')
_WHITESPACE_RUN = re.compile(r"\s+")
_COMMA_RUN = re.compile(r",+")
_DOUBLE_SLASH = re.compile(r"([^:])//+")
_EXTENSION = re.compile(r"\.\w+$")


def sanitize_filename(name: Optional[str]) -> str:
    """Return a filesystem-safe form of an attachment name.

    Path-illegal characters become ``_``, whitespace runs become ``_`` and
    comma runs become ``_``.

    Examples
    --------
    >>> sanitize_filename("diagram v2.png")
    'diagram_v2.png'
    >>> sanitize_filename("a,,b:c.txt")
    'a_b_c.txt'

    """
    result = _ILLEGAL_PATH_CHARS.sub("_", name or "")
    result = _WHITESPACE_RUN.sub("_", result)
    return _COMMA_RUN.sub("_", result)


def encode_name(name: str) -> str:
    """Percent-encode an attachment name as a URI component.

    Examples
    --------
    >>> encode_name("diagram v2.png")
    'diagram%20v2.png'

    """
    return quote(name, safe=URI_COMPONENT_SAFE_CHARS)


def name_variants(name: str) -> tuple[str, str, str]:
    """Return the original, sanitized and encoded forms of a name."""
    return (name, sanitize_filename(name), encode_name(name))


def build_download_url(base_url: str, download_path: str) -> str:
    """Join a base URL and a download link, collapsing doubled slashes.

    Absolute download links are returned unchanged apart from slash cleanup.

    Examples
    --------
    >>> build_download_url("https://wiki.example.com/", "/download/attachments/1/a.png")
    'https://wiki.example.com/download/attachments/1/a.png'

    """
    if re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", download_path):
        url = download_path
    else:
        url = f"{base_url}{download_path}"
    return _DOUBLE_SLASH.sub(r"\1/", url)


def fallback_download_url(options: AttachmentResolverOptions, name: str) -> Optional[str]:
    """Build the templated remote URL for an attachment, if configured."""
    if not options.has_remote_fallback:
        return None
    url = options.download_url_template.format(
        base_url=options.base_url,
        page_id=options.page_id,
        filename=encode_name(name),
    )
    return _DOUBLE_SLASH.sub(r"\1/", url)


def remote_url_for(asset: ResolvedAsset, options: AttachmentResolverOptions) -> Optional[str]:
    """Return the server URL of an inventory asset.

    The asset's own download link wins; otherwise the download URL template
    is used. Relative links need ``base_url``.
    """
    if asset.download_url:
        if options.base_url:
            return build_download_url(options.base_url, asset.download_url)
        return asset.download_url
    return fallback_download_url(options, asset.title)


def infer_extension(content_type: Optional[str]) -> str:
    """Guess a file extension from a media type.

    Examples
    --------
    >>> infer_extension("image/jpeg")
    '.jpg'
    >>> infer_extension("application/zip")
    '.bin'

    """
    lowered = (content_type or "").lower()
    for fragment, extension in CONTENT_TYPE_EXTENSIONS:
        if fragment in lowered:
            return extension
    return DEFAULT_BINARY_EXTENSION


def asset_filename(title: str, content_type: Optional[str] = None) -> str:
    """Return the local filename for a downloaded attachment.

    The title is sanitized; when it carries no extension one is inferred
    from the content type.
    """
    sanitized = sanitize_filename(title)
    if _EXTENSION.search(sanitized):
        return sanitized
    return sanitized + infer_extension(content_type)


def is_image_asset(
    asset: ResolvedAsset,
    image_extensions: Iterable[str] = IMAGE_EXTENSIONS,
) -> bool:
    """Return True when an asset is an image by media type or extension."""
    if "image/" in (asset.content_type or "").lower():
        return True
    extension = os.path.splitext(sanitize_filename(asset.title))[1].lower()
    return extension in tuple(image_extensions)


def attachment_reference_names(references: Iterable[AssetReference]) -> list[str]:
    """Return distinct attachment names in first-seen order."""
    seen: dict[str, None] = {}
    for ref in references:
        if ref.is_attachment and ref.name:
            seen.setdefault(ref.name, None)
    return list(seen)


def select_referenced_assets(
    inventory: Iterable[ResolvedAsset],
    references: Iterable[AssetReference],
) -> list[ResolvedAsset]:
    """Return the inventory assets referenced inline, in inventory order.

    An asset counts as referenced when its title matches a reference name in
    original, sanitized or encoded form.
    """
    names = attachment_reference_names(references)
    originals = set(names)
    sanitized = {sanitize_filename(name) for name in names}
    encoded = {encode_name(name) for name in names}

    selected = []
    for asset in inventory:
        if (
            asset.title in originals
            or sanitize_filename(asset.title) in sanitized
            or encode_name(asset.title) in encoded
        ):
            selected.append(asset)
    return selected


def load_inventory(payload: Any) -> list[ResolvedAsset]:
    """Build an inventory from decoded JSON.

    Parameters
    ----------
    payload : dict or list
        Either a REST attachment listing (``{"results": [...]}``) or a list
        of flat ``{title, download_path, content_type, download_url}``
        records.

    Returns
    -------
    list of ResolvedAsset
        Assets in payload order. Items without a title are skipped.

    Raises
    ------
    ValidationError
        If the payload is neither a listing object nor a list.

    """
    if isinstance(payload, Mapping):
        items = payload.get("results", [])
    elif isinstance(payload, list):
        items = payload
    else:
        raise ValidationError(
            "Attachment inventory must be a JSON list or an object with a 'results' list",
            parameter_name="inventory",
            parameter_value=type(payload).__name__,
        )
    if not isinstance(items, list):
        raise ValidationError(
            "Attachment inventory 'results' must be a list",
            parameter_name="inventory",
            parameter_value=type(items).__name__,
        )

    assets = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            logger.warning("Skipping inventory entry %d: expected an object, got %s", index, type(item).__name__)
            continue
        asset = ResolvedAsset.from_dict(dict(item))
        if not asset.title:
            logger.warning("Skipping inventory entry %d: missing title", index)
            continue
        assets.append(asset)
    return assets


__all__ = [
    "asset_filename",
    "attachment_reference_names",
    "build_download_url",
    "encode_name",
    "fallback_download_url",
    "infer_extension",
    "is_image_asset",
    "load_inventory",
    "name_variants",
    "remote_url_for",
    "sanitize_filename",
    "select_referenced_assets",
]
