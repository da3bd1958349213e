#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Helpers for attachment naming, inventory handling and storage markup."""

from confluence2md.utils.attachments import (
    asset_filename,
    attachment_reference_names,
    build_download_url,
    encode_name,
    fallback_download_url,
    infer_extension,
    is_image_asset,
    load_inventory,
    name_variants,
    remote_url_for,
    sanitize_filename,
    select_referenced_assets,
)
from confluence2md.utils.storage import (
    page_base_name,
    rewrite_attachment_references,
    sanitize_title,
    strip_invisible_chars,
)

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
    "page_base_name",
    "remote_url_for",
    "rewrite_attachment_references",
    "sanitize_filename",
    "sanitize_title",
    "select_referenced_assets",
    "strip_invisible_chars",
]
