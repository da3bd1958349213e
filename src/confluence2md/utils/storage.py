#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/utils/storage.py
"""Text-level helpers for storage-format markup and page naming."""

from __future__ import annotations

import logging
import re
from typing import Mapping

from confluence2md.constants import DEFAULT_TITLE_WORDS

logger = logging.getLogger(__name__)

_INVISIBLE_CHARS = re.compile("[\x00\ufeff\u200b\u200c\u200d\u2060]")
_ILLEGAL_TITLE_CHARS = re.compile(r'[\\/:*?"<>|]')
_TITLE_WORD_SPLIT = re.compile(r"[_ ]+")


def strip_invisible_chars(content: str) -> str:
    r"""Remove NUL and zero-width characters.

    Examples
    --------
    >>> strip_invisible_chars("Hello\x00World\u200b")
    'HelloWorld'

    """
    return _INVISIBLE_CHARS.sub("", content)


def _xml_attribute_escape(value: str) -> str:
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def rewrite_attachment_references(storage_xml: str, attachment_map: Mapping[str, str]) -> str:
    """Point ``ri:attachment`` elements at local copies of their files.

    Only self-closing ``<ri:attachment ri:filename="..." .../>`` elements whose
    filename is a key of ``attachment_map`` are touched; their other
    attributes are preserved.

    Parameters
    ----------
    storage_xml : str
        Raw storage-format markup
    attachment_map : Mapping[str, str]
        Original attachment title -> local relative path

    Returns
    -------
    str
        The markup with matching filenames replaced

    Examples
    --------
    >>> rewrite_attachment_references(
    ...     '<ac:image><ri:attachment ri:filename="a b.png" /></ac:image>',
    ...     {"a b.png": "page/a_b.png"},
    ... )
    '<ac:image><ri:attachment ri:filename="page/a_b.png" /></ac:image>'

    """
    updated = storage_xml
    for original, local_path in attachment_map.items():
        escaped_original = _xml_attribute_escape(original)
        old_attr = f'ri:filename="{escaped_original}"'
        new_attr = f'ri:filename="{_xml_attribute_escape(local_path)}"'
        pattern = re.compile(rf"<ri:attachment\s+{re.escape(old_attr)}[^>]*/>")
        updated, count = pattern.subn(lambda match: match.group(0).replace(old_attr, new_attr, 1), updated)
        logger.debug("Rewrote %d reference(s) to attachment %r", count, original)
    return updated


def sanitize_title(title: str, max_words: int = DEFAULT_TITLE_WORDS) -> str:
    """Shorten a page title into a filesystem-safe stem.

    Examples
    --------
    >>> sanitize_title("Release notes: 2024 / Q3 summary and more")
    'Release_notes_2024_Q3_summary'

    """
    cleaned = _ILLEGAL_TITLE_CHARS.sub("_", title or "")
    words = _TITLE_WORD_SPLIT.split(cleaned)
    return "_".join(words[:max_words])


def page_base_name(page_id: str, title: str) -> str:
    """Return the ``<id>_<title words>`` stem used for exported page files."""
    return f"{page_id}_{sanitize_title(title)}"


__all__ = ["page_base_name", "rewrite_attachment_references", "sanitize_title", "strip_invisible_chars"]
