#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for parsing Confluence storage-format markup."""

from __future__ import annotations

from dataclasses import dataclass, field

from confluence2md.constants import (
    DEFAULT_CONTENT_NAMESPACE,
    DEFAULT_RESOURCE_NAMESPACE,
    HtmlParser,
)
from confluence2md.options.base import BaseParserOptions

_HTML_PARSERS = ("html.parser", "lxml", "html5lib")


@dataclass(frozen=True)
class StorageParserOptions(BaseParserOptions):
    """Configuration options for the storage-format parser.

    Parameters
    ----------
    content_namespace : str, default "http://atlassian.com/content"
        Namespace URI bound to the ``ac:`` prefix for the strict XML pass.
    resource_namespace : str, default "http://atlassian.com/resource"
        Namespace URI bound to the ``ri:`` prefix for the strict XML pass.
    html_parser : {"html.parser", "lxml", "html5lib"}, default "html.parser"
        BeautifulSoup parser used when the markup is not well-formed XML.
    strip_null_bytes : bool, default True
        Remove NUL and zero-width characters before parsing.

    """

    content_namespace: str = field(
        default=DEFAULT_CONTENT_NAMESPACE,
        metadata={"help": "Namespace URI bound to the ac: prefix"},
    )
    resource_namespace: str = field(
        default=DEFAULT_RESOURCE_NAMESPACE,
        metadata={"help": "Namespace URI bound to the ri: prefix"},
    )
    html_parser: HtmlParser = field(
        default="html.parser",
        metadata={
            "help": "BeautifulSoup parser for malformed markup",
            "choices": list(_HTML_PARSERS),
        },
    )
    strip_null_bytes: bool = field(
        default=True,
        metadata={"help": "Remove NUL and zero-width characters before parsing"},
    )

    def __post_init__(self) -> None:
        """Validate parser options.

        Raises
        ------
        ValueError
            If the parser name is unknown or a namespace is empty.

        """
        super().__post_init__()
        if self.html_parser not in _HTML_PARSERS:
            raise ValueError(f"html_parser must be one of {_HTML_PARSERS}, got {self.html_parser!r}")
        if not self.content_namespace or not self.resource_namespace:
            raise ValueError("content_namespace and resource_namespace must be non-empty")
