#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/confluence2md/parsers/base.py
"""Base class for markup parsers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from confluence2md.exceptions import InvalidOptionsError
from confluence2md.options.base import BaseParserOptions
from confluence2md.types import ParseResult


class BaseParser(ABC):
    """Abstract base class for parsers producing a document tree.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, raw: str) -> ParseResult:
        """Parse raw markup into a document tree.

        Implementations must not raise for malformed content; they degrade
        to a best-effort tree and report ``well_formed=False``.
        """
