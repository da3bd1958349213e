#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers turning storage-format markup into a document tree."""

from confluence2md.parsers.base import BaseParser
from confluence2md.parsers.storage import StorageParser

__all__ = ["BaseParser", "StorageParser"]
