"""Command-line interface for confluence2md.

This module provides the ``confluence2md`` console script, which converts one
storage-format page body to Markdown.

Usage Examples
--------------
Convert a page body and print Markdown to stdout::

    $ confluence2md page.xml

Resolve attachments against a downloaded inventory and write to a file::

    $ confluence2md page.xml --inventory attachments.json --title "Release Notes" -o page.md

Link missing attachments to the server instead of dropping them::

    $ confluence2md page.xml --base-url https://wiki.example.com --page-id 12345

Use rich formatting for the resolution summary::

    $ confluence2md page.xml --inventory attachments.json --rich

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from confluence2md.cli.builder import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    build_options,
    create_parser,
    get_exit_code_for_exception,
)
from confluence2md.exceptions import (
    Confluence2MdError,
    FileError,
    FileNotFoundError,
    MalformedFileError,
    OutputWriteError,
)
from confluence2md.logging_utils import configure_logging
from confluence2md.parsers.storage import StorageParser
from confluence2md.renderers.markdown import StorageMarkdownRenderer
from confluence2md.resolver import AttachmentResolver
from confluence2md.types import AttachmentReplacement, ResolvedAsset
from confluence2md.utils.attachments import load_inventory

logger = logging.getLogger(__name__)


def read_input(source: str) -> str:
    """Read storage-format markup from a file, or from stdin for ``-``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    MalformedFileError
        If the file is not valid UTF-8
    FileError
        If the file cannot be read

    """
    if source == "-":
        return sys.stdin.read()

    path = Path(source)
    if not path.is_file():
        raise FileNotFoundError(file_path=source)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedFileError(f"Input is not valid UTF-8: {source}", file_path=source, original_error=e) from e
    except OSError as e:
        raise FileError(f"Could not read input file: {source}", file_path=source, original_error=e) from e


def read_inventory(source: str) -> list[ResolvedAsset]:
    """Load an attachment inventory from a JSON file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    MalformedFileError
        If the file is not valid JSON
    ValidationError
        If the JSON does not have the shape of an inventory

    """
    text = read_input(source)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedFileError(f"Inventory is not valid JSON: {e}", file_path=source, original_error=e) from e
    assets = load_inventory(payload)
    logger.debug("Loaded %d inventory asset(s) from %s", len(assets), source)
    return assets


def write_output(markdown: str, destination: str | None) -> None:
    """Write Markdown to a file, or to stdout when no destination is given.

    Raises
    ------
    OutputWriteError
        If the file cannot be written

    """
    if not destination:
        sys.stdout.write(markdown)
        return
    try:
        path = Path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markdown, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(file_path=destination, original_error=e) from e
    logger.info("Wrote %s", destination)


def print_resolution_summary(replacements: Sequence[AttachmentReplacement], well_formed: bool) -> None:
    """Print a table of attachment resolutions to stderr using rich."""
    from rich.console import Console
    from rich.table import Table

    console = Console(stderr=True)
    if not well_formed:
        console.print("[yellow][!] Markup was not well-formed XML; converted with the HTML fallback[/yellow]")

    if not replacements:
        console.print("[dim]No inline attachment references[/dim]")
        return

    table = Table(title="Attachment Resolution")
    table.add_column("Attachment", style="cyan", no_wrap=False)
    table.add_column("Status", style="white")
    table.add_column("Target", style="magenta", no_wrap=False)

    for replacement in replacements:
        if replacement.local_path:
            status = "[green][OK] Local[/green]"
        elif replacement.remote_url:
            status = "[yellow][!] Remote[/yellow]"
        else:
            status = "[red][X] Dropped[/red]"
        table.add_row(replacement.original_name, status, replacement.target or "-")

    console.print(table)


def main(args: list[str] | None = None) -> int:
    """Execute the confluence2md command.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments; ``sys.argv[1:]`` when None

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    log_level = "DEBUG" if parsed_args.verbose else parsed_args.log_level
    configure_logging(
        log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        rich_output=parsed_args.rich,
    )

    try:
        parser_options, renderer_options, resolver_options = build_options(parsed_args)
        raw = read_input(parsed_args.input)
        inventory = read_inventory(parsed_args.inventory) if parsed_args.inventory else []

        root, well_formed = StorageParser(parser_options).parse(raw)
        rendered = StorageMarkdownRenderer(renderer_options).render(root)

        resolver = AttachmentResolver(resolver_options)
        replacements = resolver.build_replacements(rendered.references, inventory)
        markdown = resolver.apply(rendered.text, replacements, inventory)
        if parsed_args.title:
            markdown = f"# {parsed_args.title}\n\n" + markdown

        write_output(markdown, parsed_args.out)

        if parsed_args.rich:
            print_resolution_summary(replacements, well_formed)
    except Confluence2MdError as e:
        logger.error("%s", e.message)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        return EXIT_ERROR

    return EXIT_SUCCESS


__all__ = ["main", "print_resolution_summary", "read_input", "read_inventory", "write_output"]
