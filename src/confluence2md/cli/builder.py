"""Argument parser construction and exit codes for the confluence2md CLI."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import argparse

from confluence2md import __version__
from confluence2md.cli.actions import add_env_aware_argument
from confluence2md.exceptions import (
    DependencyError,
    FileError,
    RenderingError,
    ValidationError,
)
from confluence2md.options import (
    AttachmentResolverOptions,
    MarkdownRendererOptions,
    StorageParserOptions,
)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_RENDERING_ERROR = 7

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser for ``confluence2md INPUT [options]``

    """
    parser = argparse.ArgumentParser(
        prog="confluence2md",
        description="Convert a Confluence storage-format page body to Markdown.",
        epilog="Options can also be set through CONFLUENCE2MD_<OPTION> environment variables, "
        "e.g. CONFLUENCE2MD_BASE_URL. Command-line arguments take precedence.",
    )
    parser.add_argument("--version", action="version", version=f"confluence2md {__version__}")

    parser.add_argument("input", help="Storage-format file to convert (use '-' for stdin)")
    parser.add_argument("-o", "--out", dest="out", help="Write Markdown to this file instead of stdout")

    resolve_group = parser.add_argument_group("attachment resolution")
    add_env_aware_argument(
        resolve_group,
        "--inventory",
        help="JSON attachment inventory: a REST listing ({'results': [...]}) or a list of "
        "{title, download_path, content_type, download_url} records",
    )
    add_env_aware_argument(resolve_group, "--title", help="Page title, emitted as a level-one heading")
    add_env_aware_argument(
        resolve_group,
        "--base-url",
        help="Confluence base URL used to build remote attachment URLs",
    )
    add_env_aware_argument(resolve_group, "--page-id", help="Page id used in the download URL template")
    add_env_aware_argument(
        resolve_group,
        "--no-gallery",
        action="store_true",
        help="Do not append an attachments section when nothing is referenced inline",
    )

    parse_group = parser.add_argument_group("parsing and rendering")
    add_env_aware_argument(
        parse_group,
        "--html-parser",
        choices=["html.parser", "lxml", "html5lib"],
        default="html.parser",
        help="BeautifulSoup parser used for malformed markup (default: html.parser)",
    )
    add_env_aware_argument(
        parse_group,
        "--strip-cell-breaks",
        action="store_true",
        help="Strip leading/trailing <br/> separators from table cells",
    )
    add_env_aware_argument(
        parse_group,
        "--embeds-in-tables",
        action="store_true",
        help="Render images and attachment links inside table cells",
    )

    output_group = parser.add_argument_group("output and logging")
    add_env_aware_argument(
        output_group,
        "--rich",
        action="store_true",
        help="Print an attachment resolution summary to stderr using rich",
    )
    add_env_aware_argument(
        output_group,
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    add_env_aware_argument(output_group, "--log-file", help="Also write log records to this file")
    output_group.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    output_group.add_argument(
        "--trace",
        action="store_true",
        help="Log with timestamps and logger names",
    )

    return parser


def build_options(
    args: argparse.Namespace,
) -> tuple[StorageParserOptions, MarkdownRendererOptions, AttachmentResolverOptions]:
    """Translate parsed arguments into the per-stage options objects.

    Raises
    ------
    ValidationError
        If an option value is rejected by its options class

    """
    try:
        parser_options = StorageParserOptions(html_parser=args.html_parser)
        renderer_options = MarkdownRendererOptions(
            strip_trailing_cell_breaks=args.strip_cell_breaks,
            render_embeds_in_tables=args.embeds_in_tables,
        )
        resolver_options = AttachmentResolverOptions(
            base_url=args.base_url or None,
            page_id=args.page_id or None,
            emit_gallery=not args.no_gallery,
        )
    except ValueError as e:
        raise ValidationError(f"Invalid option: {e}", original_error=e) from e
    return parser_options, renderer_options, resolver_options


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR
