"""
Reports, checks, and renumbers ordered lists in a Markdown or text file.
By default the lists found are printed to stdout; `--check` and `--fix` verify
or repair marker sequences.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from .classifier import marker_value
from .config import CASE_STYLES, NESTED_ALPHABETICAL_MODES, ConfigError, ListConfig, build_config
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    ensure_file_unchanged,
    get_max_file_size,
    get_max_line_length,
    normalize_filepath,
    rewrite_file,
)
from .models import ListType, ParsedList
from .parser import ParseFileError, parse_file, strip_line_ending
from .resequencer import renumber

__all__ = ["cli"]

logger = logging.getLogger(__name__)


def _describe_list(parsed: ParsedList, config: ListConfig) -> list[str]:
    first, last = parsed[0][0] + 1, parsed[-1][0] + 1
    described = [f"Lines {first}-{last}:"]
    for line_number, line in parsed:
        value = "-" if line.type is ListType.UNORDERED else str(marker_value(line, config))
        described.append(
            f"  {line_number + 1}: {'  ' * line.indentation_level}"
            f"{line.type.value} {value} {line.render().strip()}"
        )
    return described


@click.command()
@click.version_option()
@click.option("--check", is_flag=True, help="Exit with status 1 if any marker is out of sequence.")
@click.option("--fix", is_flag=True, help="Renumber out-of-sequence markers in place.")
@click.option("--case-style", type=click.Choice(CASE_STYLES), help="Letter cases to recognize")
@click.option(
    "--nested-mode",
    type=click.Choice(NESTED_ALPHABETICAL_MODES),
    help="Nested alphabetical numbering (aa, ab or aa, bb)",
)
@click.option("--roman/--no-roman", "enable_roman", default=None, help="Recognize Roman numerals")
@click.option(
    "--alphabetical/--no-alphabetical",
    "enable_alphabetical",
    default=None,
    help="Recognize single-letter markers",
)
@click.option(
    "--parentheses/--no-parentheses",
    "enable_parentheses",
    default=None,
    help="Recognize a) and (a) separators",
)
@click.option(
    "--legal-ordering/--no-legal-ordering",
    "enable_legal_ordering",
    default=None,
    help="Start nested levels with the legal outline sequence",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging.")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    check: bool = False,
    fix: bool = False,
    case_style: str | None = None,
    nested_mode: str | None = None,
    enable_roman: bool | None = None,
    enable_alphabetical: bool | None = None,
    enable_parentheses: bool | None = None,
    enable_legal_ordering: bool | None = None,
    verbose: bool = False,
):
    """
    Entry point for inspecting and renumbering ordered lists.

    Args:
        filepath: Path to the Markdown or text file to process.
        check: Report out-of-sequence markers and exit with status 1.
        fix: Rewrite out-of-sequence markers in place.
        case_style: Override for the recognized letter cases.
        nested_mode: Override for the nested alphabetical mode.
        enable_roman: Override for Roman numeral recognition.
        enable_alphabetical: Override for single-letter recognition.
        enable_parentheses: Override for parenthesized separators.
        enable_legal_ordering: Override for legal outline first markers.
        verbose: Log debug records to stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path is rejected, the options conflict, or
            configuration values are invalid.
        click.ClickException: If parsing fails due to limits or malformed
            content, or if filesystem safety checks fail.

    Examples:
        more-ordered-lists outline.md --check --nested-mode repeated
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if check and fix:
        raise click.BadParameter("`--check` and `--fix` cannot be combined")

    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            filepath.parent,
            case_style=case_style,
            nested_alphabetical_mode=nested_mode,
            enable_roman=enable_roman,
            enable_alphabetical=enable_alphabetical,
            enable_parentheses=enable_parentheses,
            enable_legal_ordering=enable_legal_ordering,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        max_line_length = get_max_line_length(default=config.max_line_length)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        initial_stat = collect_file_stat(filepath)
        enforce_file_size(initial_stat, max_file_size, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        result = parse_file(filepath, max_line_length, config)
    except ParseFileError as error:
        raise click.ClickException(str(error)) from error

    try:
        post_parse_stat = collect_file_stat(filepath)
        ensure_file_unchanged(initial_stat, post_parse_stat, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    logger.debug("Found %d list(s) in %s", len(result.lists), filepath)

    if not check and not fix:
        for parsed in result.lists:
            click.echo("\n".join(_describe_list(parsed, config)))
        return

    lines = [strip_line_ending(line) for line in result.full_file]
    rewrites = renumber(lines, config)

    if check:
        for line_number, text in rewrites:
            click.echo(f"{filepath.name}:{line_number + 1}: expected {text.strip()!r}")
        if rewrites:
            sys.exit(1)
        return

    if not rewrites:
        click.echo(f"{filepath.name}: all lists are in sequence.")
        return
    try:
        rewrite_file(
            result.full_file,
            filepath,
            rewrites,
            post_parse_stat,
            initial_stat,
            warn=lambda message: click.echo(message, err=True),
        )
    except IOError as error:
        raise click.ClickException(str(error)) from error
    click.echo(f"{filepath.name}: renumbered {len(rewrites)} line(s).")


if __name__ == "__main__":
    cli()
