"""CLI entry point for codemap."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from codemap.analysis import MAX_CONTENT_SIZE, analyze_directory
from codemap.formatters import (
    format_graph,
    format_json,
    format_markdown,
    format_summary,
    format_tree,
)
from codemap.models import AnalysisResult


def _split_patterns(values: list[str] | None) -> list[str]:
    """Flatten repeated, comma-separated --ignore values."""
    patterns: list[str] = []
    for value in values or []:
        patterns.extend(p.strip() for p in value.split(",") if p.strip())
    return patterns


def _warn_skipped(result: AnalysisResult) -> None:
    """Report files whose content was not analyzed."""
    for fi in result.files:
        if fi.size >= MAX_CONTENT_SIZE:
            typer.echo(
                f"Warning: {fi.path}: content skipped (>={MAX_CONTENT_SIZE} bytes)",
                err=True,
            )
        elif fi.size > 0 and fi.line_count == 0:
            typer.echo(f"Warning: {fi.path}: content not readable as text", err=True)


app = typer.Typer(
    name="codemap",
    help="Print a structural map of a source tree.",
    no_args_is_help=False,
)


@app.command()
def main(
    root: Annotated[
        Path,
        typer.Argument(
            help="Directory to analyze.",
            exists=True,
            file_okay=False,
            resolve_path=True,
        ),
    ] = Path("."),
    summary: Annotated[
        bool,
        typer.Option("--summary", "-s", help="Show summary statistics only."),
    ] = False,
    markdown: Annotated[
        bool,
        typer.Option("--markdown", "-m", help="Output as Markdown."),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON."),
    ] = False,
    graph: Annotated[
        bool,
        typer.Option("--graph", "-g", help="Output the dependency graph as Mermaid."),
    ] = False,
    max_depth: Annotated[
        int | None,
        typer.Option(
            "--max-depth",
            "-d",
            min=0,
            help="Maximum directory depth (default: unlimited).",
        ),
    ] = None,
    ignore: Annotated[
        list[str] | None,
        typer.Option(
            "--ignore",
            "-i",
            help="Additional ignore patterns (comma-separated, repeatable).",
        ),
    ] = None,
    gitignore: Annotated[
        bool,
        typer.Option("--gitignore/--no-gitignore", help="Honor the root .gitignore."),
    ] = True,
    fast: Annotated[
        bool,
        typer.Option("--fast", help="Analyze files in parallel."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v", help="Report files whose content was not analyzed."
        ),
    ] = False,
) -> None:
    """Analyze a directory and print its structure to stdout."""
    try:
        result = analyze_directory(
            root,
            max_depth=max_depth,
            extra_ignores=_split_patterns(ignore),
            use_gitignore=gitignore,
            fast=fast,
        )
    except OSError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    if verbose:
        _warn_skipped(result)

    if as_json:
        output = format_json(result)
    elif graph:
        output = format_graph(result)
    elif summary:
        output = format_summary(result)
    elif markdown:
        output = format_markdown(result)
    else:
        output = format_tree(result)
    typer.echo(output)
