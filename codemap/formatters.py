"""Renderers for analysis results: tree, summary, Markdown, Mermaid, JSON."""

from __future__ import annotations

import json
import re
from collections import defaultdict

import typer

from codemap.graph import build_graph
from codemap.models import AnalysisResult, FileRecord

_TREE_DECLARATION_LIMIT = 8
_MARKDOWN_DECLARATION_LIMIT = 10
_BAR_WIDTH = 40
_SIZE_UNITS = ("B", "KB", "MB", "GB")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def format_bytes(size: int) -> str:
    """Format a byte count as e.g. "512 B", "1.5 KB", "12 MB"."""
    if size == 0:
        return "0 B"
    unit = 0
    while unit < len(_SIZE_UNITS) - 1 and size >= 1024 ** (unit + 1):
        unit += 1
    value = size / 1024**unit
    if value < 10:
        return f"{value:.1f} {_SIZE_UNITS[unit]}"
    return f"{int(value + 0.5)} {_SIZE_UNITS[unit]}"


def node_id(path: str) -> str:
    """Return a Mermaid node id for a path.

    Every non-alphanumeric character becomes "_", so distinct paths such as
    "a-b.js" and "a_b.js" map to the same id.
    """
    return _NON_ALNUM.sub("_", path)


def format_summary(result: AnalysisResult) -> str:
    """Render totals and the per-language line chart."""
    lines = [
        f"📁 {result.root}",
        f"   {result.total_files} files, {result.total_dirs} directories",
        f"   {result.total_lines:,} lines, {format_bytes(result.total_size)}",
        "",
    ]
    languages = result.languages
    if languages:
        lines.append("Languages:")
        lines.append(_language_bar(languages))
    return "\n".join(lines)


def format_tree(result: AnalysisResult) -> str:
    """Render files grouped by directory with their declarations."""
    lines = [typer.style(f"{result.root.name}/", bold=True), ""]

    for dir_path, files in _group_by_directory(result.files):
        if dir_path:
            lines.append(typer.style(f"{dir_path}/", fg=typer.colors.CYAN))
        indent = "  " if dir_path else ""

        for i, fi in enumerate(files):
            branch = "└─ " if i == len(files) - 1 else "├─ "
            entry = f"{indent}{branch}{fi.name}"

            info: list[str] = []
            if fi.language:
                info.append(typer.style(fi.language, fg=typer.colors.YELLOW))
            if fi.line_count > 0:
                info.append(f"{fi.line_count}L")
            if info:
                entry += " " + typer.style(f"({', '.join(info)})", dim=True)
            lines.append(entry)

            decl_indent = indent + "   "
            for decl in fi.declarations[:_TREE_DECLARATION_LIMIT]:
                marker = "⬡ " if decl.exported else "  "
                lines.append(
                    typer.style(
                        f"{decl_indent}{marker}{decl.kind.value} {decl.name}:{decl.line}",
                        dim=True,
                    )
                )
            hidden = len(fi.declarations) - _TREE_DECLARATION_LIMIT
            if hidden > 0:
                lines.append(typer.style(f"{decl_indent}  ... +{hidden} more", dim=True))

        lines.append("")

    lines.append("─" * 50)
    lines.append(format_summary(result))
    return "\n".join(lines)


def format_markdown(result: AnalysisResult) -> str:
    """Render a Markdown report with summary, language, and structure sections."""
    lines = [
        f"# {result.root.name}",
        "",
        "## Summary",
        "",
        "| Metric | Value |",
        "| --- | --- |",
        f"| Files | {result.total_files} |",
        f"| Directories | {result.total_dirs} |",
        f"| Lines of code | {result.total_lines:,} |",
        f"| Total size | {format_bytes(result.total_size)} |",
        "",
    ]

    languages = result.languages
    if languages:
        total = sum(languages.values())
        lines.extend(
            ["## Languages", "", "| Language | Lines | Percentage |", "| --- | ---: | ---: |"]
        )
        for lang, count in _by_count(languages):
            pct = count / total * 100 if total else 0.0
            lines.append(f"| {lang} | {count:,} | {pct:.1f}% |")
        lines.append("")

    lines.extend(["## Structure", ""])
    for dir_path, files in _group_by_directory(result.files):
        lines.append(f"### `{dir_path}/`" if dir_path else "### Root")
        lines.append("")
        for fi in files:
            info: list[str] = []
            if fi.language:
                info.append(fi.language)
            if fi.line_count > 0:
                info.append(f"{fi.line_count} lines")
            suffix = f" ({', '.join(info)})" if info else ""
            lines.append(f"- **`{fi.name}`**{suffix}")

            for decl in fi.declarations[:_MARKDOWN_DECLARATION_LIMIT]:
                exported = " *(exported)*" if decl.exported else ""
                lines.append(
                    f"  - `{decl.kind.value} {decl.name}` (line {decl.line}){exported}"
                )
            hidden = len(fi.declarations) - _MARKDOWN_DECLARATION_LIMIT
            if hidden > 0:
                lines.append(f"  - *... +{hidden} more*")
        lines.append("")

    lines.extend(["---", "*Generated by codemap*"])
    return "\n".join(lines)


def format_graph(result: AnalysisResult) -> str:
    """Render the relative-import dependency graph as a Mermaid block."""
    graph = build_graph(result.files)
    if not graph.dependencies:
        return '```mermaid\ngraph LR\n  no_deps["No internal dependencies found"]\n```'

    lines = ["```mermaid", "graph LR"]
    for path in graph.nodes:
        lines.append(f'  {node_id(path.as_posix())}["{path.as_posix()}"]')
    lines.append("")
    for dep in graph.dependencies:
        lines.append(
            f"  {node_id(dep.source.as_posix())} --> {node_id(dep.target.as_posix())}"
        )
    lines.append("```")
    return "\n".join(lines)


def format_json(result: AnalysisResult) -> str:
    """Serialize the full analysis as indented JSON."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def _group_by_directory(
    files: list[FileRecord],
) -> list[tuple[str, list[FileRecord]]]:
    """Group files by parent directory ("" for the root), directories sorted."""
    groups: dict[str, list[FileRecord]] = defaultdict(list)
    for fi in files:
        parent = fi.path.parent.as_posix()
        groups["" if parent == "." else parent].append(fi)
    return sorted(groups.items())


def _by_count(languages: dict[str, int]) -> list[tuple[str, int]]:
    return sorted(languages.items(), key=lambda item: item[1], reverse=True)


def _language_bar(languages: dict[str, int]) -> str:
    """Render one bar-chart row per language, largest first."""
    total = sum(languages.values())
    if total == 0:
        return ""
    rows: list[str] = []
    for lang, count in _by_count(languages):
        pct = count / total * 100
        filled = max(1, round(pct / 100 * _BAR_WIDTH))
        bar = "█" * filled + "░" * (_BAR_WIDTH - filled)
        rows.append(f"  {bar} {lang} {pct:.1f}% ({count:,} lines)")
    return "\n".join(rows)
