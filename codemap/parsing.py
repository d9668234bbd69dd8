"""Line-based declaration and import extraction.

Each line is matched on its own against the language's ordered pattern list;
the first pattern that matches wins. There is no lookahead, so signatures
split across several lines are never recovered.
"""

from __future__ import annotations

from codemap.languages import KEYWORD_KINDS, LANGUAGES, DeclarationPattern
from codemap.models import Declaration


def extract_declarations(content: str, language: str | None) -> list[Declaration]:
    """Extract declarations from file content, in file order.

    Args:
        content: Decoded file text.
        language: Language tag from classify(); None or unsupported tags
            yield no declarations.

    Returns:
        List of Declaration objects with 1-based line numbers. Repeated names
        (overloads, redefinitions) are all kept.
    """
    lang = LANGUAGES.get(language) if language else None
    if lang is None or not lang.declarations:
        return []

    declarations: list[Declaration] = []
    for lineno, line in enumerate(content.split("\n"), start=1):
        decl = _match_declaration(line, lineno, lang.declarations)
        if decl is not None:
            declarations.append(decl)
    return declarations


def extract_imports(content: str, language: str | None) -> list[str]:
    """Extract raw import targets from file content, in file order.

    Args:
        content: Decoded file text.
        language: Language tag from classify().

    Returns:
        Import strings exactly as written (e.g. "./util", "fmt", "stdio.h"),
        duplicates included.
    """
    lang = LANGUAGES.get(language) if language else None
    if lang is None or not lang.imports:
        return []

    imports: list[str] = []
    for line in content.split("\n"):
        for regex in lang.imports:
            match = regex.search(line)
            if match:
                imports.append(match.group(1))
                break
    return imports


def count_lines(content: str) -> int:
    """Count newline-separated lines, ignoring the empty tail after a final newline."""
    if not content:
        return 0
    count = content.count("\n")
    if not content.endswith("\n"):
        count += 1
    return count


def _match_declaration(
    line: str, lineno: int, patterns: tuple[DeclarationPattern, ...]
) -> Declaration | None:
    """Return the declaration for the first pattern accepting this line."""
    for pattern in patterns:
        match = pattern.regex.search(line)
        if match is None:
            continue
        name = match.group("name")
        if name in pattern.reject:
            continue
        if pattern.max_indent is not None and _indent(line) > pattern.max_indent:
            continue
        kind = pattern.kind or KEYWORD_KINDS[match.group("kind")]
        return Declaration(
            kind=kind, name=name, line=lineno, exported=pattern.exported
        )
    return None


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())
