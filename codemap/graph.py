"""Import resolution and dependency graph construction."""

from __future__ import annotations

import posixpath
from pathlib import Path

import networkx as nx

from codemap.models import Dependency, DependencyGraph, FileRecord

RELATIVE_PREFIXES: tuple[str, ...] = ("./", "../")

# Tried in order after joining the import onto the importing file's directory.
RESOLUTION_SUFFIXES: tuple[str, ...] = (
    "",
    ".js",
    ".ts",
    ".jsx",
    ".tsx",
    "/index.js",
    "/index.ts",
)


def resolve_import(source: Path, raw: str, known: dict[str, Path]) -> Path | None:
    """Resolve a relative import string to a file in the analyzed tree.

    Args:
        source: Relative path of the importing file.
        raw: The import string as written in source.
        known: Map of POSIX relative path to file path for every analyzed file.

    Returns:
        The path of the first matching file, or None when the import is not
        relative or nothing matches.
    """
    if not raw.startswith(RELATIVE_PREFIXES):
        return None

    base = posixpath.join(source.parent.as_posix(), raw)
    for suffix in RESOLUTION_SUFFIXES:
        candidate = posixpath.normpath(base + suffix)
        if candidate in known:
            return known[candidate]
    return None


def build_graph(file_records: list[FileRecord]) -> DependencyGraph:
    """Build the in-tree dependency graph from relative imports.

    Nodes are file paths that take part in at least one resolved edge. An
    edge from A to B exists when A has a relative import resolving to B;
    repeated imports of the same target collapse into one edge. Bare module
    names and unresolvable imports contribute nothing.

    Args:
        file_records: Every FileRecord of one analysis.

    Returns:
        DependencyGraph with nodes and edges in first-seen order.
    """
    known = {fi.path.as_posix(): fi.path for fi in file_records}

    graph = nx.DiGraph()
    for fi in file_records:
        for raw in fi.imports:
            target = resolve_import(fi.path, raw, known)
            if target is None:
                continue
            if graph.has_edge(fi.path, target):
                specifiers = graph.edges[fi.path, target]["imports"]
                if raw not in specifiers:
                    specifiers.append(raw)
            else:
                graph.add_edge(fi.path, target, imports=[raw])

    dependencies = [
        Dependency(source=src, target=tgt, imports=list(data["imports"]))
        for src, tgt, data in graph.edges(data=True)
    ]
    return DependencyGraph(nodes=list(graph.nodes), dependencies=dependencies)
