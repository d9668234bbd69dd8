"""Core data structures for codemap."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class DeclarationKind(enum.Enum):
    """The syntactic kind of a declaration."""

    FUNCTION = "function"
    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    TRAIT = "trait"
    TYPE = "type"
    ENUM = "enum"
    METHOD = "method"
    MODULE = "module"
    VARIABLE = "variable"


@dataclass(frozen=True)
class Declaration:
    """A named top-level construct recovered from a single source line."""

    kind: DeclarationKind
    name: str
    line: int
    exported: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "line": self.line,
            "exported": self.exported,
        }


@dataclass(frozen=True)
class FileRecord:
    """Metadata, declarations, and raw imports for a single file.

    Content-derived fields (line_count, declarations, imports) are empty when
    the file was too large or could not be read as text.
    """

    name: str
    path: Path
    size: int
    language: str | None
    line_count: int = 0
    declarations: tuple[Declaration, ...] = ()
    imports: tuple[str, ...] = ()
    is_source_code: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "relativePath": self.path.as_posix(),
            "byteSize": self.size,
            "languageTag": self.language,
            "lineCount": self.line_count,
            "declarations": [d.to_dict() for d in self.declarations],
            "imports": list(self.imports),
            "isSourceCode": self.is_source_code,
        }


@dataclass
class AnalysisResult:
    """The complete analyzed tree, ready for rendering."""

    root: Path
    files: list[FileRecord] = field(default_factory=list)
    directories: list[Path] = field(default_factory=list)

    @property
    def languages(self) -> dict[str, int]:
        """Line totals per language, counting source-code files only."""
        totals: dict[str, int] = {}
        for fi in self.files:
            if fi.language and fi.is_source_code:
                totals[fi.language] = totals.get(fi.language, 0) + fi.line_count
        return totals

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_lines(self) -> int:
        return sum(fi.line_count for fi in self.files)

    @property
    def total_size(self) -> int:
        return sum(fi.size for fi in self.files)

    @property
    def total_dirs(self) -> int:
        return len(self.directories)

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": str(self.root),
            "files": [fi.to_dict() for fi in self.files],
            "directories": [d.as_posix() for d in self.directories],
            "languages": self.languages,
            "totalFiles": self.total_files,
            "totalLines": self.total_lines,
            "totalSize": self.total_size,
            "totalDirs": self.total_dirs,
        }


@dataclass
class Dependency:
    """An edge in the dependency graph: source imports target.

    Carries every distinct raw import string that resolved to this edge.
    """

    source: Path
    target: Path
    imports: list[str] = field(default_factory=list)


@dataclass
class DependencyGraph:
    """Resolved in-tree import edges and the files they touch."""

    nodes: list[Path] = field(default_factory=list)
    dependencies: list[Dependency] = field(default_factory=list)
