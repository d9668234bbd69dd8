"""Per-file analysis and whole-tree aggregation."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from codemap.discovery import discover_files
from codemap.languages import classify, is_source_code
from codemap.models import AnalysisResult, FileRecord
from codemap.parsing import count_lines, extract_declarations, extract_imports

MAX_CONTENT_SIZE = 500_000  # bytes; files at or above this are never read


def analyze_file(path: Path, root: Path) -> FileRecord:
    """Classify a file and extract its declarations and imports.

    Only the stat call may fail: content that is too large, unreadable, or
    not valid UTF-8 text leaves the content-derived fields empty.

    Args:
        path: Absolute path to the file.
        root: The analyzed root, used to compute the relative path.

    Returns:
        The FileRecord for this file.

    Raises:
        OSError: If the file cannot be stat'd.
    """
    size = path.stat().st_size
    language = classify(path.name)
    source_code = is_source_code(language)

    record = FileRecord(
        name=path.name,
        path=path.relative_to(root),
        size=size,
        language=language,
        is_source_code=source_code,
    )

    content = _read_text(path, size)
    if content is None:
        return record

    record = replace(record, line_count=count_lines(content))
    if source_code:
        record = replace(
            record,
            declarations=tuple(extract_declarations(content, language)),
            imports=tuple(extract_imports(content, language)),
        )
    return record


def _read_text(path: Path, size: int) -> str | None:
    """Return file text, or None if it is oversized or not readable as text."""
    if size >= MAX_CONTENT_SIZE:
        return None
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    if "\x00" in content:
        return None
    return content


def analyze_directory(
    root: Path,
    *,
    max_depth: int | None = None,
    extra_ignores: list[str] | None = None,
    use_gitignore: bool = True,
    fast: bool = False,
) -> AnalysisResult:
    """Walk root and analyze every discovered file.

    Args:
        root: Directory to analyze.
        max_depth: Maximum directory depth (root is 0); None for unlimited.
        extra_ignores: Additional gitignore-style patterns to exclude.
        use_gitignore: Whether to honor the root .gitignore.
        fast: Analyze files in a process pool instead of sequentially.

    Returns:
        AnalysisResult with files in traversal order.

    Raises:
        FileNotFoundError: If root does not exist.
        NotADirectoryError: If root is not a directory.
        OSError: If a discovered file cannot be stat'd.
    """
    if not root.exists():
        raise FileNotFoundError(f"No such directory: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    directories, files = discover_files(
        root,
        max_depth=max_depth,
        extra_ignores=extra_ignores,
        use_gitignore=use_gitignore,
    )

    if fast and files:
        from codemap.parallel import analyze_files_parallel

        records = analyze_files_parallel(root, files)
    else:
        records = [analyze_file(root / rel_path, root) for rel_path in files]

    return AnalysisResult(root=root, files=records, directories=directories)
