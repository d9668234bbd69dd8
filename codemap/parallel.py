"""Parallel file analysis for the --fast flag."""

from __future__ import annotations

import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

from codemap.analysis import analyze_file
from codemap.models import FileRecord


def _analyze_file_worker(root: Path, rel_path: Path) -> FileRecord:
    """Analyze a single file.

    Module-level function required for ProcessPoolExecutor pickling.
    """
    return analyze_file(root / rel_path, root)


def analyze_files_parallel(
    root: Path,
    files: list[Path],
    *,
    max_workers: int | None = None,
) -> list[FileRecord]:
    """Analyze files in parallel using ProcessPoolExecutor.

    Each worker reads only its own file, so no state is shared between them.

    Args:
        root: Analyzed root directory.
        files: Relative file paths from discovery, in traversal order.
        max_workers: Maximum number of worker processes.

    Returns:
        FileRecords in the same order as files.

    Raises:
        OSError: If any file cannot be stat'd.
    """
    if not files:
        return []
    if max_workers is None:
        max_workers = min(os.cpu_count() or 1, len(files))

    records: dict[Path, FileRecord] = {}
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(_analyze_file_worker, root, rel_path): rel_path
            for rel_path in files
        }
        for future in as_completed(futures):
            records[futures[future]] = future.result()

    return [records[rel_path] for rel_path in files]
