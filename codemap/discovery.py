"""Directory traversal with gitignore-style filtering."""

from __future__ import annotations

import os
from pathlib import Path

import pathspec

DEFAULT_IGNORES: tuple[str, ...] = (
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "dist",
    "build",
    "out",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".tox",
    "coverage",
    ".nyc_output",
    ".next",
    ".nuxt",
    ".cache",
    "vendor",
    "target",
    ".idea",
    ".vscode",
    "venv",
)

# Hidden entries are skipped, with these exceptions.
_VISIBLE_DOTFILES: frozenset[str] = frozenset({".env"})


def discover_files(
    root: Path,
    *,
    max_depth: int | None = None,
    extra_ignores: list[str] | None = None,
    use_gitignore: bool = True,
) -> tuple[list[Path], list[Path]]:
    """Walk root and return the directories and files to analyze.

    Within each directory, subdirectories come first (each fully expanded)
    followed by the directory's files, both in name order. Directories that
    cannot be listed are treated as empty.

    Args:
        root: Directory to walk.
        max_depth: Deepest directory level whose entries are listed; the root
            is level 0. None means unlimited.
        extra_ignores: Additional gitignore-style patterns to exclude.
        use_gitignore: Whether to honor the root .gitignore.

    Returns:
        Tuple of (directories, files), both as paths relative to root.
    """
    patterns = [*DEFAULT_IGNORES, *(extra_ignores or [])]
    if use_gitignore:
        patterns.extend(_load_gitignore(root))
    spec = pathspec.PathSpec.from_lines("gitignore", patterns)

    directories: list[Path] = []
    files: list[Path] = []
    _walk(root, root, 0, max_depth, spec, directories, files)
    return directories, files


def _walk(
    root: Path,
    directory: Path,
    depth: int,
    max_depth: int | None,
    spec: pathspec.PathSpec,
    directories: list[Path],
    files: list[Path],
) -> None:
    if max_depth is not None and depth > max_depth:
        return

    try:
        with os.scandir(directory) as it:
            entries = sorted(
                it, key=lambda e: (not e.is_dir(follow_symlinks=False), e.name)
            )
    except OSError:
        return

    for entry in entries:
        if entry.name.startswith(".") and entry.name not in _VISIBLE_DOTFILES:
            continue

        rel = Path(entry.path).relative_to(root)
        if entry.is_dir(follow_symlinks=False):
            # Trailing slash lets directory-only patterns ("build/") apply.
            if spec.match_file(f"{rel.as_posix()}/"):
                continue
            directories.append(rel)
            _walk(
                root,
                Path(entry.path),
                depth + 1,
                max_depth,
                spec,
                directories,
                files,
            )
        elif entry.is_file(follow_symlinks=False):
            if spec.match_file(rel.as_posix()):
                continue
            files.append(rel)


def _load_gitignore(root: Path) -> list[str]:
    """Read pattern lines from the root .gitignore, if it exists and is readable."""
    gitignore_path = root / ".gitignore"
    if not gitignore_path.is_file():
        return []
    try:
        return gitignore_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError):
        return []
