"""Tests for directory traversal."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

from codemap.discovery import discover_files


def _touch(path: Path, text: str = "x\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestDiscoverFiles:
    """Tests for discover_files."""

    def test_returns_relative_paths(self, tmp_path: Path) -> None:
        _touch(tmp_path / "app.py")
        _, files = discover_files(tmp_path)
        assert files == [Path("app.py")]
        assert not files[0].is_absolute()

    def test_lists_all_file_types(self, tmp_path: Path) -> None:
        _touch(tmp_path / "data.csv")
        _touch(tmp_path / "notes.txt")
        _, files = discover_files(tmp_path)
        assert files == [Path("data.csv"), Path("notes.txt")]

    def test_directories_before_files(self, tmp_path: Path) -> None:
        _touch(tmp_path / "b.py")
        _touch(tmp_path / "a" / "z.py")
        _touch(tmp_path / "c" / "y.py")
        directories, files = discover_files(tmp_path)
        assert directories == [Path("a"), Path("c")]
        assert files == [Path("a/z.py"), Path("c/y.py"), Path("b.py")]

    def test_nested_ordering(self, tmp_path: Path) -> None:
        _touch(tmp_path / "src" / "index.js")
        _touch(tmp_path / "src" / "lib" / "math.js")
        _touch(tmp_path / "README.md")
        directories, files = discover_files(tmp_path)
        assert directories == [Path("src"), Path("src/lib")]
        assert files == [
            Path("src/lib/math.js"),
            Path("src/index.js"),
            Path("README.md"),
        ]

    def test_files_in_name_order(self, tmp_path: Path) -> None:
        for name in ("z.py", "a.py", "m.py"):
            _touch(tmp_path / name)
        _, files = discover_files(tmp_path)
        assert files == [Path("a.py"), Path("m.py"), Path("z.py")]

    def test_skips_hidden_entries(self, tmp_path: Path) -> None:
        _touch(tmp_path / ".hidden" / "secret.py")
        _touch(tmp_path / ".eslintrc")
        directories, files = discover_files(tmp_path)
        assert directories == []
        assert files == []

    def test_keeps_env_file(self, tmp_path: Path) -> None:
        _touch(tmp_path / ".env", "KEY=value\n")
        _, files = discover_files(tmp_path)
        assert files == [Path(".env")]

    def test_skips_default_ignores(self, tmp_path: Path) -> None:
        _touch(tmp_path / "node_modules" / "index.js")
        _touch(tmp_path / "__pycache__" / "cached.py")
        _touch(tmp_path / "dist" / "bundle.js")
        _touch(tmp_path / "pkg" / "build" / "out.js")
        directories, files = discover_files(tmp_path)
        assert directories == [Path("pkg")]
        assert files == []

    def test_respects_gitignore(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text(
            "ignored.py\ngenerated/\n*.log\n", encoding="utf-8"
        )
        _touch(tmp_path / "ignored.py")
        _touch(tmp_path / "kept.py")
        _touch(tmp_path / "debug.log")
        _touch(tmp_path / "generated" / "schema.py")
        directories, files = discover_files(tmp_path)
        assert directories == []
        assert files == [Path("kept.py")]

    def test_gitignore_disabled(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("ignored.py\n", encoding="utf-8")
        _touch(tmp_path / "ignored.py")
        _, files = discover_files(tmp_path, use_gitignore=False)
        assert files == [Path("ignored.py")]

    def test_extra_ignores(self, tmp_path: Path) -> None:
        _touch(tmp_path / "gen.py")
        _touch(tmp_path / "app.py")
        _touch(tmp_path / "sub" / "trace.log")
        _, files = discover_files(tmp_path, extra_ignores=["gen.py", "*.log"])
        assert files == [Path("app.py")]

    def test_max_depth_zero_lists_but_skips_subdirectories(
        self, tmp_path: Path
    ) -> None:
        _touch(tmp_path / "top.py")
        _touch(tmp_path / "pkg" / "mod.py")
        directories, files = discover_files(tmp_path, max_depth=0)
        assert directories == [Path("pkg")]
        assert files == [Path("top.py")]

    def test_max_depth_one(self, tmp_path: Path) -> None:
        _touch(tmp_path / "pkg" / "mod.py")
        _touch(tmp_path / "pkg" / "sub" / "deep.py")
        directories, files = discover_files(tmp_path, max_depth=1)
        assert directories == [Path("pkg"), Path("pkg/sub")]
        assert files == [Path("pkg/mod.py")]

    def test_skips_symlinks(self, tmp_path: Path) -> None:
        _touch(tmp_path / "real.py")
        _touch(tmp_path / "realdir" / "inner.py")
        (tmp_path / "link.py").symlink_to(tmp_path / "real.py")
        (tmp_path / "linkdir").symlink_to(tmp_path / "realdir")
        directories, files = discover_files(tmp_path)
        assert directories == [Path("realdir")]
        assert files == [Path("realdir/inner.py"), Path("real.py")]

    def test_unlistable_directory_treated_as_empty(self, tmp_path: Path) -> None:
        _touch(tmp_path / "locked" / "secret.py")
        _touch(tmp_path / "open.py")
        real_scandir = os.scandir

        def fake_scandir(path):  # type: ignore[no-untyped-def]
            if Path(path).name == "locked":
                raise PermissionError("denied")
            return real_scandir(path)

        with patch("codemap.discovery.os.scandir", side_effect=fake_scandir):
            directories, files = discover_files(tmp_path)
        assert directories == [Path("locked")]
        assert files == [Path("open.py")]
