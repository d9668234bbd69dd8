"""Shared test fixtures for codemap."""

from __future__ import annotations

from pathlib import Path

import pytest

from codemap.analysis import analyze_directory
from codemap.models import AnalysisResult


@pytest.fixture()
def sample_repo(tmp_path: Path) -> Path:
    """Create a small mixed-language tree with relative JS imports.

    Traversal order is: src/lib/math.js, src/index.js, src/util.js,
    README.md, app.py.
    """
    root = tmp_path / "project"
    lib = root / "src" / "lib"
    lib.mkdir(parents=True)
    (lib / "math.js").write_text(
        """\
export function add(a, b) {
  return a + b;
}
export default class Calculator {}
""",
        encoding="utf-8",
    )
    (root / "src" / "index.js").write_text(
        """\
import { add } from './lib/math';
const util = require('./util');
import React from 'react';

export function main() {
  return add(1, 2);
}
""",
        encoding="utf-8",
    )
    (root / "src" / "util.js").write_text(
        """\
export const VERSION = '1.0';

function helper() {}
""",
        encoding="utf-8",
    )
    (root / "README.md").write_text(
        "# Project\n\ndef not_code():\n",
        encoding="utf-8",
    )
    (root / "app.py").write_text(
        """\
import os


def bar():
    return os.getcwd()


class Baz:
    def method(self):
        pass
""",
        encoding="utf-8",
    )
    return root


@pytest.fixture()
def sample_result(sample_repo: Path) -> AnalysisResult:
    """Analysis of sample_repo."""
    return analyze_directory(sample_repo)

