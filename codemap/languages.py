"""Language registry: file classification and per-language line patterns."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePath

from codemap.models import DeclarationKind

_CONTROL_KEYWORDS: frozenset[str] = frozenset(
    {"if", "while", "for", "switch", "return"}
)

# Maps a captured ``kind`` group to a DeclarationKind.
KEYWORD_KINDS: dict[str, DeclarationKind] = {
    "function": DeclarationKind.FUNCTION,
    "class": DeclarationKind.CLASS,
    "object": DeclarationKind.CLASS,
    "record": DeclarationKind.CLASS,
    "struct": DeclarationKind.STRUCT,
    "interface": DeclarationKind.INTERFACE,
    "trait": DeclarationKind.TRAIT,
    "type": DeclarationKind.TYPE,
    "enum": DeclarationKind.ENUM,
    "const": DeclarationKind.VARIABLE,
    "let": DeclarationKind.VARIABLE,
    "var": DeclarationKind.VARIABLE,
}


@dataclass(frozen=True)
class DeclarationPattern:
    """One line-anchored declaration form.

    The regex must define a ``name`` group. When ``kind`` is None the regex
    must also define a ``kind`` group, looked up in KEYWORD_KINDS.
    """

    regex: re.Pattern[str]
    kind: DeclarationKind | None = None
    exported: bool = False
    reject: frozenset[str] = frozenset()
    max_indent: int | None = None


def _decl(
    pattern: str,
    kind: DeclarationKind | None = None,
    *,
    exported: bool = False,
    reject: frozenset[str] = frozenset(),
    max_indent: int | None = None,
) -> DeclarationPattern:
    return DeclarationPattern(
        regex=re.compile(pattern),
        kind=kind,
        exported=exported,
        reject=reject,
        max_indent=max_indent,
    )


@dataclass(frozen=True)
class Language:
    """A classified file category with its extraction patterns."""

    name: str
    extensions: tuple[str, ...] = ()
    declarations: tuple[DeclarationPattern, ...] = ()
    imports: tuple[re.Pattern[str], ...] = ()
    source_code: bool = True


_JS_DECLARATIONS = (
    _decl(
        r"^export\s+(?:default\s+)?(?:async\s+)?"
        r"(?P<kind>function|class|const|let|var|interface|type|enum)\s+(?P<name>\w+)",
        exported=True,
    ),
    _decl(r"^(?:async\s+)?function\s+(?P<name>\w+)", DeclarationKind.FUNCTION),
    _decl(r"^class\s+(?P<name>\w+)", DeclarationKind.CLASS),
)

_TS_DECLARATIONS = (
    *_JS_DECLARATIONS,
    _decl(r"^(?:declare\s+)?(?P<kind>interface|type|enum)\s+(?P<name>\w+)"),
)

_JS_IMPORTS = (
    re.compile(r"""(?:import\s+.*\s+from\s+|import\s+)['"]([^'"]+)['"]"""),
    re.compile(r"""require\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
)

_PYTHON_DECLARATIONS = (
    _decl(r"^(?:async\s+)?def\s+(?P<name>\w+)", DeclarationKind.FUNCTION),
    _decl(r"^class\s+(?P<name>\w+)", DeclarationKind.CLASS),
)

_PYTHON_IMPORTS = (
    re.compile(r"^from\s+([\w.]+)\s+import"),
    re.compile(r"^import\s+([\w.]+)"),
)

# Go exports by capitalization, so the upper-case form is tried first.
_GO_DECLARATIONS = (
    _decl(
        r"^func\s+\([^)]*\)\s*(?P<name>[A-Z]\w*)",
        DeclarationKind.METHOD,
        exported=True,
    ),
    _decl(r"^func\s+\([^)]*\)\s*(?P<name>\w+)", DeclarationKind.METHOD),
    _decl(r"^func\s+(?P<name>[A-Z]\w*)", DeclarationKind.FUNCTION, exported=True),
    _decl(r"^func\s+(?P<name>\w+)", DeclarationKind.FUNCTION),
    _decl(
        r"^type\s+(?P<name>[A-Z]\w*)\s+(?P<kind>struct|interface)\b",
        exported=True,
    ),
    _decl(r"^type\s+(?P<name>\w+)\s+(?P<kind>struct|interface)\b"),
)

_GO_IMPORTS = (
    re.compile(r'^import\s+(?:[\w.]+\s+)?"([^"]+)"'),
    re.compile(r'^\s*"([^"]+)"'),
)

_RUST_DECLARATIONS = (
    _decl(
        r"^pub\s+(?:const\s+)?(?:async\s+)?(?:unsafe\s+)?fn\s+(?P<name>\w+)",
        DeclarationKind.FUNCTION,
        exported=True,
    ),
    _decl(
        r"^(?:pub\([^)]*\)\s+)?(?:const\s+)?(?:async\s+)?(?:unsafe\s+)?fn\s+(?P<name>\w+)",
        DeclarationKind.FUNCTION,
    ),
    _decl(
        r"^pub\s+(?P<kind>struct|enum|trait)\s+(?P<name>\w+)",
        exported=True,
    ),
    _decl(r"^(?:pub\([^)]*\)\s+)?(?P<kind>struct|enum|trait)\s+(?P<name>\w+)"),
)

_RUST_IMPORTS = (re.compile(r"^(?:pub\s+)?use\s+([\w:]+)"),)

_C_DECLARATIONS = (
    _decl(
        r"^(?:static\s+|inline\s+|extern\s+)*(?:[\w:*&<>]+\s+)+(?P<name>\w+)\s*\(",
        DeclarationKind.FUNCTION,
        reject=_CONTROL_KEYWORDS,
    ),
    _decl(r"^(?P<kind>class|struct)\s+(?P<name>\w+)"),
)

_C_IMPORTS = (re.compile(r"^\s*#\s*include\s+[\"<]([^\">]+)[\">]"),)

_JAVA_DECLARATIONS = (
    _decl(
        r"^public\s+(?:(?:abstract|final|sealed|static)\s+)*"
        r"(?P<kind>class|interface|enum|record)\s+(?P<name>\w+)",
        exported=True,
    ),
    _decl(
        r"^(?:(?:private|protected|abstract|final|sealed|static)\s+)*"
        r"(?P<kind>class|interface|enum|record)\s+(?P<name>\w+)"
    ),
)

_KOTLIN_MODIFIERS = (
    r"(?:(?:abstract|final|open|sealed|data|enum|annotation|inner|value)\s+)*"
)
# Extension functions ("fun String.shout()") capture the member name.
_KOTLIN_FUN = (
    r"(?:(?:suspend|inline|operator|infix)\s+)*fun\s+"
    r"(?:<[^>]*>\s*)?(?:[\w.]+\.)?(?P<name>\w+)"
)

_KOTLIN_DECLARATIONS = (
    _decl(
        rf"^public\s+{_KOTLIN_MODIFIERS}(?P<kind>class|interface|object)\s+(?P<name>\w+)",
        exported=True,
    ),
    _decl(
        rf"^(?:(?:private|internal|protected)\s+)?{_KOTLIN_MODIFIERS}"
        r"(?P<kind>class|interface|object)\s+(?P<name>\w+)"
    ),
    _decl(rf"^public\s+{_KOTLIN_FUN}", DeclarationKind.FUNCTION, exported=True),
    _decl(
        rf"^(?:(?:private|internal|protected)\s+)?{_KOTLIN_FUN}",
        DeclarationKind.FUNCTION,
    ),
)

# Methods nested two or more levels deep are skipped.
_RUBY_DECLARATIONS = (
    _decl(
        r"^\s*def\s+(?:self\.)?(?P<name>\w+[?!=]?)",
        DeclarationKind.METHOD,
        max_indent=1,
    ),
    _decl(r"^class\s+(?P<name>\w+)", DeclarationKind.CLASS),
    _decl(r"^module\s+(?P<name>\w+)", DeclarationKind.MODULE),
)

_SHELL_DECLARATIONS = (
    _decl(r"^(?:function\s+)?(?P<name>\w+)\s*\(\)", DeclarationKind.FUNCTION),
    _decl(r"^function\s+(?P<name>\w+)", DeclarationKind.FUNCTION),
)


LANGUAGES: dict[str, Language] = {
    lang.name: lang
    for lang in (
        Language(
            "JavaScript",
            (".js", ".mjs", ".cjs", ".jsx"),
            _JS_DECLARATIONS,
            _JS_IMPORTS,
        ),
        Language("TypeScript", (".ts", ".tsx"), _TS_DECLARATIONS, _JS_IMPORTS),
        Language("Python", (".py", ".pyw"), _PYTHON_DECLARATIONS, _PYTHON_IMPORTS),
        Language("Ruby", (".rb",), _RUBY_DECLARATIONS),
        Language("Rust", (".rs",), _RUST_DECLARATIONS, _RUST_IMPORTS),
        Language("Go", (".go",), _GO_DECLARATIONS, _GO_IMPORTS),
        Language("Java", (".java",), _JAVA_DECLARATIONS),
        Language("Kotlin", (".kt",), _KOTLIN_DECLARATIONS),
        Language("Scala", (".scala",)),
        Language("C", (".c", ".h"), _C_DECLARATIONS, _C_IMPORTS),
        Language("C++", (".cpp", ".hpp", ".cc"), _C_DECLARATIONS, _C_IMPORTS),
        Language("C#", (".cs",)),
        Language("F#", (".fs",)),
        Language("PHP", (".php",)),
        Language("Swift", (".swift",)),
        Language("Objective-C", (".m",)),
        Language("R", (".r",)),
        Language("Julia", (".jl",)),
        Language("Shell", (".sh", ".bash", ".zsh", ".fish"), _SHELL_DECLARATIONS),
        Language("HTML", (".html", ".htm")),
        Language("CSS", (".css",)),
        Language("SCSS", (".scss",)),
        Language("LESS", (".less",)),
        Language("SQL", (".sql",)),
        Language("GraphQL", (".graphql", ".gql")),
        Language("Protocol Buffers", (".proto",)),
        Language("Dockerfile", (".dockerfile",)),
        Language("Lua", (".lua",)),
        Language("Vim Script", (".vim",)),
        Language("Emacs Lisp", (".el",)),
        Language("Clojure", (".clj",)),
        Language("Elixir", (".ex",)),
        Language("Erlang", (".erl",)),
        Language("Zig", (".zig",)),
        Language("Nim", (".nim",)),
        Language("D", (".d",)),
        Language("Dart", (".dart",)),
        Language("Vue", (".vue",)),
        Language("Svelte", (".svelte",)),
        Language("Astro", (".astro",)),
        Language("JSON", (".json",), source_code=False),
        Language("YAML", (".yaml", ".yml"), source_code=False),
        Language("TOML", (".toml",), source_code=False),
        Language("XML", (".xml",), source_code=False),
        Language("SVG", (".svg",), source_code=False),
        Language("Markdown", (".md",), source_code=False),
        Language("reStructuredText", (".rst",), source_code=False),
        Language("Text", (".txt",), source_code=False),
        Language("Makefile", source_code=False),
        Language("Ignore file", source_code=False),
        Language("Environment config", source_code=False),
        Language("License", source_code=False),
    )
}

EXTENSION_MAP: dict[str, str] = {
    ext: lang.name for lang in LANGUAGES.values() for ext in lang.extensions
}

# Basenames matched exactly; values are (name, allow_dotted_suffix).
SPECIAL_FILES: dict[str, tuple[str, bool]] = {
    "dockerfile": ("Dockerfile", True),
    "makefile": ("Makefile", False),
    "gnumakefile": ("Makefile", False),
    ".gitignore": ("Ignore file", False),
    ".dockerignore": ("Ignore file", False),
    ".env": ("Environment config", True),
    "license": ("License", False),
    "licence": ("License", False),
}


def classify(file_name: str) -> str | None:
    """Return the language tag for a file name, or None if unrecognized.

    Special basenames (Dockerfile, Makefile, .env, ...) win over the
    extension table. Both checks are case-insensitive.

    Args:
        file_name: A bare file name or a path; only the basename is used.

    Returns:
        The language tag, e.g. "Python", or None.
    """
    lower = PurePath(file_name).name.lower()
    for base, (tag, dotted) in SPECIAL_FILES.items():
        if lower == base or (dotted and lower.startswith(base + ".")):
            return tag

    lang = language_for_extension(PurePath(lower).suffix)
    return lang.name if lang else None


def language_for_extension(ext: str) -> Language | None:
    """Look up a language by file extension.

    Args:
        ext: File extension including the dot (e.g., ".py").

    Returns:
        The Language entry, or None if unsupported.
    """
    lang_name = EXTENSION_MAP.get(ext.lower())
    if lang_name is None:
        return None
    return LANGUAGES.get(lang_name)


def is_source_code(tag: str | None) -> bool:
    """Check whether files with this tag are scanned for declarations."""
    if tag is None:
        return False
    lang = LANGUAGES.get(tag)
    return lang is not None and lang.source_code
