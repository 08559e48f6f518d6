"""Built-in file types for C-family languages."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .models import FileType, HighlightingOptions
from .registry import FileTypeRegistry

_C_FAMILY = dict(
    numbers=True,
    strings=True,
    characters=True,
    comments=True,
    multiline_comments=True,
)

RUST = FileType(
    name="Rust",
    extensions=("rs",),
    options=HighlightingOptions(
        **_C_FAMILY,
        primary_keywords=(
            "as", "break", "const", "continue", "crate", "else", "enum",
            "extern", "false", "fn", "for", "if", "impl", "in", "let", "loop",
            "match", "mod", "move", "mut", "pub", "ref", "return", "self",
            "Self", "static", "struct", "super", "trait", "true", "type",
            "unsafe", "use", "where", "while", "dyn", "abstract", "become",
            "box", "do", "final", "macro", "override", "priv", "typeof",
            "unsized", "virtual", "yield", "async", "await", "try",
        ),
        secondary_keywords=(
            "bool", "char", "i8", "i16", "i32", "i64", "i128", "isize", "u8",
            "u16", "u32", "u64", "u128", "usize", "f32", "f64", "str",
            "String", "Vec", "Option", "Result",
        ),
    ),
)

C = FileType(
    name="C",
    extensions=("c", "h"),
    options=HighlightingOptions(
        **_C_FAMILY,
        primary_keywords=(
            "auto", "break", "case", "const", "continue", "default", "do",
            "else", "enum", "extern", "for", "goto", "if", "inline",
            "register", "restrict", "return", "sizeof", "static", "struct",
            "switch", "typedef", "union", "volatile", "while", "NULL",
        ),
        secondary_keywords=(
            "char", "double", "float", "int", "long", "short", "signed",
            "unsigned", "void", "size_t", "bool",
        ),
    ),
)

CPP = FileType(
    name="C++",
    extensions=("cc", "cpp", "cxx", "hpp", "hh", "hxx"),
    options=HighlightingOptions(
        **_C_FAMILY,
        primary_keywords=C.options.primary_keywords
        + (
            "class", "namespace", "template", "typename", "public",
            "private", "protected", "virtual", "override", "new", "delete",
            "this", "throw", "try", "catch", "using", "constexpr", "nullptr",
            "true", "false", "operator", "friend", "explicit", "noexcept",
        ),
        secondary_keywords=C.options.secondary_keywords + ("auto", "std", "string"),
    ),
)

GO = FileType(
    name="Go",
    extensions=("go",),
    options=HighlightingOptions(
        **_C_FAMILY,
        primary_keywords=(
            "break", "case", "chan", "const", "continue", "default", "defer",
            "else", "fallthrough", "for", "func", "go", "goto", "if",
            "import", "interface", "map", "package", "range", "return",
            "select", "struct", "switch", "type", "var", "nil", "true",
            "false", "iota",
        ),
        secondary_keywords=(
            "bool", "byte", "complex64", "complex128", "error", "float32",
            "float64", "int", "int8", "int16", "int32", "int64", "rune",
            "string", "uint", "uint8", "uint16", "uint32", "uint64", "uintptr",
        ),
    ),
)

JAVASCRIPT = FileType(
    name="JavaScript",
    extensions=("js", "mjs", "cjs", "jsx"),
    options=HighlightingOptions(
        numbers=True,
        strings=True,
        comments=True,
        multiline_comments=True,
        primary_keywords=(
            "async", "await", "break", "case", "catch", "class", "const",
            "continue", "debugger", "default", "delete", "do", "else",
            "export", "extends", "finally", "for", "function", "if",
            "import", "in", "instanceof", "let", "new", "of", "return",
            "static", "super", "switch", "this", "throw", "try", "typeof",
            "var", "void", "while", "yield", "true", "false", "null",
            "undefined",
        ),
        secondary_keywords=(
            "Array", "Boolean", "Date", "Error", "Map", "Math", "Number",
            "Object", "Promise", "RegExp", "Set", "String", "Symbol",
            "console", "window", "document",
        ),
    ),
)

TYPESCRIPT = FileType(
    name="TypeScript",
    extensions=("ts", "tsx", "mts", "cts"),
    options=HighlightingOptions(
        numbers=True,
        strings=True,
        comments=True,
        multiline_comments=True,
        primary_keywords=JAVASCRIPT.options.primary_keywords
        + (
            "interface", "type", "enum", "implements", "namespace", "declare",
            "readonly", "private", "protected", "public", "abstract", "as",
            "keyof",
        ),
        secondary_keywords=JAVASCRIPT.options.secondary_keywords
        + ("any", "boolean", "never", "number", "string", "unknown", "void"),
    ),
)

JAVA = FileType(
    name="Java",
    extensions=("java",),
    options=HighlightingOptions(
        **_C_FAMILY,
        primary_keywords=(
            "abstract", "assert", "break", "case", "catch", "class",
            "continue", "default", "do", "else", "enum", "extends", "final",
            "finally", "for", "if", "implements", "import", "instanceof",
            "interface", "native", "new", "package", "private", "protected",
            "public", "return", "static", "super", "switch", "synchronized",
            "this", "throw", "throws", "try", "volatile", "while", "var",
            "record", "true", "false", "null",
        ),
        secondary_keywords=(
            "boolean", "byte", "char", "double", "float", "int", "long",
            "short", "void", "String", "Object", "Integer",
        ),
    ),
)

DEFAULT_FILE_TYPES: tuple[FileType, ...] = (
    RUST,
    C,
    CPP,
    GO,
    JAVASCRIPT,
    TYPESCRIPT,
    JAVA,
)


def load_default_filetypes(
    registry: FileTypeRegistry,
    *,
    include: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None,
    extra: Iterable[FileType] = (),
    replace: bool = False,
) -> FileTypeRegistry:
    """Populate ``registry`` with the built-in file types.

    ``include``/``exclude`` filter the built-ins by name; ``extra`` types are
    registered afterwards and may override built-ins when ``replace`` is set.
    """

    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    for file_type in DEFAULT_FILE_TYPES:
        if include_set is not None and file_type.name not in include_set:
            continue
        if file_type.name in exclude_set:
            continue
        registry.register(file_type, replace=replace)

    for file_type in extra:
        registry.register(file_type, replace=replace)
    return registry


__all__ = [
    "DEFAULT_FILE_TYPES",
    "load_default_filetypes",
    "C",
    "CPP",
    "GO",
    "JAVA",
    "JAVASCRIPT",
    "RUST",
    "TYPESCRIPT",
]
