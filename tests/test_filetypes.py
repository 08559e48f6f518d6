import pytest

from hecto_engine.highlighting import (
    DEFAULT_FILE_TYPES,
    PLAIN_TEXT,
    FileType,
    FileTypeConflictError,
    FileTypeRegistry,
    HighlightingOptions,
    load_default_filetypes,
)


def make_registry() -> FileTypeRegistry:
    return load_default_filetypes(FileTypeRegistry())


def test_detects_by_extension_case_insensitively() -> None:
    registry = make_registry()

    assert registry.detect("src/main.rs").name == "Rust"
    assert registry.detect("MAIN.RS").name == "Rust"
    assert registry.detect("lib.h").name == "C"
    assert registry.detect("app.test.ts").name == "TypeScript"


def test_unknown_or_missing_name_maps_to_plain_text() -> None:
    registry = make_registry()

    assert registry.detect(None) is PLAIN_TEXT
    assert registry.detect("") is PLAIN_TEXT
    assert registry.detect("notes.txt") is PLAIN_TEXT
    assert registry.detect("Makefile") is PLAIN_TEXT
    assert not PLAIN_TEXT.options.enabled


def test_register_rejects_extension_conflicts() -> None:
    registry = make_registry()
    impostor = FileType(name="Other", extensions=(".RS",))

    with pytest.raises(FileTypeConflictError) as excinfo:
        registry.register(impostor)

    assert [conflict.name for conflict in excinfo.value.conflicts] == ["Rust"]
    assert registry.detect("main.rs").name == "Rust"


def test_register_replace_takes_over_extensions() -> None:
    registry = make_registry()
    before = registry.stats()

    registry.register(FileType(name="Other", extensions=("rs",)), replace=True)

    assert registry.detect("main.rs").name == "Other"
    assert registry.stats().file_type_count == before.file_type_count
    with pytest.raises(KeyError):
        registry.get("Rust")


def test_duplicate_name_requires_replace() -> None:
    registry = FileTypeRegistry()
    registry.register(FileType(name="Toy", extensions=("toy",)))

    with pytest.raises(ValueError):
        registry.register(FileType(name="Toy", extensions=("toy2",)))

    registry.register(FileType(name="Toy", extensions=("toy2",)), replace=True)
    assert registry.detect("a.toy") is PLAIN_TEXT
    assert registry.detect("a.toy2").name == "Toy"


def test_unregister_drops_extensions() -> None:
    registry = make_registry()

    removed = registry.unregister("Go")

    assert removed is not None and removed.name == "Go"
    assert registry.detect("main.go") is PLAIN_TEXT
    assert registry.unregister("Go") is None


def test_load_defaults_with_filters() -> None:
    registry = load_default_filetypes(FileTypeRegistry(), include=("Rust", "Go"))

    assert sorted(file_type.name for file_type in registry) == ["Go", "Rust"]

    registry = load_default_filetypes(FileTypeRegistry(), exclude=("Java",))
    assert len(registry) == len(DEFAULT_FILE_TYPES) - 1


def test_loaded_registries_are_independent() -> None:
    first = make_registry()
    second = make_registry()

    first.register(FileType(name="Toy", extensions=("toy",)))

    assert first.detect("a.toy").name == "Toy"
    assert second.detect("a.toy") is PLAIN_TEXT
    assert second.detect("x.java").name == "Java"


def test_keywords_are_deduplicated_longest_first() -> None:
    options = HighlightingOptions(primary_keywords=("in", " for ", "in", "", "impl"))

    assert options.primary_keywords == ("impl", "for", "in")
    assert options.enabled


def test_file_type_requires_name() -> None:
    with pytest.raises(ValueError):
        FileType(name="")
