"""File-type registry mapping file names to highlighting rule sets."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from hecto_engine.runtime.telemetry import span

from .models import PLAIN_TEXT, FileType


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    file_type_count: int
    extension_count: int


class FileTypeConflictError(RuntimeError):
    """Raised when a file type claims an extension another type already owns."""

    def __init__(self, file_type: FileType, conflicts: Iterable[FileType]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"File type '{file_type.name}' conflicts with "
            f"{[other.name for other in conflicts_tuple]}"
        )
        super().__init__(message)
        self.file_type = file_type
        self.conflicts = conflicts_tuple


class FileTypeRegistry:
    """Owns file types and the extension index used for detection."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._file_types: Dict[str, FileType] = {}
        self._by_extension: Dict[str, str] = {}
        self._logger_name = logger_name

    def register(self, file_type: FileType, *, replace: bool = False) -> FileType:
        with span(
            "filetypes::register",
            logger_name=self._logger_name,
            component="filetypes",
            metadata={"file_type": file_type.name},
        ) as handle:
            conflicts = self.detect_conflicts(file_type)
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.name for conflict in conflicts)
                )
                raise FileTypeConflictError(file_type, conflicts)

            if replace:
                for conflict in conflicts:
                    self._drop(conflict.name)
            if file_type.name in self._file_types:
                if not replace:
                    raise ValueError(f"File type '{file_type.name}' already registered")
                self._drop(file_type.name)

            self._file_types[file_type.name] = file_type
            for extension in file_type.extensions:
                self._by_extension[extension] = file_type.name
            return file_type

    def unregister(self, name: str) -> Optional[FileType]:
        return self._drop(name)

    def detect_conflicts(self, file_type: FileType) -> list[FileType]:
        names = {
            self._by_extension[extension]
            for extension in file_type.extensions
            if extension in self._by_extension
        }
        names.discard(file_type.name)
        return [self._file_types[name] for name in sorted(names)]

    def get(self, name: str) -> FileType:
        try:
            return self._file_types[name]
        except KeyError as exc:
            raise KeyError(f"File type '{name}' is not registered") from exc

    def for_extension(self, extension: str) -> FileType:
        name = self._by_extension.get(extension.lstrip(".").lower())
        return self._file_types[name] if name else PLAIN_TEXT

    def detect(self, file_name: Optional[str]) -> FileType:
        """Return the file type for ``file_name``; unnamed or unknown is plain."""

        if not file_name:
            return PLAIN_TEXT
        _, extension = os.path.splitext(file_name)
        if not extension:
            return PLAIN_TEXT
        return self.for_extension(extension)

    def __iter__(self) -> Iterator[FileType]:
        return iter(self._file_types.values())

    def __len__(self) -> int:
        return len(self._file_types)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            file_type_count=len(self._file_types),
            extension_count=len(self._by_extension),
        )

    def _drop(self, name: str) -> Optional[FileType]:
        file_type = self._file_types.pop(name, None)
        if file_type is None:
            return None
        for extension in file_type.extensions:
            if self._by_extension.get(extension) == name:
                del self._by_extension[extension]
        return file_type


__all__ = ["FileTypeConflictError", "FileTypeRegistry", "RegistryStats"]
