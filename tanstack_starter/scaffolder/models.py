"""Value objects produced by the composer."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .manifest import ManifestDraft


@dataclass(frozen=True)
class FileEmission:
    """One file to write, relative to the project root (POSIX separators)."""

    relative_path: str
    content: bytes
    executable: bool = False

    @classmethod
    def text(cls, relative_path: str, content: str, *, executable: bool = False) -> "FileEmission":
        return cls(relative_path, content.encode("utf-8"), executable)


@dataclass(frozen=True)
class Composition:
    """Everything needed to materialise a project, fully in memory.

    Unpacks as ``manifest, files`` for callers that do not care about the
    empty directory skeleton.
    """

    manifest: ManifestDraft
    files: tuple[FileEmission, ...]
    directories: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[Any]:
        yield self.manifest
        yield self.files

    @property
    def paths(self) -> list[str]:
        """Relative paths of every emitted file, in emission order."""
        return [f.relative_path for f in self.files]

    def get(self, relative_path: str) -> FileEmission | None:
        """Return the emission targeting *relative_path*, if any."""
        for emission in self.files:
            if emission.relative_path == relative_path:
                return emission
        return None
