"""Materialise a ``Composition`` on disk.

Writes are not transactional: if a write fails partway the project directory
is left partially populated.  The only guarantees are that nothing is touched
when the target directory already exists, and that every file path is checked
to stay inside the project directory before the first write.
"""

from __future__ import annotations

import stat
from pathlib import Path

from .models import Composition, FileEmission


class TargetExists(FileExistsError):
    """Raised when the project directory is already present."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Directory {path} already exists")
        self.path = path


class UnsafePath(ValueError):
    """Raised when an emission would land outside the project directory."""

    def __init__(self, relative_path: str) -> None:
        super().__init__(f"Refusing to write outside the project: {relative_path!r}")
        self.relative_path = relative_path


class ProjectWriter:
    """Writes a composed project below *parent_dir*."""

    def __init__(self, parent_dir: str | Path) -> None:
        self.parent_dir = Path(parent_dir)

    def target_for(self, composition: Composition) -> Path:
        """Directory the project would be written to."""
        return self.parent_dir / composition.manifest.name

    def ensure_absent(self, composition: Composition) -> Path:
        """Return the target path, raising ``TargetExists`` if it is taken."""
        root = self.target_for(composition)
        if root.exists():
            raise TargetExists(root)
        return root

    def write(self, composition: Composition) -> Path:
        """Write the manifest, directory skeleton and every file.

        Returns:
            Path to the generated project root.
        """
        root = self.ensure_absent(composition)
        targets = [(_target_path(root, emission), emission) for emission in composition.files]
        root.mkdir(parents=True)

        _write_file(root / "package.json", composition.manifest.render())

        for directory in composition.directories:
            (root / directory).mkdir(parents=True, exist_ok=True)

        for path, emission in targets:
            _write_file(path, emission.content)
            if emission.executable:
                _make_executable(path)

        return root


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _target_path(root: Path, emission: FileEmission) -> Path:
    path = root.joinpath(*emission.relative_path.split("/"))
    if not path.resolve().is_relative_to(root.resolve()):
        raise UnsafePath(emission.relative_path)
    return path


def _write_file(path: Path, content: bytes) -> None:
    """Create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


def _make_executable(path: Path) -> None:
    """Set the executable bit on a file."""
    current = path.stat().st_mode
    path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
