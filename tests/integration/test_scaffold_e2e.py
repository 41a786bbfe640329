"""Integration tests for the answers-file-to-project pipeline.

These tests drive the real CLI end-to-end with an answers file and verify
that the generated project directory contains valid, well-formed
configuration files.  ``git`` is exercised for real when it is installed.

No network access or Node toolchain is required.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any

import pytest
import yaml

from tanstack_starter.cli import main


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _scaffold(tmp_path: Path, answers: dict[str, Any]) -> Path:
    """Write *answers* as YAML, run the CLI and return the project root."""
    answers_file = tmp_path / "answers.yaml"
    answers_file.write_text(yaml.safe_dump(answers), encoding="utf-8")
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    main(["--answers", str(answers_file), "--directory", str(out_dir)])
    return out_dir / answers["project_name"]


def _load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


FULL_ANSWERS: dict[str, Any] = {
    "project_name": "full-app",
    "package_manager": "pnpm",
    "features": ["i18n", "ui", "state", "auth", "animation", "testing", "quality", "deploy"],
    "sub_options": {
        "state": ["jotai", "zustand"],
        "i18n": {"locales": ["en", "vi"], "base_locale": "en"},
    },
    "init_git": False,
}


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


@pytest.mark.integration
class TestScaffoldE2E:
    def test_every_feature(self, tmp_path: Path, recording_console):
        root = _scaffold(tmp_path, FULL_ANSWERS)

        package = _load_json(root / "package.json")
        assert package["name"] == "full-app"
        assert package["pnpm"]["overrides"]
        assert package["lint-staged"]
        assert {"jotai", "zustand", "framer-motion", "@cloudflare/vite-plugin"} <= set(
            package["dependencies"]
        )

        for json_file in (
            "tsconfig.json",
            "components.json",
            "biome.json",
            "wrangler.json",
            "project.inlang/settings.json",
            "messages/en.json",
            "messages/vi.json",
        ):
            _load_json(root / json_file)

        for directory in ("src/routes", "src/components", "src/utils", "src/styles", "public"):
            assert (root / directory).is_dir()

        assert not (root / ".gitignore").exists()
        assert not (root / ".git").exists()

    def test_minimal_project(self, tmp_path: Path, recording_console):
        answers = {"project_name": "tiny", "package_manager": "yarn", "init_git": False}
        root = _scaffold(tmp_path, answers)

        package = _load_json(root / "package.json")
        assert "pnpm" not in package
        assert set(package["scripts"]) == {"dev", "build", "start"}
        readme = (root / "README.md").read_text(encoding="utf-8")
        assert "yarn dev" in readme
        assert not (root / "messages").exists()

    @pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
    def test_git_repository_initialised(self, tmp_path: Path, recording_console):
        answers = {"project_name": "with-git", "package_manager": "npm", "init_git": True}
        root = _scaffold(tmp_path, answers)

        assert (root / ".git").is_dir()
        assert "node_modules" in (root / ".gitignore").read_text(encoding="utf-8")

    def test_rerun_refuses_existing_project(self, tmp_path: Path, recording_console):
        root = _scaffold(tmp_path, FULL_ANSWERS)
        before = sorted(p.relative_to(root) for p in root.rglob("*"))

        with pytest.raises(SystemExit) as exc_info:
            main(["--answers", str(tmp_path / "answers.yaml"), "--directory", str(root.parent)])

        assert exc_info.value.code == 1
        assert sorted(p.relative_to(root) for p in root.rglob("*")) == before
