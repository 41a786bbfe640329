"""tanstack-starter configuration.

Typed models for everything the scaffolder consumes: the user's answers
(``Selection``) and the tool's own defaults (``ScaffoldSettings``).  All models
use Pydantic v2 so answers coming from a file, the environment or the
interactive prompts are validated the same way.
"""

from __future__ import annotations

import json
import os
import re
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


PROJECT_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"
LOCALE_PATTERN = r"^[A-Za-z]{2,3}(-[A-Za-z0-9]+)*$"


class PackageManager(str, Enum):
    """Package managers the generated project can be installed with."""

    PNPM = "pnpm"
    NPM = "npm"
    YARN = "yarn"

    @property
    def run_prefix(self) -> str:
        """Prefix for running a ``package.json`` script (``npm run `` vs ``pnpm ``)."""
        return "npm run " if self is PackageManager.NPM else f"{self.value} "

    @property
    def exec_command(self) -> str:
        """Command that runs a locally installed binary."""
        return {
            PackageManager.PNPM: "pnpm exec",
            PackageManager.NPM: "npx",
            PackageManager.YARN: "yarn",
        }[self]

    def run(self, script: str) -> str:
        """Full shell command for running *script*, e.g. ``npm run dev``."""
        return f"{self.run_prefix}{script}"


class StateLibrary(str, Enum):
    """Backing libraries offered by the ``state`` feature."""

    JOTAI = "jotai"
    ZUSTAND = "zustand"


# ---------------------------------------------------------------------------
# Feature sub-options
# ---------------------------------------------------------------------------


class I18nOptions(BaseModel):
    """Locale choices for the ``i18n`` feature.

    Locale codes become file names (``messages/<locale>.json``), so only
    BCP-47 style codes such as ``en`` or ``zh-Hant`` are accepted.  Duplicate
    locales are dropped (first occurrence wins) instead of being rejected.  A
    list that is empty once blank entries are removed falls back to the base
    locale alone.
    """

    model_config = ConfigDict(frozen=True)

    locales: list[str] = Field(default_factory=lambda: ["en"])
    base_locale: str = Field(default="en")

    @field_validator("locales")
    @classmethod
    def _dedupe_locales(cls, value: list[str]) -> list[str]:
        locales = list(dict.fromkeys(locale.strip() for locale in value if locale.strip()))
        for locale in locales:
            if not re.fullmatch(LOCALE_PATTERN, locale):
                raise ValueError(f"Invalid locale code: {locale!r}")
        return locales

    @model_validator(mode="before")
    @classmethod
    def _default_locales(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        locales = data.get("locales") or []
        if isinstance(locales, list):
            locales = [code for code in locales if not isinstance(code, str) or code.strip()]
        if not locales:
            data = {**data, "locales": [data.get("base_locale", "en")]}
        return data

    @model_validator(mode="after")
    def _check_base_locale(self) -> "I18nOptions":
        if self.base_locale not in self.locales:
            raise ValueError(
                f"base_locale {self.base_locale!r} must be one of the selected locales "
                f"{self.locales}"
            )
        return self


class SubOptions(BaseModel):
    """Feature-specific extra answers, keyed by feature."""

    model_config = ConfigDict(frozen=True)

    state: list[StateLibrary] = Field(default_factory=lambda: [StateLibrary.JOTAI])
    i18n: I18nOptions = Field(default_factory=I18nOptions)

    @field_validator("state")
    @classmethod
    def _dedupe_state(cls, value: list[StateLibrary]) -> list[StateLibrary]:
        return list(dict.fromkeys(value)) or [StateLibrary.JOTAI]


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class Selection(BaseModel):
    """The complete set of answers collected before generation begins.

    Feature keys are *not* checked against the catalog here; the composer does
    that so programmatic callers get the same ``UnknownFeature`` error as
    everyone else.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., pattern=PROJECT_NAME_PATTERN)
    package_manager: PackageManager = Field(default=PackageManager.PNPM)
    features: list[str] = Field(default_factory=list)
    sub_options: SubOptions = Field(default_factory=SubOptions)
    init_git: bool = Field(default=True)

    @field_validator("features")
    @classmethod
    def _dedupe_features(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    def has(self, feature_key: str) -> bool:
        """Return ``True`` if *feature_key* was selected."""
        return feature_key in self.features

    @classmethod
    def load(cls, path: str | Path) -> "Selection":
        """Load answers from a YAML or JSON file.

        JSON is detected by the ``.json`` suffix; anything else is parsed as
        YAML (which also accepts JSON documents).
        """
        file_path = Path(path)
        raw = file_path.read_text(encoding="utf-8")
        if file_path.suffix.lower() == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw) or {}
        return cls.model_validate(data)


# ---------------------------------------------------------------------------
# Tool settings
# ---------------------------------------------------------------------------


class ScaffoldSettings(BaseModel):
    """Defaults used by the CLI and the interactive prompts."""

    output_dir: Path = Field(default=Path("."))
    default_project_name: str = Field(default="my-tanstack-app", pattern=PROJECT_NAME_PATTERN)
    default_package_manager: PackageManager = Field(default=PackageManager.PNPM)
    # None means the features the catalog marks as selected by default.
    default_features: list[str] | None = Field(default=None)

    @classmethod
    def from_env(cls) -> "ScaffoldSettings":
        """Build settings from environment variables.

        Recognised variables (all optional):
            TANSTACK_STARTER_OUTPUT_DIR, TANSTACK_STARTER_PROJECT_NAME,
            TANSTACK_STARTER_PACKAGE_MANAGER, TANSTACK_STARTER_FEATURES.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("TANSTACK_STARTER_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["TANSTACK_STARTER_OUTPUT_DIR"])
        if os.environ.get("TANSTACK_STARTER_PROJECT_NAME"):
            kwargs["default_project_name"] = os.environ["TANSTACK_STARTER_PROJECT_NAME"]
        if os.environ.get("TANSTACK_STARTER_PACKAGE_MANAGER"):
            kwargs["default_package_manager"] = os.environ["TANSTACK_STARTER_PACKAGE_MANAGER"]
        if "TANSTACK_STARTER_FEATURES" in os.environ:
            features_str = os.environ["TANSTACK_STARTER_FEATURES"]
            kwargs["default_features"] = [f.strip() for f in features_str.split(",") if f.strip()]
        return cls(**kwargs)
