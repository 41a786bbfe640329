"""Interactive question sequence that produces a ``Selection``.

- Uses questionary for the prompts, with one shared style
- Validation happens inline: invalid answers are re-asked, never fatal
- Any prompt answered with Ctrl-C / Esc raises ``UserCancellation``; nothing
  has been written to disk at that point
"""

from __future__ import annotations

import re
from typing import Any

import questionary
from questionary import Choice, Style

from tanstack_starter.config import (
    PROJECT_NAME_PATTERN,
    PackageManager,
    ScaffoldSettings,
    Selection,
    StateLibrary,
)
from tanstack_starter.scaffolder.features import FeatureRegistry, registry as default_registry
from tanstack_starter.scaffolder.locales import DEFAULT_LOCALES, LOCALE_NAMES, display_name


custom_style = Style(
    [
        ("qmark", "fg:#00cccc bold"),
        ("question", "bold"),
        ("answer", "fg:#9370db bold"),
        ("pointer", "fg:#9370db bold"),
        ("highlighted", "fg:#9370db bold"),
        ("selected", "fg:#00cccc"),
        ("instruction", "fg:#808080 italic"),
    ]
)

MULTISELECT_HINT = "(Space to select, Enter to submit)"

STATE_LIBRARY_NAMES: dict[StateLibrary, str] = {
    StateLibrary.JOTAI: "Jotai",
    StateLibrary.ZUSTAND: "Zustand",
}


class UserCancellation(Exception):
    """Raised when the user aborts any prompt."""

    def __init__(self) -> None:
        super().__init__("Operation cancelled")


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_project_name(name: str) -> bool | str:
    """questionary validator: ``True`` or the message to show inline."""
    if not name:
        return "Project name is required"
    if not re.match(PROJECT_NAME_PATTERN, name):
        return "Project name can only contain letters, numbers, dashes and underscores"
    return True


def validate_state_libraries(selected: list[str]) -> bool | str:
    if not selected:
        return "Please select at least one state library"
    return True


def validate_locales(selected: list[str]) -> bool | str:
    if not selected:
        return "Please select at least one language"
    return True


# ---------------------------------------------------------------------------
# Question sequence
# ---------------------------------------------------------------------------


def _answer(question: questionary.Question) -> Any:
    """Ask *question*; ``None`` means the user cancelled."""
    result = question.ask()
    if result is None:
        raise UserCancellation()
    return result


def collect_selection(
    settings: ScaffoldSettings | None = None,
    registry: FeatureRegistry | None = None,
) -> Selection:
    """Run the full question sequence and return the answers.

    Raises:
        UserCancellation: Any prompt was aborted.
    """
    settings = settings or ScaffoldSettings()
    registry = registry or default_registry
    if settings.default_features is None:
        preselected = [feature.key for feature in registry.list() if feature.default_selected]
    else:
        preselected = settings.default_features

    project_name = _answer(
        questionary.text(
            "Project name:",
            default=settings.default_project_name,
            validate=validate_project_name,
            style=custom_style,
        )
    )

    package_manager = _answer(
        questionary.select(
            "Select a package manager:",
            choices=[Choice(pm.value, value=pm.value) for pm in PackageManager],
            default=settings.default_package_manager.value,
            style=custom_style,
        )
    )

    features = _answer(
        questionary.checkbox(
            "Select features to include:",
            choices=[
                Choice(
                    f"{feature.display_name} - {feature.description}",
                    value=feature.key,
                    checked=feature.key in preselected,
                )
                for feature in registry.list()
            ],
            instruction=MULTISELECT_HINT,
            style=custom_style,
        )
    )

    sub_options: dict[str, Any] = {}

    if "state" in features:
        sub_options["state"] = _answer(
            questionary.checkbox(
                "Select state management library:",
                choices=[
                    Choice(name, value=library.value, checked=library is StateLibrary.JOTAI)
                    for library, name in STATE_LIBRARY_NAMES.items()
                ],
                validate=validate_state_libraries,
                instruction=MULTISELECT_HINT,
                style=custom_style,
            )
        )

    if "i18n" in features:
        locales = _answer(
            questionary.checkbox(
                "Select languages to support:",
                choices=[
                    Choice(name, value=code, checked=code in DEFAULT_LOCALES)
                    for code, name in LOCALE_NAMES.items()
                ],
                validate=validate_locales,
                instruction=MULTISELECT_HINT,
                style=custom_style,
            )
        )
        base_locale = _answer(
            questionary.select(
                "Select base/default language:",
                choices=[Choice(display_name(code), value=code) for code in locales],
                style=custom_style,
            )
        )
        sub_options["i18n"] = {"locales": locales, "base_locale": base_locale}

    init_git = _answer(
        questionary.confirm(
            "Initialize git repository?",
            default=True,
            style=custom_style,
        )
    )

    return Selection(
        project_name=project_name,
        package_manager=package_manager,
        features=features,
        sub_options=sub_options,
        init_git=init_git,
    )
