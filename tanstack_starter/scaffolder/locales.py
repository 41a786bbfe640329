"""Locale metadata for the ``i18n`` feature.

The phrase table only carries the locales the starter ships real copy for.
Every other locale gets the English phrases so no message file is ever
empty; the generated ``machine-translate`` script is expected to replace them.
"""

from __future__ import annotations

from typing import NamedTuple


class PhraseSet(NamedTuple):
    """The fixed message keys written to every ``messages/<locale>.json``."""

    welcome: str
    description: str

    def as_messages(self) -> dict[str, str]:
        return {"welcome": self.welcome, "description": self.description}


FALLBACK_LOCALE = "en"

PHRASES: dict[str, PhraseSet] = {
    "en": PhraseSet(
        welcome="Welcome to your new app!",
        description="Start building something amazing",
    ),
    "vi": PhraseSet(
        welcome="Chào mừng đến với ứng dụng mới của bạn!",
        description="Bắt đầu xây dựng điều gì đó tuyệt vời",
    ),
}

# Offered by the interactive prompt, in display order.
LOCALE_NAMES: dict[str, str] = {
    "en": "English",
    "vi": "Vietnamese",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese (Simplified)",
}

DEFAULT_LOCALES: tuple[str, ...] = ("en", "vi")


def phrases_for(locale: str) -> PhraseSet:
    """Return the phrase set for *locale*, falling back to English."""
    return PHRASES.get(locale, PHRASES[FALLBACK_LOCALE])


def display_name(locale: str) -> str:
    """Human readable name for *locale*; unknown codes are returned as-is."""
    return LOCALE_NAMES.get(locale, locale)
