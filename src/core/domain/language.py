"""Languages available for operator-facing messages.

Lives in the domain layer so the config, the message catalogs and the CLI can
share it without importing each other.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for user-facing output."""

    ENGLISH = "en"
    SPANISH = "es"

    @classmethod
    def default(cls) -> "Language":
        return cls.ENGLISH

    @classmethod
    def from_code(cls, code: str | None) -> "Language":
        """Map a locale-ish code (`es`, `es_ES.UTF-8`, `EN`) to a language.

        Unknown or empty codes fall back to the default.
        """

        if not code:
            return cls.default()
        prefix = code.strip().lower().replace("-", "_").split("_", 1)[0]
        for language in cls:
            if language.value == prefix:
                return language
        return cls.default()

    def label(self) -> str:
        return "Spanish" if self is Language.SPANISH else "English"
