# sentinel/backend/contracts/preferences.py
"""Value sets accepted by user preferences."""
from __future__ import annotations

from enum import Enum


class ThemeMode(str, Enum):
    LIGHT = "LIGHT"
    DARK = "DARK"
    SYSTEM = "SYSTEM"

    @classmethod
    def parse(cls, value: str | ThemeMode) -> ThemeMode:
        """Case-insensitive; raises ``ValueError`` if unknown."""
        if isinstance(value, ThemeMode):
            return value
        try:
            return cls(value.upper())
        except (ValueError, AttributeError):
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"Invalid theme mode: {value!r}. Must be one of: {allowed}") from None


class LanguageCode(str, Enum):
    PT_BR = "pt-BR"
    EN_US = "en-US"
    ES_ES = "es-ES"
    FR_FR = "fr-FR"
    DE_DE = "de-DE"
    JA_JP = "ja-JP"
    ZH_CN = "zh-CN"

    @classmethod
    def parse(cls, value: str | LanguageCode) -> LanguageCode:
        """Exact match on the BCP 47 tag; raises ``ValueError`` if unsupported."""
        if isinstance(value, LanguageCode):
            return value
        try:
            return cls(value)
        except ValueError:
            supported = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unsupported language: {value!r}. Supported languages: {supported}"
            ) from None
