"""Localization helpers."""

from .translations import DEFAULT_LANGUAGE, TRANSLATIONS, get_translations

__all__ = ["DEFAULT_LANGUAGE", "TRANSLATIONS", "get_translations"]
