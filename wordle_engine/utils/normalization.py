"""
Word Normalization Module

Canonicalizes words for dictionary lookup and guess comparison.

A word is normalized by:
1. Upper-casing it with the locale's special casing rules applied first
   (Turkish dotted/dotless i being the case that matters in practice)
2. Stripping diacritical marks down to their base letters
3. Recomposing the result to NFC

Every function here is pure, so the same rules can be used by the word
repository, the dictionary and the game engine without sharing state.
"""

import unicodedata
from dataclasses import dataclass, field
from typing import Callable, Dict


@dataclass(frozen=True)
class LocaleRules:
    """Special-case casing table applied before the generic Unicode mapping."""
    name: str
    upper_map: Dict[str, str] = field(default_factory=dict)
    lower_map: Dict[str, str] = field(default_factory=dict)


DEFAULT_RULES = LocaleRules(name="default")

TURKISH_RULES = LocaleRules(
    name="tr",
    upper_map={"i": "İ", "ı": "I"},
    lower_map={"I": "ı", "İ": "i"},
)

_RULES_BY_LANGUAGE = {
    "tr": TURKISH_RULES,
}


def get_locale_rules(locale_name: str) -> LocaleRules:
    """
    Resolve a locale identifier such as 'tr', 'tr_TR' or 'tr-TR'.

    Unknown locales fall back to DEFAULT_RULES.
    """
    if not locale_name:
        return DEFAULT_RULES
    language = locale_name.replace("-", "_").split("_")[0].lower()
    return _RULES_BY_LANGUAGE.get(language, DEFAULT_RULES)


def upper(text: str, rules: LocaleRules = DEFAULT_RULES) -> str:
    return "".join(rules.upper_map.get(char, char.upper()) for char in text)


def lower(text: str, rules: LocaleRules = DEFAULT_RULES) -> str:
    return "".join(rules.lower_map.get(char, char.lower()) for char in text)


def strip_diacritics(text: str) -> str:
    """Remove combining marks, leaving the base letters."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(char for char in decomposed if unicodedata.category(char) != "Mn")


def normalize(text: str, rules: LocaleRules = DEFAULT_RULES) -> str:
    """
    Canonical comparison form of a word.

    Args:
        text: Raw word in any case, composed or decomposed
        rules: Locale casing rules

    Returns:
        str: Upper-cased, diacritic-free, NFC-composed word
    """
    folded = upper(unicodedata.normalize("NFC", text.strip()), rules)
    return unicodedata.normalize("NFC", strip_diacritics(folded))


def make_normalizer(rules: LocaleRules = DEFAULT_RULES) -> Callable[[str], str]:
    """Bind normalize() to a set of locale rules."""
    def _normalizer(text: str) -> str:
        return normalize(text, rules)
    _normalizer.rules = rules  # type: ignore[attr-defined]
    return _normalizer
