"""Language mode detection and validation for mentor responses."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from mentra.lexicon import (
    DEVANAGARI_CHAR,
    ENGLISH_FUNCTION_PATTERNS,
    GUJARATI_CHAR,
    HINDI_CORE_PATTERNS,
    HINDI_FUNCTION_PATTERNS,
    HINDI_MIXING_PATTERN,
    SENTENCE_DELIMITER,
    count_matches,
)

logger = logging.getLogger(__name__)


class LanguageMode(str, Enum):
    ENGLISH = "English"
    HINGLISH = "Hinglish"
    GUJARATI = "Gujarati"


DEFAULT_LANGUAGE = LanguageMode.ENGLISH

GUJARATI_SCRIPT_THRESHOLD = 5
GUJARATI_SCRIPT_BONUS = 100
HINGLISH_MATCH_THRESHOLD = 2
HINGLISH_MATCH_WEIGHT = 10
PURE_ENGLISH_BONUS = 50
PURE_ENGLISH_DENSITY = 0.3
ENGLISH_MATCH_WEIGHT = 5
MIN_WINNING_SCORE = 10
MIXED_SENTENCE_MIN_WORDS = 15

# Ties go to the earlier entry.
DETECTION_PRIORITY = (LanguageMode.GUJARATI, LanguageMode.HINGLISH, LanguageMode.ENGLISH)

_LABELS = {
    LanguageMode.ENGLISH: "English",
    LanguageMode.HINGLISH: "Hinglish (Roman Hindi + English)",
    LanguageMode.GUJARATI: "Gujarati",
}


def coerce_language_mode(value: Any) -> LanguageMode | None:
    """Return the matching mode for an exact mode value, otherwise None."""
    if isinstance(value, LanguageMode):
        return value
    if isinstance(value, str):
        try:
            return LanguageMode(value)
        except ValueError:
            return None
    return None


def is_valid_language_mode(value: Any) -> bool:
    return coerce_language_mode(value) is not None


def clamp_language_mode(value: Any) -> LanguageMode:
    mode = coerce_language_mode(value)
    if mode is None:
        logger.warning("Unknown language mode %r, using %s", value, DEFAULT_LANGUAGE.value)
        return DEFAULT_LANGUAGE
    return mode


def detect_language(text: str) -> LanguageMode:
    """Classify text as English, Hinglish or Gujarati.

    Gujarati script is near-certain evidence and outweighs any keyword
    signal. Romanized Hindi function words push towards Hinglish, English
    function words towards English. Weak signals fall back to English.
    """
    if not text or not text.strip():
        return DEFAULT_LANGUAGE

    scores = {mode: 0 for mode in LanguageMode}

    gujarati_chars = len(GUJARATI_CHAR.findall(text))
    if gujarati_chars > GUJARATI_SCRIPT_THRESHOLD:
        scores[LanguageMode.GUJARATI] += GUJARATI_SCRIPT_BONUS

    hinglish_matches = count_matches(HINDI_FUNCTION_PATTERNS, text)
    if hinglish_matches > HINGLISH_MATCH_THRESHOLD:
        scores[LanguageMode.HINGLISH] += hinglish_matches * HINGLISH_MATCH_WEIGHT

    english_matches = count_matches(ENGLISH_FUNCTION_PATTERNS, text)
    total_words = len(text.split())
    is_pure_english = (
        hinglish_matches == 0
        and gujarati_chars == 0
        and english_matches > total_words * PURE_ENGLISH_DENSITY
    )
    if is_pure_english:
        scores[LanguageMode.ENGLISH] += PURE_ENGLISH_BONUS
    elif english_matches > 0:
        scores[LanguageMode.ENGLISH] += english_matches * ENGLISH_MATCH_WEIGHT

    winner = DETECTION_PRIORITY[0]
    for mode in DETECTION_PRIORITY[1:]:
        if scores[mode] > scores[winner]:
            winner = mode

    if scores[winner] < MIN_WINNING_SCORE:
        return DEFAULT_LANGUAGE
    return winner


def _english_only_sentences(text: str) -> list[str]:
    sentences = []
    for sentence in SENTENCE_DELIMITER.split(text):
        words = sentence.split()
        if len(words) > MIXED_SENTENCE_MIN_WORDS and not HINDI_MIXING_PATTERN.search(sentence):
            sentences.append(sentence)
    return sentences


def validate_language(text: str, selected_language: LanguageMode | str) -> list[str]:
    """Return human-readable reasons why text does not fit the selected mode.

    One entry is produced per offending pattern group, so the list length
    is not a severity score. An empty list means the text is compliant.
    """
    mode = clamp_language_mode(selected_language)
    text = text or ""
    violations: list[str] = []

    if mode is LanguageMode.ENGLISH:
        for pattern in HINDI_CORE_PATTERNS:
            if pattern.search(text):
                violations.append("Contains Hindi words (forbidden in English mode)")
        if DEVANAGARI_CHAR.search(text):
            violations.append("Contains Devanagari script (forbidden in English mode)")
        if GUJARATI_CHAR.search(text):
            violations.append("Contains Gujarati script (forbidden in English mode)")

    elif mode is LanguageMode.HINGLISH:
        if DEVANAGARI_CHAR.search(text):
            violations.append(
                "Contains Devanagari script (forbidden in Hinglish mode - use Roman Hindi only)"
            )
        if GUJARATI_CHAR.search(text):
            violations.append("Contains Gujarati script (forbidden in Hinglish mode)")
        for _ in _english_only_sentences(text):
            violations.append(
                "Contains fully English paragraph (forbidden in Hinglish mode - mix Hindi and English)"
            )

    else:
        if DEVANAGARI_CHAR.search(text):
            violations.append("Contains Devanagari/Hindi script (forbidden in Gujarati mode)")
        for pattern in HINDI_CORE_PATTERNS:
            if pattern.search(text):
                violations.append("Contains Roman Hindi words (forbidden in Gujarati mode)")

    return violations


def get_fallback_language(user_input: str | None = None) -> LanguageMode:
    """Pick a mode for a user who has not chosen one yet."""
    if user_input and user_input.strip():
        return detect_language(user_input)
    return DEFAULT_LANGUAGE


def output_language_label(language: LanguageMode | str) -> str:
    return _LABELS.get(coerce_language_mode(language), _LABELS[DEFAULT_LANGUAGE])
