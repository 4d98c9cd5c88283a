"""Best-effort rewriting of responses that break the selected language mode."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from mentra.language import (
    DEFAULT_LANGUAGE,
    MIXED_SENTENCE_MIN_WORDS,
    LanguageMode,
    coerce_language_mode,
    validate_language,
)
from mentra.lexicon import (
    DEVANAGARI_CHAR,
    ENGLISH_TO_HINGLISH,
    GUJARATI_CHAR,
    HINDI_CORE_WORDS,
    HINDI_MIXING_PATTERN,
    HINDI_TO_ENGLISH,
    match_case,
    word_pattern,
)

logger = logging.getLogger(__name__)

_HINDI_TO_ENGLISH_PATTERN = word_pattern(HINDI_TO_ENGLISH)
_ENGLISH_TO_HINGLISH_PATTERN = word_pattern(ENGLISH_TO_HINGLISH)
_GUJARATI_MODE_REMOVALS = tuple(word_pattern([word]) for word in HINDI_CORE_WORDS)
_SENTENCE_SPLIT = re.compile(r"([.!?]+)")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class RepairResult:
    repaired: str
    had_violations: bool
    violations: list[str] = field(default_factory=list)
    repair_count: int = 0


def _substitute(pattern: re.Pattern[str], table: dict[str, str], text: str) -> tuple[str, set[str]]:
    """Replace every table word in one pass, returning the keys that fired."""
    used: set[str] = set()

    def replace(match: re.Match[str]) -> str:
        word = match.group(0)
        key = word.lower()
        used.add(key)
        return match_case(word, table[key])

    return pattern.sub(replace, text), used


def _strip_script(pattern: re.Pattern[str], text: str) -> tuple[str, int]:
    if not pattern.search(text):
        return text, 0
    return pattern.sub("", text), 1


def _repair_english(text: str) -> tuple[str, int]:
    text, used = _substitute(_HINDI_TO_ENGLISH_PATTERN, HINDI_TO_ENGLISH, text)
    count = len(used)
    text, stripped = _strip_script(DEVANAGARI_CHAR, text)
    count += stripped
    text, stripped = _strip_script(GUJARATI_CHAR, text)
    return text, count + stripped


def _repair_hinglish(text: str) -> tuple[str, int]:
    text, count = _strip_script(DEVANAGARI_CHAR, text)
    text, stripped = _strip_script(GUJARATI_CHAR, text)
    count += stripped

    parts = _SENTENCE_SPLIT.split(text)
    for idx, part in enumerate(parts):
        if idx % 2:
            continue
        if len(part.split()) > MIXED_SENTENCE_MIN_WORDS and not HINDI_MIXING_PATTERN.search(part):
            parts[idx], _ = _substitute(_ENGLISH_TO_HINGLISH_PATTERN, ENGLISH_TO_HINGLISH, part)
            count += 1
    return "".join(parts), count


def _repair_gujarati(text: str) -> tuple[str, int]:
    text, count = _strip_script(DEVANAGARI_CHAR, text)
    for pattern in _GUJARATI_MODE_REMOVALS:
        if pattern.search(text):
            text = pattern.sub("", text)
            count += 1
    return text, count


_REPAIRERS = {
    LanguageMode.ENGLISH: _repair_english,
    LanguageMode.HINGLISH: _repair_hinglish,
    LanguageMode.GUJARATI: _repair_gujarati,
}


def auto_repair_response(response: str, selected_language: LanguageMode | str) -> RepairResult:
    """Patch a response so it fits the selected mode as closely as possible.

    Compliant text is returned untouched. Otherwise words are swapped via the
    lexicon tables, forbidden scripts are stripped and whitespace is collapsed.
    The result can still carry violations for noisy mixed-script input.
    """
    response = response or ""
    violations = validate_language(response, selected_language)
    mode = coerce_language_mode(selected_language) or DEFAULT_LANGUAGE
    if not violations:
        return RepairResult(repaired=response, had_violations=False)

    repaired, repair_count = _REPAIRERS[mode](response)
    repaired = _WHITESPACE.sub(" ", repaired).strip()

    logger.debug(
        "Repaired %s response: %d violation(s), %d repair(s)",
        mode.value,
        len(violations),
        repair_count,
    )
    return RepairResult(
        repaired=repaired,
        had_violations=True,
        violations=violations,
        repair_count=repair_count,
    )


def validate_before_send(response: str, selected_language: LanguageMode | str) -> bool:
    return not validate_language(response, selected_language)
