"""Shared word lists and script ranges for language mode classification."""

from __future__ import annotations

import re
from typing import Iterable


DEVANAGARI_RANGE = "\u0900-\u097F"
GUJARATI_RANGE = "\u0A80-\u0AFF"

DEVANAGARI_CHAR = re.compile(f"[{DEVANAGARI_RANGE}]")
GUJARATI_CHAR = re.compile(f"[{GUJARATI_RANGE}]")

SENTENCE_DELIMITER = re.compile(r"[.!?]+")

# Romanized Hindi function words, grouped by role.
HINDI_COPULAS_POSTPOSITIONS = (
    "hai", "hain", "ho", "tha", "thi", "the",
    "ka", "ki", "ke", "ko", "se", "me", "pe", "par",
)
HINDI_QUESTION_WORDS = ("kya", "kaise", "kab", "kahan", "kyun", "kaun", "kitna")
HINDI_CONNECTIVES = ("aur", "ya", "lekin", "kyunki", "agar", "to")
HINDI_COLLOQUIALISMS = ("samajh", "bhai", "yaar", "dekh", "sun", "bol", "kar", "le", "de")
HINDI_NEGATION_PRONOUNS = ("nahi", "nahin", "mat", "mujhe", "tumhe", "usko", "isko")
HINDI_SENTIMENT = ("achha", "thik", "sahi", "galat", "badiya", "mast")

HINDI_FUNCTION_WORD_GROUPS = (
    HINDI_COPULAS_POSTPOSITIONS,
    HINDI_QUESTION_WORDS,
    HINDI_CONNECTIVES,
    HINDI_COLLOQUIALISMS,
    HINDI_NEGATION_PRONOUNS,
    HINDI_SENTIMENT,
)

# Groups that mark a text as Hindi-contaminated in English and Gujarati modes.
HINDI_CORE_GROUPS = (
    HINDI_COPULAS_POSTPOSITIONS,
    HINDI_QUESTION_WORDS,
    HINDI_COLLOQUIALISMS,
)
HINDI_CORE_WORDS = tuple(word for group in HINDI_CORE_GROUPS for word in group)

# Words whose presence makes a sentence count as mixed Hinglish.
HINDI_MIXING_WORDS = (
    "hai", "hain", "ho", "ka", "ki", "ke", "ko", "se", "me", "pe", "par",
    "kya", "kaise", "samajh", "bhai", "yaar", "dekh", "sun", "bol", "kar", "le", "de",
    "nahi", "mujhe", "tumhe", "aur", "ya", "lekin",
)
VOICE_HINDI_WORDS = HINDI_MIXING_WORDS[:22]

ENGLISH_AUXILIARIES = (
    "the", "is", "are", "was", "were", "have", "has", "had",
    "will", "would", "should", "could",
)
ENGLISH_QUESTION_WORDS = ("what", "when", "where", "why", "how", "who", "which")
ENGLISH_CONNECTIVES = ("and", "or", "but", "because", "if", "then", "so")
ENGLISH_ACADEMIC_VERBS = ("explain", "understand", "help", "learn", "study", "teach")

ENGLISH_FUNCTION_WORD_GROUPS = (
    ENGLISH_AUXILIARIES,
    ENGLISH_QUESTION_WORDS,
    ENGLISH_CONNECTIVES,
    ENGLISH_ACADEMIC_VERBS,
)
VOICE_ENGLISH_WORDS = ENGLISH_AUXILIARIES + ENGLISH_QUESTION_WORDS[:5]

HINDI_TO_ENGLISH = {
    "hai": "is",
    "hain": "are",
    "ho": "are",
    "tha": "was",
    "thi": "was",
    "the": "were",
    "ka": "of",
    "ki": "of",
    "ke": "of",
    "ko": "to",
    "se": "from",
    "me": "in",
    "pe": "on",
    "par": "but",
    "kya": "what",
    "kaise": "how",
    "kab": "when",
    "kahan": "where",
    "kyun": "why",
    "kaun": "who",
    "kitna": "how much",
    "aur": "and",
    "ya": "or",
    "lekin": "but",
    "kyunki": "because",
    "agar": "if",
    "to": "then",
    "samajh": "understand",
    "bhai": "friend",
    "yaar": "friend",
    "dekh": "see",
    "sun": "listen",
    "bol": "say",
    "kar": "do",
    "le": "take",
    "de": "give",
    "nahi": "no",
    "nahin": "not",
    "mat": "don't",
    "mujhe": "me",
    "tumhe": "you",
    "usko": "him/her",
    "isko": "this",
    "achha": "good",
    "thik": "okay",
    "sahi": "correct",
    "galat": "wrong",
    "badiya": "great",
    "mast": "awesome",
}

# Light Hinglish flavoring for long English-only sentences. Not a translator.
ENGLISH_TO_HINGLISH = {
    "understand": "samajh",
    "friend": "yaar",
    "is": "hai",
    "are": "hain",
    "and": "aur",
    "or": "ya",
    "but": "lekin",
}


def word_pattern(words: Iterable[str]) -> re.Pattern[str]:
    """Compile a case-insensitive whole-word alternation."""
    alternation = "|".join(re.escape(word) for word in words)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


def count_matches(patterns: Iterable[re.Pattern[str]], text: str) -> int:
    return sum(len(pattern.findall(text)) for pattern in patterns)


def match_case(source: str, replacement: str) -> str:
    """Carry the capitalization of ``source`` over to ``replacement``."""
    if len(source) > 1 and source.isupper():
        return replacement.upper()
    if source[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


HINDI_FUNCTION_PATTERNS = tuple(word_pattern(group) for group in HINDI_FUNCTION_WORD_GROUPS)
HINDI_CORE_PATTERNS = tuple(word_pattern(group) for group in HINDI_CORE_GROUPS)
HINDI_MIXING_PATTERN = word_pattern(HINDI_MIXING_WORDS)
VOICE_HINDI_PATTERN = word_pattern(VOICE_HINDI_WORDS)
ENGLISH_FUNCTION_PATTERNS = tuple(word_pattern(group) for group in ENGLISH_FUNCTION_WORD_GROUPS)
VOICE_ENGLISH_PATTERN = word_pattern(VOICE_ENGLISH_WORDS)
