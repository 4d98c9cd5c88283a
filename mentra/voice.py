"""Voice transcript handling.

The spoken language is detected only to understand the user. The reply
language always comes from the user's selection when one exists, so a
Hinglish question never flips an English conversation to Hinglish.
"""

from __future__ import annotations

from dataclasses import dataclass

from mentra.language import LanguageMode, clamp_language_mode, detect_language
from mentra.lexicon import GUJARATI_CHAR, VOICE_ENGLISH_PATTERN, VOICE_HINDI_PATTERN

BASE_CONFIDENCE = 0.5

# (minimum exclusive match count, confidence), strongest first.
_CONFIDENCE_BUCKETS = {
    LanguageMode.GUJARATI: ((10, 0.95), (5, 0.8)),
    LanguageMode.HINGLISH: ((5, 0.9), (2, 0.75)),
    LanguageMode.ENGLISH: ((5, 0.85), (2, 0.7)),
}


@dataclass(frozen=True)
class VoiceTranscript:
    text: str
    detected_language: LanguageMode
    confidence: float


@dataclass(frozen=True)
class VoiceHandlingRules:
    transcribe: bool
    detect_language: bool
    ignore_for_output: bool
    use_selected_language: bool


VOICE_RULES = VoiceHandlingRules(
    transcribe=True,
    detect_language=True,
    ignore_for_output=True,
    use_selected_language=True,
)


def _signal_count(language: LanguageMode, transcript: str) -> int:
    if language is LanguageMode.GUJARATI:
        return len(GUJARATI_CHAR.findall(transcript))
    if language is LanguageMode.HINGLISH:
        return len(VOICE_HINDI_PATTERN.findall(transcript))
    return len(VOICE_ENGLISH_PATTERN.findall(transcript))


def process_voice_transcript(transcript: str) -> VoiceTranscript:
    """Detect the spoken language of a transcript with a bucketed confidence."""
    transcript = transcript or ""
    detected = detect_language(transcript)
    matches = _signal_count(detected, transcript)

    confidence = BASE_CONFIDENCE
    for threshold, bucket in _CONFIDENCE_BUCKETS[detected]:
        if matches > threshold:
            confidence = bucket
            break

    return VoiceTranscript(text=transcript, detected_language=detected, confidence=confidence)


def get_voice_output_language(
    voice_transcript: VoiceTranscript,
    selected_language: LanguageMode | str | None,
) -> LanguageMode:
    """Pick the reply language for a transcript.

    An unknown selection is clamped to English rather than treated as unset.
    """
    if selected_language is None:
        return voice_transcript.detected_language
    return clamp_language_mode(selected_language)
