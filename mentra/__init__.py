"""MentraAI language mode control package."""

from mentra.controller import (
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    LanguageSession,
    PreparedResponse,
    SessionRegistry,
    VoiceInputResult,
)
from mentra.engine import MentorResult, MentorRunConfig, run_mentor_explanation
from mentra.language import (
    LanguageMode,
    detect_language,
    get_fallback_language,
    is_valid_language_mode,
    output_language_label,
    validate_language,
)
from mentra.llm_client import LLMClientError, OpenAIChatClient
from mentra.repair import RepairResult, auto_repair_response, validate_before_send
from mentra.voice import VOICE_RULES, VoiceTranscript, get_voice_output_language, process_voice_transcript

__all__ = [
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "LLMClientError",
    "LanguageMode",
    "LanguageSession",
    "MentorResult",
    "MentorRunConfig",
    "OpenAIChatClient",
    "PreparedResponse",
    "RepairResult",
    "SessionRegistry",
    "VOICE_RULES",
    "VoiceInputResult",
    "VoiceTranscript",
    "auto_repair_response",
    "detect_language",
    "get_fallback_language",
    "get_voice_output_language",
    "is_valid_language_mode",
    "output_language_label",
    "process_voice_transcript",
    "run_mentor_explanation",
    "validate_before_send",
    "validate_language",
]
