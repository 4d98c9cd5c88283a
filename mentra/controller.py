"""Per-session language mode controller.

A ``LanguageSession`` owns the selected mode for one user session. It is the
only place the selection changes; everything it calls is a pure function.
Sessions are never shared between users, so a server keeps one per session
id (see ``SessionRegistry``).
"""

from __future__ import annotations

import json
import logging
import os
import re
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Protocol

from mentra.language import (
    DEFAULT_LANGUAGE,
    LanguageMode,
    coerce_language_mode,
    get_fallback_language,
    validate_language,
)
from mentra.repair import auto_repair_response
from mentra.voice import get_voice_output_language, process_voice_transcript

logger = logging.getLogger(__name__)

LANGUAGE_STORAGE_KEY = "mentraai_language"
VOICE_ADOPTION_CONFIDENCE = 0.7
DEFAULT_MAX_SESSIONS = 1024


class PreferenceStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryPreferenceStore:
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFilePreferenceStore:
    """Key-value preferences kept in a small JSON file, written atomically."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable preference file %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): str(value) for key, value in data.items()}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, self._path)


@dataclass(frozen=True)
class PreparedResponse:
    final_response: str
    language: LanguageMode
    had_violations: bool
    violations: list[str] = field(default_factory=list)
    repair_count: int = 0


@dataclass(frozen=True)
class VoiceInputResult:
    text: str
    detected_language: LanguageMode
    output_language: LanguageMode
    confidence: float


class LanguageSession:
    """Selected language state machine: unset (fallback active) -> active."""

    def __init__(self, store: Optional[PreferenceStore] = None):
        self._store: PreferenceStore = store if store is not None else InMemoryPreferenceStore()
        self._selected: Optional[LanguageMode] = None
        self._fallback_active = False
        self._load()

    def _load(self) -> None:
        saved = coerce_language_mode(self._store.get(LANGUAGE_STORAGE_KEY))
        if saved is None:
            self._fallback_active = True
            return
        self._selected = saved
        self._fallback_active = False

    @property
    def selected_language(self) -> Optional[LanguageMode]:
        return self._selected

    @property
    def effective_language(self) -> LanguageMode:
        return self._selected or DEFAULT_LANGUAGE

    @property
    def is_fallback_active(self) -> bool:
        return self._fallback_active

    def set_language(self, language: LanguageMode | str) -> bool:
        """Select and persist a mode. Invalid values are logged and ignored."""
        mode = coerce_language_mode(language)
        if mode is None:
            logger.error("Invalid language mode: %r", language)
            return False

        previous = self._selected
        self._selected = mode
        self._fallback_active = False
        if previous is not mode:
            logger.info(
                "Language mode %s -> %s",
                previous.value if previous else "unset",
                mode.value,
            )

        try:
            self._store.set(LANGUAGE_STORAGE_KEY, mode.value)
        except OSError:
            logger.exception("Could not persist language mode %s", mode.value)
        return True

    def resolve_output_language(self, user_input: Optional[str] = None) -> LanguageMode:
        """Return the reply language, adopting a detected one while in fallback."""
        if self._fallback_active:
            detected = get_fallback_language(user_input)
            logger.info("No language selected, adopting detected %s", detected.value)
            self.set_language(detected)
        return self.effective_language

    def prepare_response(self, response: str) -> PreparedResponse:
        """Auto-repair a response against the selected mode before it is shown."""
        target = self.resolve_output_language(response)
        result = auto_repair_response(response, target)
        return PreparedResponse(
            final_response=result.repaired,
            language=target,
            had_violations=result.had_violations,
            violations=result.violations,
            repair_count=result.repair_count,
        )

    def handle_voice_input(self, transcript: str) -> VoiceInputResult:
        voice = process_voice_transcript(transcript)
        output_language = get_voice_output_language(
            voice,
            None if self._fallback_active else self._selected,
        )

        if self._fallback_active and voice.confidence > VOICE_ADOPTION_CONFIDENCE:
            logger.info(
                "Adopting spoken language %s (confidence %.2f)",
                voice.detected_language.value,
                voice.confidence,
            )
            self.set_language(voice.detected_language)

        return VoiceInputResult(
            text=voice.text,
            detected_language=voice.detected_language,
            output_language=output_language,
            confidence=voice.confidence,
        )

    def validate_response(self, response: str) -> list[str]:
        return validate_language(response, self.effective_language)

    def snapshot(self) -> dict[str, object]:
        return {
            "selected_language": self._selected.value if self._selected else None,
            "effective_language": self.effective_language.value,
            "fallback_active": self._fallback_active,
        }


_SESSION_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")


def is_valid_session_id(session_id: str) -> bool:
    return bool(_SESSION_ID.fullmatch(session_id or ""))


class SessionRegistry:
    """Thread-safe, size-capped map of session id to its own ``LanguageSession``.

    The least recently used session is dropped once ``max_sessions`` is
    exceeded. A dropped session reloads its saved mode from the store the
    next time it is requested.
    """

    def __init__(
        self,
        store_factory: Optional[Callable[[str], PreferenceStore]] = None,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._store_factory = store_factory or (lambda _session_id: InMemoryPreferenceStore())
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, LanguageSession] = OrderedDict()
        self._lock = threading.Lock()

    @classmethod
    def from_directory(
        cls, directory: str | Path, max_sessions: int = DEFAULT_MAX_SESSIONS
    ) -> "SessionRegistry":
        base = Path(directory)
        return cls(
            lambda session_id: JsonFilePreferenceStore(base / f"{session_id}.json"),
            max_sessions=max_sessions,
        )

    def get(self, session_id: str) -> LanguageSession:
        if not is_valid_session_id(session_id):
            raise ValueError("session_id must be 1-64 characters of letters, digits, '-' or '_'")
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
                return session

            session = LanguageSession(self._store_factory(session_id))
            self._sessions[session_id] = session
            while len(self._sessions) > self._max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.debug("Evicted idle language session %s", evicted)
            return session

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
