from __future__ import annotations

import os
from typing import Any, Optional

from fastapi import FastAPI, Form, HTTPException

from mentra import (
    LanguageMode,
    LLMClientError,
    MentorRunConfig,
    OpenAIChatClient,
    SessionRegistry,
    auto_repair_response,
    detect_language,
    output_language_label,
    run_mentor_explanation,
    validate_language,
)
from mentra.controller import DEFAULT_MAX_SESSIONS, LanguageSession
from mentra.engine import EXPLAIN_MODES
from mentra.language import coerce_language_mode

DEFAULT_SESSION_ID = "default"
DEFAULT_ALLOWED_MODELS = {"gpt-4.1-mini", "gpt-4.1"}
MAX_TEXT_CHARS = 20_000


def _load_allowed_models() -> set[str]:
    raw = os.getenv("ALLOWED_MODELS", "").strip()
    if not raw:
        return DEFAULT_ALLOWED_MODELS
    parsed = {item.strip() for item in raw.split(",") if item.strip()}
    return parsed or DEFAULT_ALLOWED_MODELS


def _build_registry() -> SessionRegistry:
    max_sessions = int(os.getenv("MENTRA_MAX_SESSIONS", str(DEFAULT_MAX_SESSIONS)))
    directory = os.getenv("MENTRA_PREFERENCES_DIR", "").strip()
    if directory:
        return SessionRegistry.from_directory(directory, max_sessions=max_sessions)
    return SessionRegistry(max_sessions=max_sessions)


app = FastAPI(title="MentraAI Language Control")
registry = _build_registry()


def _require_language(language: str) -> LanguageMode:
    mode = coerce_language_mode(language.strip())
    if mode is None:
        raise HTTPException(
            status_code=400,
            detail=f"language must be one of {[item.value for item in LanguageMode]}",
        )
    return mode


def _require_text(text: str, field_name: str = "text") -> str:
    if len(text) > MAX_TEXT_CHARS:
        raise HTTPException(
            status_code=413,
            detail=f"{field_name} must be at most {MAX_TEXT_CHARS} characters",
        )
    return text


def _session(session_id: str) -> LanguageSession:
    try:
        return registry.get(session_id.strip())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "service": "mentra-language"}


@app.post("/api/language/detect")
def detect(text: str = Form(default="")) -> dict[str, Any]:
    language = detect_language(_require_text(text))
    return {"ok": True, "language": language.value, "label": output_language_label(language)}


@app.post("/api/language/validate")
def validate(text: str = Form(default=""), language: str = Form(...)) -> dict[str, Any]:
    mode = _require_language(language)
    violations = validate_language(_require_text(text), mode)
    return {
        "ok": True,
        "language": mode.value,
        "compliant": not violations,
        "violations": violations,
    }


@app.post("/api/language/repair")
def repair(text: str = Form(default=""), language: str = Form(...)) -> dict[str, Any]:
    mode = _require_language(language)
    result = auto_repair_response(_require_text(text), mode)
    return {
        "ok": True,
        "language": mode.value,
        "repaired": result.repaired,
        "had_violations": result.had_violations,
        "violations": result.violations,
        "repair_count": result.repair_count,
    }


@app.post("/api/language/select")
def select(language: str = Form(...), session_id: str = Form(default=DEFAULT_SESSION_ID)) -> dict[str, Any]:
    mode = _require_language(language)
    session = _session(session_id)
    session.set_language(mode)
    return {"ok": True, "session_id": session_id, **session.snapshot()}


@app.get("/api/language/session")
def session_state(session_id: str = DEFAULT_SESSION_ID) -> dict[str, Any]:
    session = _session(session_id)
    return {"ok": True, "session_id": session_id, **session.snapshot()}


@app.post("/api/language/voice")
def voice(transcript: str = Form(...), session_id: str = Form(default=DEFAULT_SESSION_ID)) -> dict[str, Any]:
    session = _session(session_id)
    result = session.handle_voice_input(_require_text(transcript, "transcript"))
    return {
        "ok": True,
        "session_id": session_id,
        "text": result.text,
        "detected_language": result.detected_language.value,
        "output_language": result.output_language.value,
        "confidence": result.confidence,
        **session.snapshot(),
    }


@app.post("/api/explain")
def explain(
    topic: str = Form(...),
    session_id: str = Form(default=DEFAULT_SESSION_ID),
    mode: str = Form(default="2min"),
    preset: str = Form(default="core"),
    first_name: Optional[str] = Form(default=None),
    model: str = Form(default="gpt-4.1-mini"),
    temperature: float = Form(default=0.7),
    max_tokens: int = Form(default=1500),
) -> dict[str, Any]:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise HTTPException(status_code=500, detail="Server is missing OPENAI_API_KEY.")

    requested_mode = mode.strip().lower()
    if requested_mode not in EXPLAIN_MODES:
        raise HTTPException(status_code=400, detail=f"mode must be one of {list(EXPLAIN_MODES)}")

    requested_model = model.strip() or "gpt-4.1-mini"
    allowed_models = _load_allowed_models()
    if requested_model not in allowed_models:
        raise HTTPException(
            status_code=400,
            detail="model is not allowed. Allowed models: " + ", ".join(sorted(allowed_models)),
        )

    if max_tokens < 200 or max_tokens > 4000:
        raise HTTPException(status_code=400, detail="max_tokens must be between 200 and 4000")

    if temperature < 0 or temperature > 1:
        raise HTTPException(status_code=400, detail="temperature must be between 0 and 1")

    session = _session(session_id)

    try:
        client = OpenAIChatClient(api_key=api_key, base_url=os.getenv("OPENAI_BASE_URL"))
        result = run_mentor_explanation(
            topic=topic,
            llm_client=client,
            config=MentorRunConfig(
                model=requested_model,
                temperature=temperature,
                max_tokens=max_tokens,
                mode=requested_mode,
                preset=preset,
            ),
            session=session,
            first_name=first_name,
        )
    except HTTPException:
        raise
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except LLMClientError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except Exception as exc:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {exc}") from exc

    return {
        "ok": True,
        "session_id": session_id,
        "topic": result.topic,
        "mode": result.mode,
        "language": result.language.value,
        "response": result.response,
        "had_violations": result.had_violations,
        "violations": result.violations,
        "repair_count": result.repair_count,
    }
