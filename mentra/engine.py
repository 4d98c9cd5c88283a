"""Mentor explanation pipeline: pick the reply language, prompt the LLM, repair the answer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from mentra.controller import LanguageSession
from mentra.language import LanguageMode, output_language_label
from mentra.llm_client import LLMConfig, OpenAIChatClient
from mentra.prompts import (
    DEFAULT_EXPLAIN_PRESET,
    get_2min_concept_prompt,
    get_career_prompt,
    get_deep_dive_prompt,
    personalize_prompt,
)

ProgressCallback = Callable[[str, str], None]

EXPLAIN_MODES = ("2min", "deep-dive", "career")
MIN_TOPIC_CHARS = 3
MAX_TOPIC_CHARS = 2_000

TWO_MIN_TOKEN_CAP = 900
DEEP_DIVE_TOKEN_CAP = 2000
CAREER_TOKEN_CAP = 1500


@dataclass(frozen=True)
class MentorRunConfig:
    model: str = "gpt-4.1-mini"
    temperature: float = 0.7
    max_tokens: int = 1500
    mode: str = "2min"  # 2min | deep-dive | career
    preset: str = DEFAULT_EXPLAIN_PRESET  # core | exam | simple, 2min only


@dataclass(frozen=True)
class MentorResult:
    topic: str
    mode: str
    language: LanguageMode
    response: str
    raw_response: str
    had_violations: bool
    violations: list[str] = field(default_factory=list)
    repair_count: int = 0


def _notify(progress: ProgressCallback | None, stage: str, message: str) -> None:
    if progress:
        progress(stage, message)


def _clean_topic(topic: str | None) -> str:
    clean = " ".join((topic or "").split())
    if len(clean) < MIN_TOPIC_CHARS:
        raise ValueError(
            "Please provide a complete topic name. Example: \"Photosynthesis\", "
            "\"Newton's Laws\", \"Quadratic Equations\""
        )
    return clean[:MAX_TOPIC_CHARS]


def _system_prompt(mode: str, preset: str, language: LanguageMode) -> tuple[str, int]:
    if mode == "deep-dive":
        return get_deep_dive_prompt(language), DEEP_DIVE_TOKEN_CAP
    if mode == "career":
        return get_career_prompt(language), CAREER_TOKEN_CAP
    return get_2min_concept_prompt(language, preset), TWO_MIN_TOKEN_CAP


def run_mentor_explanation(
    *,
    topic: str,
    llm_client: OpenAIChatClient,
    config: MentorRunConfig,
    session: LanguageSession,
    first_name: str | None = None,
    progress: ProgressCallback | None = None,
) -> MentorResult:
    mode = config.mode.lower().strip()
    if mode not in EXPLAIN_MODES:
        raise ValueError(f"mode must be one of {list(EXPLAIN_MODES)}")
    clean_topic = _clean_topic(topic)

    language = session.resolve_output_language(clean_topic)
    _notify(progress, "setup", f"Output language: {output_language_label(language)}")

    system_prompt, token_cap = _system_prompt(mode, config.preset, language)

    _notify(progress, "generate", f"Requesting {mode} explanation")
    raw = llm_client.complete(
        system_prompt=personalize_prompt(system_prompt, first_name),
        user_prompt=f"Topic: {clean_topic}",
        config=LLMConfig(
            model=config.model,
            temperature=config.temperature,
            max_tokens=min(config.max_tokens, token_cap),
        ),
    )

    _notify(progress, "repair", "Checking response language")
    prepared = session.prepare_response(raw)
    if prepared.had_violations:
        _notify(
            progress,
            "repair",
            f"Repaired {len(prepared.violations)} language violation(s)",
        )

    _notify(progress, "done", "Explanation ready")
    return MentorResult(
        topic=clean_topic,
        mode=mode,
        language=prepared.language,
        response=prepared.final_response,
        raw_response=raw,
        had_violations=prepared.had_violations,
        violations=prepared.violations,
        repair_count=prepared.repair_count,
    )
