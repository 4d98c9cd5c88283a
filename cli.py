from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from mentra import (
    JsonFilePreferenceStore,
    LanguageMode,
    LanguageSession,
    LLMClientError,
    MentorRunConfig,
    OpenAIChatClient,
    auto_repair_response,
    detect_language,
    output_language_label,
    run_mentor_explanation,
    validate_language,
)
from mentra.engine import EXPLAIN_MODES

LANGUAGE_CHOICES = [mode.value for mode in LanguageMode]
DEFAULT_PREFERENCES_PATH = Path.home() / ".mentra" / "preferences.json"


def _read_text(args: argparse.Namespace) -> str:
    if args.file:
        return Path(args.file).read_text(encoding="utf-8")
    if args.text is not None:
        return args.text
    return sys.stdin.read()


def _add_text_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("text", nargs="?", default=None, help="Text to check (defaults to stdin)")
    parser.add_argument("--file", help="Read text from a file", default=None)


def _session(args: argparse.Namespace) -> LanguageSession:
    session = LanguageSession(JsonFilePreferenceStore(args.preferences))
    if args.language:
        session.set_language(args.language)
    return session


def main() -> int:
    parser = argparse.ArgumentParser(description="MentraAI language mode tools")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--preferences",
        default=os.getenv("MENTRA_PREFERENCES_FILE", str(DEFAULT_PREFERENCES_PATH)),
        help="Where the selected language is stored",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    detect_parser = subparsers.add_parser("detect", help="Detect the language mode of a text")
    _add_text_args(detect_parser)

    validate_parser = subparsers.add_parser("validate", help="List language violations")
    _add_text_args(validate_parser)
    validate_parser.add_argument("--language", choices=LANGUAGE_CHOICES, required=True)

    repair_parser = subparsers.add_parser("repair", help="Auto-repair a text for a language mode")
    _add_text_args(repair_parser)
    repair_parser.add_argument("--language", choices=LANGUAGE_CHOICES, required=True)

    voice_parser = subparsers.add_parser("voice", help="Process a voice transcript")
    _add_text_args(voice_parser)
    voice_parser.add_argument("--language", choices=LANGUAGE_CHOICES, default=None)

    explain_parser = subparsers.add_parser("explain", help="Ask the mentor to explain a topic")
    explain_parser.add_argument("topic")
    explain_parser.add_argument("--language", choices=LANGUAGE_CHOICES, default=None)
    explain_parser.add_argument("--mode", choices=list(EXPLAIN_MODES), default="2min")
    explain_parser.add_argument("--preset", choices=["core", "exam", "simple"], default="core")
    explain_parser.add_argument("--name", help="Student first name", default=None)
    explain_parser.add_argument("--model", default=os.getenv("OPENAI_MODEL", "gpt-4.1-mini"))
    explain_parser.add_argument("--temperature", type=float, default=0.7)
    explain_parser.add_argument("--max-tokens", type=int, default=1500)

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "detect":
        language = detect_language(_read_text(args))
        print(f"{language.value} ({output_language_label(language)})")
        return 0

    if args.command == "validate":
        violations = validate_language(_read_text(args), args.language)
        for violation in violations:
            print(f"- {violation}")
        if not violations:
            print(f"OK: text fits {args.language} mode")
        return 1 if violations else 0

    if args.command == "repair":
        result = auto_repair_response(_read_text(args), args.language)
        print(result.repaired)
        if result.had_violations:
            print(
                f"[repair] {len(result.violations)} violation(s), {result.repair_count} repair(s)",
                file=sys.stderr,
            )
        return 0

    session = _session(args)

    if args.command == "voice":
        result = session.handle_voice_input(_read_text(args))
        print(
            json.dumps(
                {
                    "text": result.text,
                    "detected_language": result.detected_language.value,
                    "output_language": result.output_language.value,
                    "confidence": result.confidence,
                },
                ensure_ascii=False,
                indent=2,
            )
        )
        return 0

    if not os.getenv("OPENAI_API_KEY"):
        raise SystemExit("OPENAI_API_KEY is not set")

    def progress(stage: str, message: str) -> None:
        print(f"[{stage}] {message}", file=sys.stderr)

    result = run_mentor_explanation(
        topic=args.topic,
        llm_client=OpenAIChatClient(base_url=os.getenv("OPENAI_BASE_URL")),
        config=MentorRunConfig(
            model=args.model,
            temperature=args.temperature,
            max_tokens=args.max_tokens,
            mode=args.mode,
            preset=args.preset,
        ),
        session=session,
        first_name=args.name,
        progress=progress,
    )
    print(result.response)
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except (ValueError, LLMClientError) as exc:
        raise SystemExit(str(exc))
