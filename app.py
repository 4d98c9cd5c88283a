from __future__ import annotations

import os

import streamlit as st

from mentra import (
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


st.set_page_config(page_title="MentraAI Language Control", layout="wide")

st.title("MentraAI Language Control")
st.caption(
    "Detect whether a text is English, Hinglish or Gujarati, check it against a "
    "selected mode, and auto-repair violations before a response reaches the student."
)

if "language_session" not in st.session_state:
    st.session_state.language_session = LanguageSession()
session: LanguageSession = st.session_state.language_session

language_options = [mode.value for mode in LanguageMode]

with st.sidebar:
    st.header("Language Mode")
    current = session.selected_language
    choice = st.selectbox(
        "Selected language",
        options=["(not selected)"] + language_options,
        index=0 if current is None else language_options.index(current.value) + 1,
        help="Without a selection the next text or voice input decides the language.",
    )
    if choice != "(not selected)" and (current is None or choice != current.value):
        session.set_language(choice)
    st.json(session.snapshot())

    st.divider()
    st.header("Mentor (optional)")
    api_key = st.text_input(
        "OPENAI_API_KEY",
        value=os.getenv("OPENAI_API_KEY", ""),
        type="password",
        help="Required only for the mentor tab.",
    )
    base_url = st.text_input(
        "OPENAI_BASE_URL (optional)",
        value=os.getenv("OPENAI_BASE_URL", ""),
        help="Use if routing through a compatible gateway.",
    )
    model = st.text_input("Model", value=os.getenv("OPENAI_MODEL", "gpt-4.1-mini"))

text_tab, voice_tab, mentor_tab = st.tabs(["Analyze Text", "Voice Input", "Ask Mentor"])

with text_tab:
    text = st.text_area(
        "Text",
        placeholder="Photosynthesis kya hai yaar, samajh nahi aa raha",
        height=160,
    )
    target = st.selectbox("Check against", options=language_options, key="target_language")

    if st.button("Analyze", type="primary", use_container_width=True):
        detected = detect_language(text)
        st.metric("Detected", output_language_label(detected))

        violations = validate_language(text, target)
        if violations:
            st.warning("\n".join(f"- {item}" for item in violations))
        else:
            st.success(f"Text fits {target} mode")

        result = auto_repair_response(text, target)
        st.markdown("### Repaired")
        st.text(result.repaired)
        st.caption(f"Repairs applied: {result.repair_count}")

with voice_tab:
    transcript = st.text_input(
        "Transcript",
        placeholder="Mujhe photosynthesis ke baare me batao",
    )
    if st.button("Process transcript", use_container_width=True):
        voice = session.handle_voice_input(transcript)
        col_left, col_right, col_conf = st.columns(3)
        col_left.metric("Spoken", voice.detected_language.value)
        col_right.metric("Reply in", voice.output_language.value)
        col_conf.metric("Confidence", f"{voice.confidence:.0%}")
        st.info("The reply language follows the selected mode, never the spoken language.")

with mentor_tab:
    topic = st.text_input("Topic", placeholder="Photosynthesis")
    mode = st.selectbox("Explanation", options=list(EXPLAIN_MODES))
    preset = st.selectbox("Style (2min only)", options=["core", "exam", "simple"])

    if st.button("Ask mentor", type="primary", use_container_width=True):
        if not api_key.strip():
            st.error("OPENAI_API_KEY is required.")
            st.stop()

        status = st.status("Asking mentor", expanded=True)

        def on_progress(stage: str, message: str) -> None:
            status.write(f"[{stage}] {message}")

        try:
            client = OpenAIChatClient(api_key=api_key.strip(), base_url=base_url.strip() or None)
            result = run_mentor_explanation(
                topic=topic,
                llm_client=client,
                config=MentorRunConfig(model=model.strip(), mode=mode, preset=preset),
                session=session,
                progress=on_progress,
            )
            status.update(label="Explanation ready", state="complete", expanded=False)
            st.markdown(result.response)
            if result.had_violations:
                st.caption(
                    f"Auto-repaired {len(result.violations)} language violation(s) "
                    f"for {result.language.value} mode."
                )
        except (ValueError, LLMClientError) as exc:
            status.update(label="Run failed", state="error", expanded=True)
            st.error(str(exc))
        except Exception as exc:  # pragma: no cover - UI fallback
            status.update(label="Run failed", state="error", expanded=True)
            st.error(f"Unexpected error: {exc}")
