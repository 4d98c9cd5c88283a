import pytest

from mentra.controller import LanguageSession
from mentra.engine import MentorRunConfig, run_mentor_explanation
from mentra.language import LanguageMode


class FakeLLMClient:
    def __init__(self, reply: str):
        self.reply = reply
        self.calls = []

    def complete(self, *, system_prompt, user_prompt, config, retries=2):
        self.calls.append(
            {"system_prompt": system_prompt, "user_prompt": user_prompt, "config": config}
        )
        return self.reply


def test_explanation_is_repaired_to_selected_language() -> None:
    session = LanguageSession()
    session.set_language("English")
    client = FakeLLMClient("Photosynthesis ek process hai jisme plants sunlight use karte hain")
    stages = []

    result = run_mentor_explanation(
        topic="  Photosynthesis ",
        llm_client=client,
        config=MentorRunConfig(mode="2min"),
        session=session,
        first_name="Asha",
        progress=lambda stage, message: stages.append(stage),
    )

    assert result.topic == "Photosynthesis"
    assert result.language == LanguageMode.ENGLISH
    assert result.had_violations is True
    assert result.response == "Photosynthesis ek process is jisme plants sunlight use karte are"
    assert result.raw_response == client.reply
    assert stages[0] == "setup"
    assert stages[-1] == "done"

    call = client.calls[0]
    assert call["user_prompt"] == "Topic: Photosynthesis"
    assert "Reply in English only" in call["system_prompt"]
    assert "User's name: Asha" in call["system_prompt"]
    assert call["config"].max_tokens <= 900


def test_fallback_session_adopts_topic_language() -> None:
    session = LanguageSession()
    client = FakeLLMClient("Photosynthesis ek process hai jisme plants khana banate hain")

    result = run_mentor_explanation(
        topic="Photosynthesis kya hai yaar, samajh nahi aa raha",
        llm_client=client,
        config=MentorRunConfig(mode="deep-dive"),
        session=session,
    )

    assert result.language == LanguageMode.HINGLISH
    assert result.had_violations is False
    assert session.selected_language == LanguageMode.HINGLISH
    assert "Reply in Hinglish" in client.calls[0]["system_prompt"]
    assert "Step-by-Step Breakdown" in client.calls[0]["system_prompt"]


def test_career_mode_uses_career_prompt() -> None:
    session = LanguageSession()
    session.set_language("Gujarati")
    client = FakeLLMClient("ડેટા સાયન્સ એક સારો વિકલ્પ છે")

    result = run_mentor_explanation(
        topic="I like maths and computers",
        llm_client=client,
        config=MentorRunConfig(mode="Career"),
        session=session,
    )

    assert result.mode == "career"
    assert result.language == LanguageMode.GUJARATI
    assert "career guidance mentor" in client.calls[0]["system_prompt"]


def test_rejects_short_topic_and_unknown_mode() -> None:
    client = FakeLLMClient("unused")
    with pytest.raises(ValueError):
        run_mentor_explanation(
            topic="ab",
            llm_client=client,
            config=MentorRunConfig(),
            session=LanguageSession(),
        )
    with pytest.raises(ValueError):
        run_mentor_explanation(
            topic="Photosynthesis",
            llm_client=client,
            config=MentorRunConfig(mode="quiz"),
            session=LanguageSession(),
        )
    assert client.calls == []
