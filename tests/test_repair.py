import re

from mentra.language import LanguageMode, validate_language
from mentra.repair import auto_repair_response, validate_before_send

DEVANAGARI_OR_GUJARATI = re.compile("[\u0900-\u097F\u0A80-\u0AFF]")


def test_compliant_text_is_returned_unchanged() -> None:
    samples = [
        ("What is photosynthesis and how does it work?  ", LanguageMode.ENGLISH),
        ("Photosynthesis kya hai yaar", LanguageMode.HINGLISH),
        ("પ્રકાશસંશ્લેષણ એ process છે", LanguageMode.GUJARATI),
    ]
    for text, mode in samples:
        assert validate_language(text, mode) == []
        result = auto_repair_response(text, mode)
        assert result.repaired == text
        assert result.had_violations is False
        assert result.violations == []
        assert result.repair_count == 0


def test_english_repair_replaces_hindi_words() -> None:
    result = auto_repair_response("Yeh hai bhai", LanguageMode.ENGLISH)
    assert result.had_violations is True
    assert result.repair_count >= 1
    assert not re.search(r"\b(hai|bhai)\b", result.repaired, re.IGNORECASE)
    assert result.repaired == "Yeh is friend"


def test_english_repair_is_single_pass_and_keeps_case() -> None:
    result = auto_repair_response("Kya tum school ko jaoge? Nahi yaar", LanguageMode.ENGLISH)
    assert result.repaired == "What tum school to jaoge? No friend"
    assert result.repair_count == 4


def test_english_repair_rewrites_english_looking_hindi_words() -> None:
    result = auto_repair_response("The sun gives light to me", LanguageMode.ENGLISH)
    assert result.had_violations is True
    assert result.repaired == "Were listen gives light then in"
    assert result.repair_count == 4


def test_english_repair_strips_scripts() -> None:
    text = "Photosynthesis एक प्रक्रिया है and પ્રક્રિયા matters"
    result = auto_repair_response(text, "English")
    assert result.had_violations is True
    assert not DEVANAGARI_OR_GUJARATI.search(result.repaired)
    assert result.repaired == "Photosynthesis and matters"
    assert result.repair_count == 2


def test_english_repair_never_leaves_indic_script() -> None:
    samples = [
        "",
        "plain English text",
        "मुझे समझ नहीं आया",
        "મને photosynthesis વિશે જણાવો",
        "mixed हिंदी and ગુજરાતી kya hai",
    ]
    for text in samples:
        result = auto_repair_response(text, LanguageMode.ENGLISH)
        assert result.repaired is not None
        assert result.repair_count >= 0
        assert not DEVANAGARI_OR_GUJARATI.search(result.repaired)


def test_hinglish_repair_flavors_long_english_sentence() -> None:
    text = (
        "Photosynthesis is a process where green plants use sunlight and water "
        "to make their own food every single day."
    )
    result = auto_repair_response(text, LanguageMode.HINGLISH)
    assert result.had_violations is True
    assert result.repair_count == 1
    assert result.repaired == (
        "Photosynthesis hai a process where green plants use sunlight aur water "
        "to make their own food every single day."
    )


def test_hinglish_repair_strips_devanagari() -> None:
    text = "Photosynthesis एक प्रक्रिया है jisme plants sunlight use karte hain"
    result = auto_repair_response(text, LanguageMode.HINGLISH)
    assert result.repaired == "Photosynthesis jisme plants sunlight use karte hain"
    assert result.repair_count == 1
    assert validate_language(result.repaired, LanguageMode.HINGLISH) == []


def test_gujarati_repair_removes_roman_hindi() -> None:
    result = auto_repair_response("પ્રકાશસંશ્લેષણ kya hai? यह", LanguageMode.GUJARATI)
    assert result.had_violations is True
    assert result.repaired == "પ્રકાશસંશ્લેષણ ?"
    assert result.repair_count == 3


def test_repair_of_unknown_mode_uses_english() -> None:
    result = auto_repair_response("Yeh hai bhai", "Klingon")
    assert result.repaired == "Yeh is friend"


def test_validate_before_send() -> None:
    assert validate_before_send("What is photosynthesis?", LanguageMode.ENGLISH)
    assert not validate_before_send("Photosynthesis kya hai bhai", LanguageMode.ENGLISH)
