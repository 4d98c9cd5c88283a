from mentra.language import (
    LanguageMode,
    detect_language,
    get_fallback_language,
    is_valid_language_mode,
    output_language_label,
    validate_language,
)


def test_detect_language_pure_english() -> None:
    assert detect_language("What is photosynthesis and how does it work?") == LanguageMode.ENGLISH


def test_detect_language_hinglish() -> None:
    assert detect_language("Photosynthesis kya hai yaar, samajh nahi aa raha") == LanguageMode.HINGLISH
    assert detect_language("Photosynthesis kya hai aur ye kaise kaam karta hai?") == LanguageMode.HINGLISH


def test_detect_language_hinglish_with_technical_terms() -> None:
    text = "Chlorophyll aur sunlight ka use karke plant glucose banata hai"
    assert detect_language(text) == LanguageMode.HINGLISH


def test_detect_language_gujarati_script() -> None:
    assert detect_language("Photosynthesis શું છે અને તે કેવી રીતે કામ કરે છે?") == LanguageMode.GUJARATI


def test_detect_language_defaults_to_english() -> None:
    assert detect_language("") == LanguageMode.ENGLISH
    assert detect_language("   \n\t") == LanguageMode.ENGLISH
    assert detect_language(None) == LanguageMode.ENGLISH
    # Two Hinglish hits are below the signal threshold.
    assert detect_language("kya hai") == LanguageMode.ENGLISH
    assert detect_language("Photosynthesis") == LanguageMode.ENGLISH


def test_detect_language_tie_prefers_hinglish_over_english() -> None:
    # Hinglish 3 x 10 and English 6 x 5 both score 30.
    assert detect_language("is are was were have has hai kya yaar") == LanguageMode.HINGLISH


def test_detect_language_tie_prefers_gujarati_over_hinglish() -> None:
    hinglish = "hai kya yaar bhai samajh nahi aur ko se ka"
    assert detect_language(f"કેમ છો ભાઈ {hinglish}") == LanguageMode.GUJARATI
    # One more Hindi word breaks the 100 point tie.
    assert detect_language(f"કેમ છો ભાઈ {hinglish} de") == LanguageMode.HINGLISH


def test_detect_language_modes_are_strings() -> None:
    assert detect_language("Photosynthesis kya hai yaar, samajh nahi aa raha") == "Hinglish"


def test_validate_english_flags_hindi_words() -> None:
    violations = validate_language("Yeh concept hai bhai", LanguageMode.ENGLISH)
    assert violations
    assert any("Hindi words" in violation for violation in violations)


def test_validate_english_flags_scripts() -> None:
    violations = validate_language("Photosynthesis प्रक्रिया and પ્રક્રિયા", "English")
    assert any("Devanagari" in violation for violation in violations)
    assert any("Gujarati" in violation for violation in violations)


def test_validate_english_flags_english_looking_hindi_words() -> None:
    violations = validate_language("The sun gives light to me", LanguageMode.ENGLISH)
    assert violations
    assert all("Hindi words" in violation for violation in violations)


def test_validate_english_accepts_plain_english() -> None:
    assert validate_language("Plants make food from light and water.", LanguageMode.ENGLISH) == []


def test_validate_hinglish_rejects_devanagari() -> None:
    text = "Photosynthesis एक प्रक्रिया है जिसमें plants sunlight use करते हैं"
    violations = validate_language(text, LanguageMode.HINGLISH)
    assert len(violations) == 1
    assert "Devanagari" in violations[0]


def test_validate_hinglish_rejects_long_english_sentence() -> None:
    text = (
        "Photosynthesis is a process where green plants use sunlight and water "
        "to make their own food every single day. Samajh gaye?"
    )
    violations = validate_language(text, LanguageMode.HINGLISH)
    assert violations == [
        "Contains fully English paragraph (forbidden in Hinglish mode - mix Hindi and English)"
    ]


def test_validate_hinglish_accepts_short_english_sentence() -> None:
    text = "Photosynthesis is a process where plants use sunlight to make food"
    assert validate_language(text, LanguageMode.HINGLISH) == []


def test_validate_gujarati_rejects_roman_hindi_and_devanagari() -> None:
    violations = validate_language("પ્રકાશસંશ્લેષણ kya hai? यह", LanguageMode.GUJARATI)
    assert any("Devanagari" in violation for violation in violations)
    assert sum("Roman Hindi" in violation for violation in violations) == 2


def test_validate_gujarati_accepts_gujarati() -> None:
    assert validate_language("પ્રકાશસંશ્લેષણ એ process છે", LanguageMode.GUJARATI) == []


def test_validate_unknown_mode_clamps_to_english() -> None:
    assert validate_language("Yeh concept hai bhai", "Klingon") == validate_language(
        "Yeh concept hai bhai", LanguageMode.ENGLISH
    )


def test_is_valid_language_mode() -> None:
    assert is_valid_language_mode("English")
    assert is_valid_language_mode("Hinglish")
    assert is_valid_language_mode(LanguageMode.GUJARATI)
    assert not is_valid_language_mode("Klingon")
    assert not is_valid_language_mode("english")
    assert not is_valid_language_mode(None)
    assert not is_valid_language_mode(3)


def test_get_fallback_language() -> None:
    assert get_fallback_language("") == LanguageMode.ENGLISH
    assert get_fallback_language(None) == LanguageMode.ENGLISH
    assert get_fallback_language() == LanguageMode.ENGLISH
    assert get_fallback_language("Samajh nahi aa raha photosynthesis kya hai") == LanguageMode.HINGLISH


def test_output_language_label() -> None:
    assert output_language_label(LanguageMode.GUJARATI) == "Gujarati"
    assert output_language_label("unknown") == "English"
