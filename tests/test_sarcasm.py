import pytest

from memerender.services.sarcasm import detect_sarcasm


def test_all_caps_pattern():
    result = detect_sarcasm("OH GREAT IDEA")
    assert result.confidence > 0
    assert "ALL_CAPS" in result.indicators
    assert "SARCASM_PATTERN" in result.indicators
    assert result.confidence == 0.55


def test_plain_text_scores_zero():
    result = detect_sarcasm("hello world")
    assert result.confidence == 0
    assert result.indicators == []


def test_empty_text_scores_zero():
    result = detect_sarcasm("")
    assert result.confidence == 0
    assert result.indicators == []


def test_short_caps_not_counted():
    assert detect_sarcasm("LOL").indicators == []


def test_excessive_punctuation():
    result = detect_sarcasm("that went well!!!")
    assert result.indicators == ["EXCESSIVE_PUNCTUATION"]
    assert result.confidence == 0.2


def test_pattern_counted_once():
    result = detect_sarcasm("Oh great, another brilliant and wonderful meeting")
    assert result.indicators == ["SARCASM_PATTERN"]
    assert result.confidence == 0.3


@pytest.mark.parametrize(
    "text",
    ["Yeah, right", "yeah right", "Sure buddy", "sure, pal", "What could go wrong", "Fantastic idea"],
)
def test_sarcasm_phrases(text):
    assert "SARCASM_PATTERN" in detect_sarcasm(text).indicators


def test_rhetorical_question_is_case_sensitive():
    assert detect_sarcasm("so how is this fine?").indicators == ["RHETORICAL_QUESTION"]
    assert detect_sarcasm("How is this fine?").indicators == []


def test_all_checks_add_up_in_detection_order():
    result = detect_sarcasm("YEAH RIGHT!!! why?")
    assert result.indicators == [
        "EXCESSIVE_PUNCTUATION",
        "SARCASM_PATTERN",
        "RHETORICAL_QUESTION",
    ]
    assert result.confidence == 0.6


def test_confidence_rounded_to_two_places():
    result = detect_sarcasm("BRILLIANT!!! HOW?")
    assert result.indicators == ["ALL_CAPS", "EXCESSIVE_PUNCTUATION", "SARCASM_PATTERN"]
    assert result.confidence == 0.75
