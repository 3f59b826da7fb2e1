import dataclasses

import pytest

from notaps.engine.scorer import (
    FEEDBACK_MESSAGES, Grade, InvalidInput, edit_distance, feedback_for_accuracy,
    grade_for_accuracy, normalize_text, score
)


def test_identical_words_score_perfect():
    result = score("hello", "hello")
    assert result.accuracy == 100
    assert result.grade == Grade.A
    assert result.feedback == FEEDBACK_MESSAGES["ja"][Grade.A]


def test_one_missing_letter():
    result = score("hello", "helo")
    assert result.accuracy == 80
    assert result.grade == Grade.B


def test_completely_different_words():
    result = score("cat", "dog")
    assert result.accuracy == 0
    assert result.grade == Grade.F


def test_seventy_percent_lands_in_c_band():
    result = score("abcdefghij", "abcdefgxyz")
    assert result.accuracy == 70
    assert result.grade == Grade.C


def test_partial_similarity():
    result = score("beautiful", "beatiful")
    assert result.accuracy == pytest.approx(800 / 9, abs=1e-5)
    assert result.grade == Grade.B


@pytest.mark.parametrize("target,spoken", [
    ("Hello!", " hello "),
    ("HELLO", "hello."),
    ("こんにちは。", "こんにちは"),
    ("¿Qué?", "qué"),
])
def test_case_whitespace_and_punctuation_are_ignored(target, spoken):
    result = score(target, spoken)
    assert result.accuracy == 100
    assert result.grade == Grade.A


def test_inner_punctuation_is_kept():
    assert normalize_text("  Don't! ") == "don't"


def test_empty_spoken_text_is_a_wrong_answer():
    result = score("hello", "")
    assert result.accuracy == 0
    assert result.grade == Grade.F


def test_target_normalizing_to_empty_matches_empty_answer():
    result = score("!!", "")
    assert result.accuracy == 100


@pytest.mark.parametrize("target,spoken", [
    (None, "hello"),
    ("hello", None),
    ("", "hello"),
    (123, "hello"),
])
def test_invalid_input_fails_fast(target, spoken):
    with pytest.raises(InvalidInput):
        score(target, spoken)


def test_confidence_is_passed_through():
    assert score("hello", "hallo", confidence=0.42).confidence == 0.42


def test_result_is_immutable():
    result = score("hello", "hello")
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.accuracy = 50


@pytest.mark.parametrize("a,b,expected", [
    ("kitten", "sitting", 3),
    ("flaw", "lawn", 2),
    ("", "abc", 3),
    ("abc", "abc", 0),
])
def test_edit_distance_is_symmetric(a, b, expected):
    assert edit_distance(a, b) == expected
    assert edit_distance(b, a) == expected


@pytest.mark.parametrize("accuracy,grade", [
    (100, Grade.A),
    (90, Grade.A),
    (89.99, Grade.B),
    (80, Grade.B),
    (79.99, Grade.C),
    (70, Grade.C),
    (69.99, Grade.D),
    (60, Grade.D),
    (59.99, Grade.F),
    (0, Grade.F),
])
def test_grade_bands(accuracy, grade):
    assert grade_for_accuracy(accuracy) == grade


def test_feedback_locale():
    assert feedback_for_accuracy(95, "en") == FEEDBACK_MESSAGES["en"][Grade.A]
    # 未知语言回退到日语
    assert feedback_for_accuracy(10, "de") == FEEDBACK_MESSAGES["ja"][Grade.F]
    assert score("cat", "dog", locale="en").feedback == FEEDBACK_MESSAGES["en"][Grade.F]
