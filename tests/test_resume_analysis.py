import pytest

from hirepath.services.resume_analysis import (
    KEYWORDS,
    calculate_qualification_score,
    decode_resume,
    summarize_resume,
)


@pytest.mark.parametrize("text, expected", [
    ("", 0),
    (None, 0),
    ("I have 5 years experience in software programming at university", 25),
    ("x" * 500, 0),
    ("x" * 501, 20),
    ("x" * 1001, 30),
])
def test_qualification_score(text, expected):
    assert calculate_qualification_score(text) == expected


def test_score_is_case_insensitive():
    assert calculate_qualification_score("LEADERSHIP") == calculate_qualification_score("leadership")


def test_score_is_capped_at_100():
    every_keyword = " ".join(k for group in KEYWORDS.values() for k in group)
    assert calculate_qualification_score(every_keyword + " " + "x" * 1200) == 100


def test_summary_is_short():
    text = "Built payment systems. " * 60
    summary = summarize_resume(text)
    assert 0 < len(summary) <= 400
    assert summary.startswith("Built payment systems.")
    assert summarize_resume("   ") == ""


def test_summary_truncates_one_long_sentence():
    summary = summarize_resume("a" * 1000)
    assert len(summary) == 400
    assert summary.endswith("...")


def test_decode_resume_falls_back_to_latin1():
    assert decode_resume("Zoë".encode("utf-8")) == "Zoë"
    assert decode_resume(b"Caf\xe9") == "Café"
