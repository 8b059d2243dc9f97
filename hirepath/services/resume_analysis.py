"""Keyword heuristic used to score an uploaded resume.

This is not a real scoring engine: it counts a handful of keywords and
rewards longer documents. The result feeds the resume qualification gate.
"""
import re

KEYWORDS = {
    "experience": ["experience", "years", "worked", "employment"],
    "skills": ["skills", "technologies", "programming", "software"],
    "education": ["education", "degree", "university", "college", "certification"],
    "achievements": ["achievement", "award", "project", "successful"],
    "leadership": ["lead", "manage", "team", "leadership"],
}

KEYWORD_POINTS = 5
LENGTH_BONUSES = ((500, 20), (1000, 10))
SUMMARY_MAX_CHARS = 400


def calculate_qualification_score(resume_text: str) -> int:
    text = (resume_text or "").lower()
    score = 0
    for group in KEYWORDS.values():
        for keyword in group:
            if keyword in text:
                score += KEYWORD_POINTS
    for min_len, bonus in LENGTH_BONUSES:
        if len(text) > min_len:
            score += bonus
    return min(score, 100)


def summarize_resume(resume_text: str, max_chars: int = SUMMARY_MAX_CHARS) -> str:
    text = " ".join((resume_text or "").split())
    if not text:
        return ""
    sentences = re.split(r"(?<=[.!?])\s+", text)
    out = []
    length = 0
    for s in sentences:
        if out and length + len(s) + 1 > max_chars:
            break
        out.append(s)
        length += len(s) + 1
    summary = " ".join(out)
    if len(summary) > max_chars:
        summary = summary[: max_chars - 3].rstrip() + "..."
    return summary


def decode_resume(data: bytes) -> str:
    """Best-effort text from an uploaded file (plain text resumes only)."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")
