"""Crude additive sarcasm scoring over free text."""

import re
from typing import List

from memerender.schemas.meme import SarcasmIndicator, SarcasmResult

ALL_CAPS_MIN_LENGTH = 5
EXCLAMATION_THRESHOLD = 3

ALL_CAPS_SCORE = 0.25
EXCESSIVE_PUNCTUATION_SCORE = 0.2
SARCASM_PATTERN_SCORE = 0.3
RHETORICAL_QUESTION_SCORE = 0.1

SARCASM_PATTERNS = [
    re.compile(r"yeah[,.]? right", re.IGNORECASE),
    re.compile(r"sure[,.]? (buddy|pal|friend)", re.IGNORECASE),
    re.compile(r"what could go wrong", re.IGNORECASE),
    re.compile(r"oh great", re.IGNORECASE),
    re.compile(r"brilliant", re.IGNORECASE),
    re.compile(r"wonderful", re.IGNORECASE),
    re.compile(r"fantastic idea", re.IGNORECASE),
]


def detect_sarcasm(text: str) -> SarcasmResult:
    """
    Score `text` for sarcasm.
    
    Every check runs independently and adds to the score; only the phrase
    patterns stop at the first hit. The total is capped at 1.0 and rounded
    to two decimals.
    """
    if not text:
        return SarcasmResult(confidence=0.0, indicators=[])
    
    score = 0.0
    indicators: List[SarcasmIndicator] = []
    
    if text == text.upper() and len(text) > ALL_CAPS_MIN_LENGTH:
        score += ALL_CAPS_SCORE
        indicators.append(SarcasmIndicator.ALL_CAPS)
    
    if text.count("!") >= EXCLAMATION_THRESHOLD:
        score += EXCESSIVE_PUNCTUATION_SCORE
        indicators.append(SarcasmIndicator.EXCESSIVE_PUNCTUATION)
    
    if any(pattern.search(text) for pattern in SARCASM_PATTERNS):
        score += SARCASM_PATTERN_SCORE
        indicators.append(SarcasmIndicator.SARCASM_PATTERN)
    
    # Substring match is case-sensitive
    if "?" in text and ("why" in text or "how" in text):
        score += RHETORICAL_QUESTION_SCORE
        indicators.append(SarcasmIndicator.RHETORICAL_QUESTION)
    
    return SarcasmResult(confidence=round(min(score, 1.0), 2), indicators=indicators)
