"""
Comment Sentiment - Keyword lexicon reading of free-text patient comments

A lightweight, deterministic lexicon approach: words are matched against
positive, negative and medical keyword lists (Spanish, as patients write
them). The score is (positive - negative) / (positive + negative).
"""

import re
from typing import List

from survey_analyzer.core.constants import (
    CONCERN_PHRASES,
    PERSUASIVE_APPROACHES,
    POSITIVE_FACTOR_PHRASES,
    SENTIMENT_MEDICAL_KEYWORDS,
    SENTIMENT_NEGATIVE_KEYWORDS,
    SENTIMENT_POSITIVE_KEYWORDS,
)
from survey_analyzer.core.enums import Sentiment, SurgeryReadiness
from survey_analyzer.core.models import SentimentResult, SurgeryCommentAnalysis


_PUNCTUATION = re.compile(r"[^\w\s]", re.UNICODE)

SENTIMENT_CUTOFF = 0.1
READINESS_CUTOFF = 0.3


def _tokenize(text: str) -> List[str]:
    return _PUNCTUATION.sub("", text.lower()).split()


def analyze_sentiment(text: str) -> SentimentResult:
    """
    Score the sentiment of a comment.

    Returns:
        SentimentResult with score in [-1, 1], label (> 0.1 positive,
        < -0.1 negative), confidence min(1, |score| + 0.3) and the matched
        keywords. Empty text is neutral with confidence 1.
    """
    if not text or not text.strip():
        return SentimentResult(score=0.0, sentiment=Sentiment.NEUTRAL, confidence=1.0)

    positive_count = 0
    negative_count = 0
    keywords: List[str] = []
    medical_terms: List[str] = []

    for word in _tokenize(text):
        if word in SENTIMENT_POSITIVE_KEYWORDS:
            positive_count += 1
        elif word in SENTIMENT_NEGATIVE_KEYWORDS:
            negative_count += 1
        elif word in SENTIMENT_MEDICAL_KEYWORDS:
            if word not in medical_terms:
                medical_terms.append(word)
            continue
        else:
            continue
        if word not in keywords:
            keywords.append(word)

    total = positive_count + negative_count
    score = (positive_count - negative_count) / total if total else 0.0

    if score > SENTIMENT_CUTOFF:
        label = Sentiment.POSITIVE
    elif score < -SENTIMENT_CUTOFF:
        label = Sentiment.NEGATIVE
    else:
        label = Sentiment.NEUTRAL

    return SentimentResult(
        score=round(score, 4),
        sentiment=label,
        confidence=round(min(1.0, abs(score) + 0.3), 4),
        keywords=keywords,
        medical_terms=medical_terms,
    )


def analyze_surgery_comments(text: str) -> SurgeryCommentAnalysis:
    """
    Read a patient's comments for readiness to have surgery.

    Readiness is high when the sentiment score is above 0.3, low when below
    -0.3, medium otherwise. Matched negative and positive keywords are
    turned into readable concerns and motivators.
    """
    sentiment = analyze_sentiment(text)

    if sentiment.score > READINESS_CUTOFF:
        readiness = SurgeryReadiness.HIGH
    elif sentiment.score < -READINESS_CUTOFF:
        readiness = SurgeryReadiness.LOW
    else:
        readiness = SurgeryReadiness.MEDIUM

    concerns: List[str] = []
    factors: List[str] = []
    for word in sentiment.keywords:
        if word in SENTIMENT_NEGATIVE_KEYWORDS:
            phrase = CONCERN_PHRASES.get(word, word.capitalize())
            if phrase not in concerns:
                concerns.append(phrase)
        else:
            phrase = POSITIVE_FACTOR_PHRASES.get(word, word.capitalize())
            if phrase not in factors:
                factors.append(phrase)

    return SurgeryCommentAnalysis(
        sentiment=sentiment,
        readiness=readiness,
        key_concerns=concerns,
        positive_factors=factors,
        persuasive_approach=PERSUASIVE_APPROACHES[readiness.value],
    )
