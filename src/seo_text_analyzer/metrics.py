"""
Text metrics for SEO scoring.

All functions here are pure and deterministic:
- Word and sentence counting
- SEO score (length, keyword coverage, sentence structure)
- Keyword density
- Readability classification
"""

import re
from typing import Optional, Sequence

from .models import ContentMetrics, Keyword, ReadabilityLevel

BASE_SEO_SCORE = 50

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def count_words(text: str) -> int:
    """Count whitespace-separated words. Empty text has 0 words."""
    return len(text.split())


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentences on runs of '.', '!' and '?'.

    Blank fragments are dropped. A text with no detected sentence is treated
    as a single sentence equal to the whole text, so callers can always
    divide by the result's length.
    """
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]
    return sentences or [text]


def average_sentence_length(text: str, word_count: Optional[int] = None) -> float:
    """Average words per sentence."""
    if word_count is None:
        word_count = count_words(text)
    return word_count / len(split_sentences(text))


def calculate_seo_score(text: str, keywords: Sequence[Keyword], word_count: int) -> int:
    """
    Score a text from 0 to 100.

    Args:
        text: Text being analyzed.
        keywords: Normalized keywords for the text.
        word_count: Word count of the text.

    Returns:
        SEO score clamped to [0, 100].
    """
    score = BASE_SEO_SCORE

    # Content length
    if word_count > 300:
        score += 15
    elif word_count > 150:
        score += 10
    elif word_count > 50:
        score += 5

    # Keyword coverage
    if len(keywords) > 5:
        score += 15
    elif len(keywords) > 2:
        score += 10

    # Sentence structure
    avg_length = average_sentence_length(text, word_count)
    if 10 < avg_length < 20:
        score += 10

    return min(100, max(0, score))


def compile_phrase_pattern(phrase: str) -> Optional[re.Pattern]:
    """
    Compile a case-insensitive whole-phrase pattern for a keyword.

    Words are escaped and joined by \\s+ so "machine  learning" across a line
    break still matches. Returns None for a blank phrase.
    """
    words = phrase.split()
    if not words:
        return None
    body = r"\s+".join(re.escape(word) for word in words)
    return re.compile(rf"(?<!\w){body}(?!\w)", re.IGNORECASE)


def count_phrase_occurrences(phrase: str, text: str) -> int:
    """Count non-overlapping whole-phrase occurrences of `phrase` in `text`."""
    pattern = compile_phrase_pattern(phrase)
    if pattern is None:
        return 0
    return len(pattern.findall(text))


def calculate_keyword_density(text: str, keywords: Sequence[Keyword], word_count: int) -> float:
    """
    Calculate keyword density as a percentage.

    Density = total occurrences of all keyword phrases / word count * 100.

    Returns:
        Density percentage, 0.0 when there are no keywords or no words.
    """
    if not keywords or word_count <= 0:
        return 0.0

    occurrences = sum(count_phrase_occurrences(kw.text, text) for kw in keywords)
    return occurrences / word_count * 100


def calculate_readability_score(text: str, word_count: int) -> ReadabilityLevel:
    """Classify readability from average sentence length."""
    avg_length = average_sentence_length(text, word_count)

    if avg_length < 15:
        return ReadabilityLevel.EASY
    if avg_length < 20:
        return ReadabilityLevel.GOOD
    if avg_length < 25:
        return ReadabilityLevel.FAIR
    return ReadabilityLevel.DIFFICULT


def compute_metrics(
    text: str,
    keywords: Sequence[Keyword],
    word_count: Optional[int] = None,
) -> ContentMetrics:
    """
    Compute every metric for a text in one pass.

    Args:
        text: Text to score.
        keywords: Normalized keywords.
        word_count: Precomputed word count; counted from `text` if None.

    Returns:
        ContentMetrics for the text.
    """
    if word_count is None:
        word_count = count_words(text)

    return ContentMetrics(
        seo_score=calculate_seo_score(text, keywords, word_count),
        keyword_density=calculate_keyword_density(text, keywords, word_count),
        readability_score=calculate_readability_score(text, word_count),
        word_count=word_count,
        sentence_count=len(split_sentences(text)),
        average_sentence_length=average_sentence_length(text, word_count),
    )
