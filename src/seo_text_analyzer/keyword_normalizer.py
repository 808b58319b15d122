"""
Keyword candidate normalization.

Turns the provider's keyword, entity and topic candidates into a single
ranked list of Keyword records:
- Filter each category by its relevance floor
- Truncate to the category cap in provider order
- Derive difficulty, volume and context
- Merge and stable-sort by relevance
"""

import logging
import math
from typing import Optional

from .config import CATEGORY_RULES, AnalyzerConfig, CategoryRule
from .models import Keyword, KeywordCandidate, ProviderPayload

logger = logging.getLogger(__name__)


def normalize_keywords(
    payload: ProviderPayload,
    config: Optional[AnalyzerConfig] = None,
) -> list[Keyword]:
    """
    Build the ranked keyword list for an analysis.

    Degraded payloads (malformed or empty) produce an empty list instead of
    failing the analysis.

    Args:
        payload: Parsed provider payload.
        config: Analyzer configuration (for the overall keyword cap).

    Returns:
        Keywords sorted by relevance score, highest first.
    """
    config = config or AnalyzerConfig()

    if payload.is_degraded:
        logger.warning(f"Provider payload is {payload.status.value}; no keywords extracted")
        return []

    keywords: list[Keyword] = []
    for rule in CATEGORY_RULES:
        selected = select_candidates(payload.candidates_for(rule.name), rule)
        keywords.extend(candidate_to_keyword(candidate, rule) for candidate in selected)

    # sorted() is stable, so equal scores keep category order
    ranked = sorted(keywords, key=lambda k: k.relevance_score, reverse=True)
    return ranked[:config.max_keywords]


def select_candidates(
    candidates: list[KeywordCandidate],
    rule: CategoryRule,
) -> list[KeywordCandidate]:
    """Filter by the category floor, then keep the first `rule.cap` survivors."""
    above_floor = [c for c in candidates if c.relevance_score > rule.relevance_floor]
    return above_floor[:rule.cap]


def candidate_to_keyword(candidate: KeywordCandidate, rule: CategoryRule) -> Keyword:
    """Map one surviving candidate to a Keyword."""
    score = candidate.relevance_score

    difficulty = None
    volume = None
    if rule.accepts_hints:
        difficulty = candidate.difficulty or None
        volume = candidate.search_volume or None

    return Keyword(
        text=candidate.text.lower(),
        relevance_score=score,
        difficulty=_capitalize_first(difficulty) if difficulty else classify_difficulty(score, rule),
        volume=volume if volume else synthesize_volume(score, rule),
        context=describe_context(candidate, rule),
    )


def classify_difficulty(score: float, rule: CategoryRule) -> str:
    """Derive a difficulty label from a relevance score."""
    if score > rule.high_threshold:
        return "High"
    if score > rule.medium_threshold:
        return "Medium"
    return "Low"


def synthesize_volume(score: float, rule: CategoryRule) -> str:
    """Approximate search interest as an integer proportional to relevance."""
    return str(math.floor(score * rule.volume_multiplier))


def describe_context(candidate: KeywordCandidate, rule: CategoryRule) -> str:
    """Describe where a keyword came from, e.g. 'Entity (PERSON) with 92.0% relevance'."""
    percentage = f"{candidate.relevance_score * 100:.1f}%"
    if rule.name == "entities":
        entity_type = candidate.entity_type or "OTHER"
        return f"{rule.label} ({entity_type}) with {percentage} relevance"
    return f"{rule.label} with {percentage} relevance"


def _capitalize_first(value: str) -> str:
    return value[:1].upper() + value[1:]
