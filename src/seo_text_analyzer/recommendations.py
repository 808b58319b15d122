"""
Rule-based recommendations from analysis metrics.

Rules are evaluated in a fixed order and each appends at most one
recommendation. Several rules may fire for the same text.
"""

from typing import Sequence

from .models import Keyword, Recommendation, RecommendationType

SEO_SCORE_TARGET = 70
MIN_WORD_COUNT = 150
MIN_KEYWORD_COUNT = 3


def generate_recommendations(
    seo_score: int,
    word_count: int,
    keywords: Sequence[Keyword],
) -> list[Recommendation]:
    """
    Generate recommendations in rule order.

    Args:
        seo_score: Computed SEO score.
        word_count: Word count of the analyzed text.
        keywords: Normalized keywords.

    Returns:
        Recommendations in generation order (never re-sorted or deduplicated).
    """
    recommendations = []

    if seo_score < SEO_SCORE_TARGET:
        recommendations.append(Recommendation(
            type=RecommendationType.IMPROVEMENT,
            title="Improve overall SEO score",
            description="Consider adding more relevant keywords and improving content structure",
        ))

    if word_count < MIN_WORD_COUNT:
        recommendations.append(Recommendation(
            type=RecommendationType.CONTENT,
            title="Increase content length",
            description=(
                "Longer content tends to perform better in search results. "
                "Aim for at least 300 words."
            ),
        ))

    if len(keywords) < MIN_KEYWORD_COUNT:
        recommendations.append(Recommendation(
            type=RecommendationType.KEYWORDS,
            title="Add more targeted keywords",
            description=(
                "Include more specific keywords related to your topic "
                "to improve search visibility"
            ),
        ))

    return recommendations
