"""
Data models for the SEO Text Analyzer.

This module defines the core data structures shared by the analysis pipeline:
keywords, recommendations, the persisted Analysis record, and the tagged
provider payload produced at the language-analysis boundary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ContentType(Enum):
    """Kind of content being analyzed. Only shapes the provider prompt."""
    BLOG_POST = "blog_post"
    SOCIAL_MEDIA = "social_media"
    NEWSLETTER = "newsletter"
    PRODUCT_DESCRIPTION = "product_description"

    @property
    def label(self) -> str:
        """Prompt-friendly label, e.g. 'blog post'."""
        return self.value.replace("_", " ")


class ReadabilityLevel(Enum):
    """Coarse readability bucket derived from average sentence length."""
    EASY = "Easy"
    GOOD = "Good"
    FAIR = "Fair"
    DIFFICULT = "Difficult"


class RecommendationType(Enum):
    """Category of a recommendation."""
    CONTENT = "content"
    KEYWORDS = "keywords"
    IMPROVEMENT = "improvement"


class PayloadStatus(Enum):
    """How a provider response was resolved at the parsing boundary."""
    WELL_FORMED = "well_formed"
    MALFORMED = "malformed"
    EMPTY = "empty"


@dataclass
class Keyword:
    """A ranked keyword phrase derived from a provider candidate."""
    text: str
    relevance_score: float
    difficulty: str
    volume: str
    context: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "difficulty": self.difficulty,
            "volume": self.volume,
            "context": self.context,
            "relevanceScore": self.relevance_score,
        }


@dataclass
class Recommendation:
    """A user-facing suggestion generated from metrics."""
    type: RecommendationType
    title: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
        }


@dataclass
class KeywordCandidate:
    """
    One item from the provider payload after presence checks.

    Optional hints are None when the provider omitted them.
    """
    text: str
    relevance_score: float
    difficulty: Optional[str] = None
    search_volume: Optional[str] = None
    entity_type: Optional[str] = None


@dataclass
class ProviderPayload:
    """
    Tagged provider response.

    WELL_FORMED payloads carry candidate lists (any of which may be empty).
    MALFORMED and EMPTY payloads always carry empty lists.
    """
    status: PayloadStatus
    keywords: list[KeywordCandidate] = field(default_factory=list)
    entities: list[KeywordCandidate] = field(default_factory=list)
    topics: list[KeywordCandidate] = field(default_factory=list)

    @classmethod
    def malformed(cls) -> "ProviderPayload":
        return cls(status=PayloadStatus.MALFORMED)

    @classmethod
    def empty(cls) -> "ProviderPayload":
        return cls(status=PayloadStatus.EMPTY)

    @property
    def is_degraded(self) -> bool:
        """Check if the payload could not be used as returned."""
        return self.status != PayloadStatus.WELL_FORMED

    def candidates_for(self, category: str) -> list[KeywordCandidate]:
        """Get the candidate list for a category name (keywords/entities/topics)."""
        return getattr(self, category)


@dataclass
class ContentMetrics:
    """Scores derived from a text and its keywords."""
    seo_score: int
    keyword_density: float
    readability_score: ReadabilityLevel
    word_count: int
    sentence_count: int
    average_sentence_length: float


@dataclass
class Analysis:
    """
    The unit of work and the only persisted entity.

    `id` is None until the record store assigns one. Score fields describe
    `original_text`; they are not recomputed when `optimized_text` changes.
    """
    original_text: str
    content_type: ContentType
    seo_score: int
    readability_score: ReadabilityLevel
    keyword_density: float
    word_count: int
    recommendations: list[Recommendation] = field(default_factory=list)
    keywords: list[Keyword] = field(default_factory=list)
    optimized_text: str = ""
    keywords_inserted: int = 0
    id: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        """Render the camelCase wire shape."""
        return {
            "id": self.id,
            "originalText": self.original_text,
            "contentType": self.content_type.value,
            "seoScore": self.seo_score,
            "readabilityScore": self.readability_score.value,
            "keywordDensity": self.keyword_density,
            "wordCount": self.word_count,
            "recommendations": [r.to_dict() for r in self.recommendations],
            "keywords": [k.to_dict() for k in self.keywords],
            "optimizedText": self.optimized_text,
            "keywordsInserted": self.keywords_inserted,
        }


@dataclass
class InsertionPoint:
    """Where a keyword phrase will be spliced into a text."""
    sentence_index: int  # Index into the segmented sequence (always even)
    word_index: int
    score: int


@dataclass
class KeywordInsertionResult:
    """Result of inserting a keyword into an analysis' text."""
    optimized_text: str
    analysis: Analysis


@dataclass
class OptimizationProgress:
    """Projected improvement from inserted keywords (not a metrics re-run)."""
    keywords_added: int
    seo_score_gain: int
    density_boost: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "keywordsAdded": self.keywords_added,
            "seoScoreGain": self.seo_score_gain,
            "densityBoost": self.density_boost,
        }
