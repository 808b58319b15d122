"""
Analysis orchestration.

Composes the pipeline into the operations exposed to callers:
- analyze: provider call -> keyword normalization -> metrics -> recommendations -> store
- insert_keyword: insertion engine -> store (scores are not recomputed)
- get_analysis / reset_optimized_text / progress
"""

import logging
from typing import Optional, Union

from .config import AnalyzerConfig
from .keyword_inserter import insert_keyword
from .keyword_normalizer import normalize_keywords
from .llm_client import LanguageAnalysisClient, create_analysis_client
from .metrics import compute_metrics, count_words
from .models import Analysis, ContentType, KeywordInsertionResult, OptimizationProgress
from .recommendations import generate_recommendations
from .storage import AnalysisStore, InMemoryAnalysisStore

logger = logging.getLogger(__name__)

# Projected gains per inserted keyword, as displayed next to the optimized text
SEO_GAIN_PER_INSERTION = 6
DENSITY_BOOST_PER_INSERTION = 0.4


class AnalysisValidationError(ValueError):
    """Raised when analysis input is rejected before any provider call."""
    pass


class AnalysisNotFoundError(LookupError):
    """Raised when no analysis exists for an id."""

    def __init__(self, analysis_id: int):
        super().__init__(f"Analysis not found: {analysis_id}")
        self.analysis_id = analysis_id


class SEOAnalyzer:
    """
    Runs analyses and keyword insertions against a record store.

    The provider client is created on the first analyze() call, so lookups
    and insertions work without provider credentials.
    """

    def __init__(
        self,
        client: Optional[LanguageAnalysisClient] = None,
        store: Optional[AnalysisStore] = None,
        config: Optional[AnalyzerConfig] = None,
    ):
        self.config = config or (client.config if client else AnalyzerConfig.from_env())
        self.store = store or InMemoryAnalysisStore()
        self._client = client

    @property
    def client(self) -> LanguageAnalysisClient:
        if self._client is None:
            self._client = create_analysis_client(self.config)
        return self._client

    def analyze(
        self,
        text: str,
        content_type: Union[ContentType, str] = ContentType.BLOG_POST,
    ) -> Analysis:
        """
        Analyze a text and persist the result.

        Args:
            text: Text to analyze (at least `min_text_length` characters).
            content_type: Kind of content; only affects the provider prompt.

        Returns:
            The stored Analysis with its assigned id.

        Raises:
            AnalysisValidationError: If the text or content type is invalid.
            ProviderUnavailableError: If the provider call fails.
        """
        content_type = self._validate(text, content_type)

        payload = self.client.analyze_text(text, content_type)
        keywords = normalize_keywords(payload, self.config)

        word_count = count_words(text)
        metrics = compute_metrics(text, keywords, word_count)
        recommendations = generate_recommendations(metrics.seo_score, word_count, keywords)

        analysis = self.store.create(Analysis(
            original_text=text,
            content_type=content_type,
            seo_score=metrics.seo_score,
            readability_score=metrics.readability_score,
            keyword_density=metrics.keyword_density,
            word_count=word_count,
            recommendations=recommendations,
            keywords=keywords,
            optimized_text=text,
        ))

        logger.info(
            f"Analysis {analysis.id}: score={analysis.seo_score} "
            f"keywords={len(keywords)} words={word_count}"
        )
        return analysis

    def insert_keyword(self, analysis_id: int, keyword: str, text: str) -> KeywordInsertionResult:
        """
        Insert a keyword into the caller's current text and store the result.

        Score fields are left as computed for the original text.

        Raises:
            AnalysisNotFoundError: If the analysis does not exist.
        """
        self.get_analysis(analysis_id)

        optimized_text = insert_keyword(text, keyword)
        # Increment under the store lock so concurrent inserts are all counted
        updated = self.store.mutate(analysis_id, lambda record: {
            "optimized_text": optimized_text,
            "keywords_inserted": record.keywords_inserted + 1,
        })
        if updated is None:
            raise AnalysisNotFoundError(analysis_id)

        logger.info(f"Analysis {analysis_id}: inserted keyword '{keyword}'")
        return KeywordInsertionResult(optimized_text=optimized_text, analysis=updated)

    def get_analysis(self, analysis_id: int) -> Analysis:
        """
        Look up a stored analysis.

        Raises:
            AnalysisNotFoundError: If the analysis does not exist.
        """
        analysis = self.store.get(analysis_id)
        if analysis is None:
            raise AnalysisNotFoundError(analysis_id)
        return analysis

    def reset_optimized_text(self, analysis_id: int) -> Analysis:
        """Restore the optimized text to the original and clear the insertion count."""
        updated = self.store.mutate(analysis_id, lambda record: {
            "optimized_text": record.original_text,
            "keywords_inserted": 0,
        })
        if updated is None:
            raise AnalysisNotFoundError(analysis_id)
        return updated

    def progress(self, analysis_id: int) -> OptimizationProgress:
        """
        Projected improvement from inserted keywords.

        This is a linear projection of the insertion count, not a re-run of
        the metrics against the optimized text.
        """
        count = self.get_analysis(analysis_id).keywords_inserted
        return OptimizationProgress(
            keywords_added=count,
            seo_score_gain=count * SEO_GAIN_PER_INSERTION,
            density_boost=round(count * DENSITY_BOOST_PER_INSERTION, 1),
        )

    def _validate(self, text: str, content_type: Union[ContentType, str]) -> ContentType:
        if not isinstance(text, str) or len(text.strip()) < self.config.min_text_length:
            raise AnalysisValidationError(
                f"Text must be at least {self.config.min_text_length} characters long"
            )
        try:
            return ContentType(content_type)
        except ValueError:
            allowed = ", ".join(ct.value for ct in ContentType)
            raise AnalysisValidationError(
                f"Invalid content type '{content_type}'. Expected one of: {allowed}"
            )
