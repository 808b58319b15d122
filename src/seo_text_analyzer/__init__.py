"""
SEO Text Analyzer

Analyzes a block of text for search-engine-optimization quality:
- Extracts ranked keywords, entities and topics through an LLM provider
- Scores SEO quality, keyword density and readability
- Recommends improvements
- Inserts chosen keyword phrases back into the text
"""

__version__ = "1.0.0"
__author__ = "SEO Text Analyzer Team"

from .config import AnalyzerConfig, CategoryRule, ProviderName

from .models import (
    Analysis,
    ContentMetrics,
    ContentType,
    InsertionPoint,
    Keyword,
    KeywordCandidate,
    KeywordInsertionResult,
    OptimizationProgress,
    PayloadStatus,
    ProviderPayload,
    ReadabilityLevel,
    Recommendation,
    RecommendationType,
)

from .analyzer import (
    AnalysisNotFoundError,
    AnalysisValidationError,
    SEOAnalyzer,
)

from .keyword_normalizer import normalize_keywords

from .metrics import (
    calculate_keyword_density,
    calculate_readability_score,
    calculate_seo_score,
    compute_metrics,
    count_words,
)

from .recommendations import generate_recommendations

from .keyword_inserter import insert_keyword, plan_insertion

from .llm_client import (
    AnthropicAnalysisClient,
    GeminiAnalysisClient,
    LanguageAnalysisClient,
    ProviderConfigurationError,
    ProviderUnavailableError,
    create_analysis_client,
    parse_provider_payload,
)

from .storage import AnalysisStore, InMemoryAnalysisStore

__all__ = [
    # Configuration
    "AnalyzerConfig",
    "CategoryRule",
    "ProviderName",
    # Models
    "Analysis",
    "ContentMetrics",
    "ContentType",
    "InsertionPoint",
    "Keyword",
    "KeywordCandidate",
    "KeywordInsertionResult",
    "OptimizationProgress",
    "PayloadStatus",
    "ProviderPayload",
    "ReadabilityLevel",
    "Recommendation",
    "RecommendationType",
    # Orchestration
    "SEOAnalyzer",
    "AnalysisNotFoundError",
    "AnalysisValidationError",
    # Pipeline stages
    "normalize_keywords",
    "calculate_keyword_density",
    "calculate_readability_score",
    "calculate_seo_score",
    "compute_metrics",
    "count_words",
    "generate_recommendations",
    "insert_keyword",
    "plan_insertion",
    # Provider clients
    "LanguageAnalysisClient",
    "AnthropicAnalysisClient",
    "GeminiAnalysisClient",
    "ProviderUnavailableError",
    "ProviderConfigurationError",
    "create_analysis_client",
    "parse_provider_payload",
    # Storage
    "AnalysisStore",
    "InMemoryAnalysisStore",
]
