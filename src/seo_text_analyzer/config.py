# -*- coding: utf-8 -*-
"""
Centralized configuration for the SEO Text Analyzer.

This module provides the analyzer configuration dataclass (provider selection,
keyword limits, validation thresholds, transport timeouts) and the literal
per-category rules used when normalizing provider keyword candidates.
"""

import os
from dataclasses import dataclass
from typing import Literal, Optional


# Type alias for the language-analysis provider
# - "anthropic": Claude Messages API through the anthropic SDK.
# - "gemini": Gemini generateContent REST endpoint.
ProviderName = Literal["anthropic", "gemini"]

DEFAULT_MODELS = {
    "anthropic": "claude-sonnet-4-20250514",
    "gemini": "gemini-1.5-flash-latest",
}

API_KEY_ENV_VARS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
}


@dataclass(frozen=True)
class CategoryRule:
    """
    Normalization rule for one provider candidate category.

    Attributes:
        name: Category name as it appears in the provider payload.
        label: Human-readable label used in the keyword context string.
        relevance_floor: Candidates must score strictly above this value.
        cap: Maximum candidates kept, applied after filtering.
        volume_multiplier: Synthesized volume = floor(score * multiplier).
        high_threshold: Scores strictly above this are "High" difficulty.
        medium_threshold: Scores strictly above this are "Medium" difficulty.
        accepts_hints: Whether provider difficulty/searchVolume hints are used.
    """
    name: str
    label: str
    relevance_floor: float
    cap: int
    volume_multiplier: int
    high_threshold: float
    medium_threshold: float
    accepts_hints: bool = False


KEYWORD_RULE = CategoryRule(
    name="keywords",
    label="Keyword",
    relevance_floor=0.3,
    cap=10,
    volume_multiplier=15000,
    high_threshold=0.8,
    medium_threshold=0.6,
    accepts_hints=True,
)

ENTITY_RULE = CategoryRule(
    name="entities",
    label="Entity",
    relevance_floor=0.5,
    cap=5,
    volume_multiplier=12000,
    high_threshold=0.8,
    medium_threshold=0.6,
)

TOPIC_RULE = CategoryRule(
    name="topics",
    label="Topic",
    relevance_floor=0.4,
    cap=5,
    volume_multiplier=10000,
    high_threshold=0.7,
    medium_threshold=0.5,
)

# Processing order matters: ties in relevance keep this order after the sort.
CATEGORY_RULES = (KEYWORD_RULE, ENTITY_RULE, TOPIC_RULE)


@dataclass
class AnalyzerConfig:
    """
    Central configuration for analysis behavior.

    Attributes:
        provider: Which language-analysis provider to call ("anthropic" or "gemini").
        model: Model identifier. None selects the provider's default model.
        api_key: Provider API key. None means "read from the provider's env var
            when the client is created".
        max_keywords: Upper bound on the final ranked keyword list.
        min_text_length: Minimum number of characters (after trimming) that a
            text needs before it is sent to the provider.
        max_output_tokens: Completion budget for the provider call.
        request_timeout: Total seconds allowed for a provider request.
        connect_timeout: Seconds allowed to establish the provider connection.
    """

    provider: ProviderName = "anthropic"
    model: Optional[str] = None
    api_key: Optional[str] = None

    # Keyword limits
    max_keywords: int = 20

    # Input validation
    min_text_length: int = 10

    # Transport
    max_output_tokens: int = 2048
    request_timeout: float = 60.0
    connect_timeout: float = 30.0

    @property
    def model_name(self) -> str:
        """Get the configured model, falling back to the provider default."""
        return self.model or DEFAULT_MODELS[self.provider]

    @property
    def api_key_env_var(self) -> str:
        """Name of the environment variable holding the provider key."""
        return API_KEY_ENV_VARS[self.provider]

    def resolve_api_key(self) -> Optional[str]:
        """Return the explicit API key or the one from the environment."""
        return self.api_key or os.environ.get(self.api_key_env_var)

    def __post_init__(self):
        """Validate configuration values."""
        if self.provider not in ("anthropic", "gemini"):
            raise ValueError(
                f"provider must be 'anthropic' or 'gemini', got '{self.provider}'"
            )
        if self.max_keywords < 1:
            raise ValueError(f"max_keywords must be >= 1, got {self.max_keywords}")
        if self.min_text_length < 1:
            raise ValueError(
                f"min_text_length must be >= 1, got {self.min_text_length}"
            )
        if self.max_output_tokens < 1:
            raise ValueError(
                f"max_output_tokens must be >= 1, got {self.max_output_tokens}"
            )
        if self.connect_timeout <= 0 or self.request_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if self.connect_timeout > self.request_timeout:
            raise ValueError(
                f"connect_timeout ({self.connect_timeout}) must be <= "
                f"request_timeout ({self.request_timeout})"
            )

    @classmethod
    def from_env(cls, **overrides) -> "AnalyzerConfig":
        """Create config from environment variables.

        Reads SEO_ANALYZER_PROVIDER and SEO_ANALYZER_MODEL. API keys are left
        to resolve_api_key() so they are looked up when a client is built.

        Args:
            **overrides: Override any config values (e.g., provider='gemini')

        Returns:
            AnalyzerConfig built from the environment.
        """
        defaults = {
            "provider": os.environ.get("SEO_ANALYZER_PROVIDER", "anthropic").strip().lower(),
            "model": os.environ.get("SEO_ANALYZER_MODEL") or None,
        }
        defaults.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**defaults)
