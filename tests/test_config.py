"""Tests for analyzer configuration."""

import pytest

from seo_text_analyzer.config import CATEGORY_RULES, AnalyzerConfig


class TestAnalyzerConfig:
    """Tests for AnalyzerConfig."""

    def test_defaults(self):
        """Test default configuration values."""
        config = AnalyzerConfig()

        assert config.provider == "anthropic"
        assert config.model_name == "claude-sonnet-4-20250514"
        assert config.max_keywords == 20
        assert config.min_text_length == 10
        assert config.api_key_env_var == "ANTHROPIC_API_KEY"

    def test_gemini_defaults(self):
        """Test the gemini provider picks its own model and key variable."""
        config = AnalyzerConfig(provider="gemini")

        assert config.model_name == "gemini-1.5-flash-latest"
        assert config.api_key_env_var == "GEMINI_API_KEY"

    def test_explicit_model(self):
        """Test an explicit model overrides the provider default."""
        assert AnalyzerConfig(model="claude-3-5-haiku-latest").model_name == "claude-3-5-haiku-latest"

    @pytest.mark.parametrize("kwargs", [
        {"provider": "openai"},
        {"max_keywords": 0},
        {"min_text_length": 0},
        {"max_output_tokens": 0},
        {"request_timeout": 0},
        {"connect_timeout": 90.0, "request_timeout": 60.0},
    ])
    def test_invalid_values(self, kwargs):
        """Test invalid values are rejected."""
        with pytest.raises(ValueError):
            AnalyzerConfig(**kwargs)

    def test_resolve_api_key(self, monkeypatch):
        """Test an explicit key wins over the environment."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "from-env")

        assert AnalyzerConfig().resolve_api_key() == "from-env"
        assert AnalyzerConfig(api_key="explicit").resolve_api_key() == "explicit"

    def test_from_env(self, monkeypatch):
        """Test provider and model are read from the environment."""
        monkeypatch.setenv("SEO_ANALYZER_PROVIDER", " Gemini ")
        monkeypatch.setenv("SEO_ANALYZER_MODEL", "gemini-2.0-flash")

        config = AnalyzerConfig.from_env()

        assert config.provider == "gemini"
        assert config.model_name == "gemini-2.0-flash"

    def test_from_env_overrides(self, monkeypatch):
        """Test explicit overrides win and None overrides are ignored."""
        monkeypatch.setenv("SEO_ANALYZER_PROVIDER", "gemini")
        monkeypatch.delenv("SEO_ANALYZER_MODEL", raising=False)

        config = AnalyzerConfig.from_env(provider="anthropic", api_key=None, max_keywords=5)

        assert config.provider == "anthropic"
        assert config.api_key is None
        assert config.max_keywords == 5


class TestCategoryRules:
    """Tests for the category rule table."""

    def test_order_and_limits(self):
        """Test categories are processed keywords, entities, topics."""
        assert [r.name for r in CATEGORY_RULES] == ["keywords", "entities", "topics"]
        assert [r.cap for r in CATEGORY_RULES] == [10, 5, 5]
        assert [r.relevance_floor for r in CATEGORY_RULES] == [0.3, 0.5, 0.4]
