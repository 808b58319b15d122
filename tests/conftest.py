"""
Pytest fixtures and configuration for SEO Text Analyzer tests.
"""

import json
from typing import Optional

import pytest

from seo_text_analyzer.analyzer import SEOAnalyzer
from seo_text_analyzer.config import AnalyzerConfig
from seo_text_analyzer.llm_client import LanguageAnalysisClient, ProviderUnavailableError
from seo_text_analyzer.models import Keyword
from seo_text_analyzer.storage import InMemoryAnalysisStore


class FakeAnalysisClient(LanguageAnalysisClient):
    """Provider client that returns a canned completion and records prompts."""

    provider_name = "fake"

    def __init__(self, completion: Optional[str] = "{}", error: Optional[Exception] = None):
        super().__init__(AnalyzerConfig(api_key="test-key"))
        self.completion = completion
        self.error = error
        self.prompts: list[str] = []

    def _complete(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.completion


@pytest.fixture
def provider_payload() -> dict:
    """A realistic provider payload with all three categories.

    Scores are exact binary fractions so synthesized volumes are exact.
    """
    return {
        "keywords": [
            {"text": "Artificial Intelligence", "relevanceScore": 0.9375, "difficulty": "high", "searchVolume": "high"},
            {"text": "Machine Learning", "relevanceScore": 0.875},
            {"text": "data analytics", "relevanceScore": 0.625},
            {"text": "digital age", "relevanceScore": 0.25},
        ],
        "entities": [
            {"text": "OpenAI", "relevanceScore": 0.875, "type": "ORGANIZATION"},
            {"text": "Silicon Valley", "relevanceScore": 0.5, "type": "LOCATION"},
        ],
        "topics": [
            {"text": "Business Automation", "relevanceScore": 0.75},
            {"text": "customer service", "relevanceScore": 0.5},
        ],
    }


@pytest.fixture
def provider_completion(provider_payload) -> str:
    """Provider payload wrapped in a markdown fence, as LLMs tend to return it."""
    return f"Here is the analysis:\n```json\n{json.dumps(provider_payload)}\n```"


@pytest.fixture
def sample_text() -> str:
    """Sample blog paragraph used across tests."""
    return (
        "Artificial intelligence is revolutionizing the way businesses operate in the digital age. "
        "From automating customer service to predicting market trends, AI technologies are becoming "
        "essential tools for competitive advantage. Companies that embrace machine learning and data "
        "analytics are seeing significant improvements in efficiency and customer satisfaction."
    )


@pytest.fixture
def make_keyword():
    """Factory for Keyword records."""
    def _make(text: str, score: float = 0.5) -> Keyword:
        return Keyword(
            text=text,
            relevance_score=score,
            difficulty="Low",
            volume="1000",
            context=f"Keyword with {score * 100:.1f}% relevance",
        )
    return _make


@pytest.fixture
def make_client():
    """Factory for fake provider clients with a given completion."""
    return FakeAnalysisClient


@pytest.fixture
def fake_client(provider_completion) -> FakeAnalysisClient:
    return FakeAnalysisClient(completion=provider_completion)


@pytest.fixture
def failing_client() -> FakeAnalysisClient:
    return FakeAnalysisClient(error=ProviderUnavailableError("Gemini API error: 503 - overloaded", status_code=503))


@pytest.fixture
def analyzer(fake_client) -> SEOAnalyzer:
    return SEOAnalyzer(client=fake_client, store=InMemoryAnalysisStore())
