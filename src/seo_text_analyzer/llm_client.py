"""
Language-analysis provider clients.

This module asks an LLM provider (Claude/Anthropic or Gemini) to extract
keywords, entities and topics from a text, and resolves the response into a
tagged ProviderPayload at the parsing boundary.
"""

import json
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

import anthropic
import httpx
import requests

from .config import AnalyzerConfig
from .models import ContentType, KeywordCandidate, PayloadStatus, ProviderPayload

logger = logging.getLogger(__name__)


class ProviderUnavailableError(Exception):
    """Raised when the provider cannot be reached or returns a failure status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderConfigurationError(ProviderUnavailableError):
    """Raised when the provider is not configured (e.g. missing API key)."""
    pass


GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

ANALYSIS_PROMPT_TEMPLATE = """Analyze the following {content_label} content for SEO and provide keywords, entities, and topics. Return your analysis in the following JSON format:

{{
  "keywords": [
    {{
      "text": "keyword phrase",
      "relevanceScore": 0.8,
      "searchVolume": "high/medium/low",
      "difficulty": "high/medium/low"
    }}
  ],
  "entities": [
    {{
      "text": "entity name",
      "relevanceScore": 0.9,
      "type": "PERSON/ORGANIZATION/LOCATION/OTHER"
    }}
  ],
  "topics": [
    {{
      "text": "topic name",
      "relevanceScore": 0.7
    }}
  ]
}}

Content to analyze:
{text}"""


def build_analysis_prompt(text: str, content_type: ContentType) -> str:
    """Build the category-eliciting prompt for a text."""
    return ANALYSIS_PROMPT_TEMPLATE.format(content_label=content_type.label, text=text)


def extract_json_object(text: str) -> Optional[str]:
    """
    Extract the outermost JSON object from a completion.

    Takes the span from the first '{' to the last '}', which strips markdown
    fences and any prose the model wrapped around the object.

    Returns:
        The candidate JSON text, or None when the text holds no object.
    """
    if not text:
        return None
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start:end + 1]


def parse_provider_payload(completion: Optional[str]) -> ProviderPayload:
    """
    Resolve a completion into a tagged payload.

    Args:
        completion: Completion text, or None when the response envelope
            carried no text at all.

    Returns:
        EMPTY when no JSON object is present, MALFORMED when the object
        cannot be decoded or is not a mapping, WELL_FORMED otherwise.
    """
    if completion is None:
        return ProviderPayload.malformed()

    raw = extract_json_object(completion)
    if raw is None:
        return ProviderPayload.empty()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse provider response: {e}")
        return ProviderPayload.malformed()

    if not isinstance(data, dict):
        return ProviderPayload.malformed()

    return ProviderPayload(
        status=PayloadStatus.WELL_FORMED,
        keywords=_parse_candidates(data.get("keywords")),
        entities=_parse_candidates(data.get("entities")),
        topics=_parse_candidates(data.get("topics")),
    )


def _parse_candidates(items: Any) -> list[KeywordCandidate]:
    """Parse one category list, dropping items without usable text or score."""
    if not isinstance(items, list):
        return []

    candidates = []
    for item in items:
        if not isinstance(item, dict):
            continue

        text = item.get("text")
        score = item.get("relevanceScore")
        if not isinstance(text, str) or not text.strip():
            continue
        if not _is_number(score):
            continue

        candidates.append(KeywordCandidate(
            text=text.strip(),
            relevance_score=float(score),
            difficulty=_optional_str(item.get("difficulty")),
            search_volume=_optional_str(item.get("searchVolume")),
            entity_type=_optional_str(item.get("type")),
        ))

    return candidates


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _optional_str(value: Any) -> Optional[str]:
    """Stringify a present hint; None for absent, empty or zero values."""
    if isinstance(value, str):
        return value.strip() or None
    if _is_number(value) and value != 0:
        return str(value)
    return None


class LanguageAnalysisClient(ABC):
    """
    Base client for keyword/entity/topic extraction.

    Subclasses implement the transport; prompt building and response
    parsing are shared.
    """

    provider_name = "provider"

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()

    def analyze_text(
        self,
        text: str,
        content_type: Union[ContentType, str] = ContentType.BLOG_POST,
    ) -> ProviderPayload:
        """
        Extract keyword candidates from a text.

        Args:
            text: Text to analyze.
            content_type: Kind of content (shapes the prompt only).

        Returns:
            The tagged provider payload.

        Raises:
            ProviderUnavailableError: If the provider call fails.
        """
        content_type = ContentType(content_type)
        prompt = build_analysis_prompt(text, content_type)

        completion = self._complete(prompt)
        payload = parse_provider_payload(completion)

        logger.info(
            f"{self.provider_name} analysis: status={payload.status.value} "
            f"keywords={len(payload.keywords)} entities={len(payload.entities)} "
            f"topics={len(payload.topics)}"
        )
        return payload

    @abstractmethod
    def _complete(self, prompt: str) -> Optional[str]:
        """Send the prompt; return completion text or None if the envelope has none."""


class AnthropicAnalysisClient(LanguageAnalysisClient):
    """Client for the Anthropic Claude Messages API."""

    provider_name = "anthropic"

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        client: Optional[anthropic.Anthropic] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Analyzer configuration (model, key, timeouts).
            client: Prebuilt SDK client. Built from config when None.

        Raises:
            ProviderConfigurationError: If no API key is available.
        """
        super().__init__(config or AnalyzerConfig(provider="anthropic"))

        if client is None:
            api_key = self.config.resolve_api_key()
            if not api_key:
                raise ProviderConfigurationError(
                    "Anthropic API key not configured. Set ANTHROPIC_API_KEY "
                    "environment variable or pass api_key."
                )
            # Explicit timeouts so a slow provider fails the request
            http_client = httpx.Client(
                timeout=httpx.Timeout(self.config.request_timeout, connect=self.config.connect_timeout),
                follow_redirects=True,
            )
            client = anthropic.Anthropic(api_key=api_key, http_client=http_client)

        self.client = client

    def _complete(self, prompt: str) -> Optional[str]:
        try:
            response = self.client.messages.create(
                model=self.config.model_name,
                max_tokens=self.config.max_output_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as e:
            logger.error(f"Anthropic API error: {e.status_code}")
            raise ProviderUnavailableError(
                f"Anthropic API error: {e.status_code} - {e.message}",
                status_code=e.status_code,
            ) from e
        except anthropic.APIError as e:
            logger.error(f"Anthropic API call failed: {e}")
            raise ProviderUnavailableError(f"Anthropic API call failed: {e}") from e

        texts = [block.text for block in response.content if getattr(block, "type", None) == "text"]
        if not texts:
            return None
        return "".join(texts)


class GeminiAnalysisClient(LanguageAnalysisClient):
    """Client for the Gemini generateContent REST endpoint."""

    provider_name = "gemini"

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(config or AnalyzerConfig(provider="gemini"))

        self.api_key = self.config.resolve_api_key()
        if not self.api_key:
            raise ProviderConfigurationError(
                "Gemini API key not configured. Please set GEMINI_API_KEY "
                "environment variable."
            )
        self.session = session or requests.Session()

    def _complete(self, prompt: str) -> Optional[str]:
        url = GEMINI_ENDPOINT.format(model=self.config.model_name)
        body = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            response = self.session.post(
                url,
                params={"key": self.api_key},
                json=body,
                timeout=(self.config.connect_timeout, self.config.request_timeout),
            )
        except requests.RequestException as e:
            logger.error(f"Gemini API call failed: {e}")
            raise ProviderUnavailableError(f"Gemini API call failed: {e}") from e

        if not response.ok:
            logger.error(f"Gemini API error: {response.status_code}")
            raise ProviderUnavailableError(
                f"Gemini API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderUnavailableError(
                f"Gemini API returned an unreadable body: {e}",
                status_code=response.status_code,
            ) from e

        return _gemini_completion_text(data)


def _gemini_completion_text(data: Any) -> Optional[str]:
    """Pull candidates[0].content.parts[0].text out of a Gemini envelope."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def create_analysis_client(config: Optional[AnalyzerConfig] = None) -> LanguageAnalysisClient:
    """
    Factory function to create the configured provider client.

    Args:
        config: Analyzer configuration. Defaults to AnalyzerConfig.from_env().

    Returns:
        Configured LanguageAnalysisClient instance.

    Raises:
        ProviderConfigurationError: If the provider is unknown or has no API key.
    """
    config = config or AnalyzerConfig.from_env()
    if config.provider == "anthropic":
        return AnthropicAnalysisClient(config)
    if config.provider == "gemini":
        return GeminiAnalysisClient(config)
    raise ProviderConfigurationError(f"Unknown provider: {config.provider}")
