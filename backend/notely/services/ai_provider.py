"""
Model access for the transformation pipeline.

``AIProvider.generate_text(prompt, model)`` is the ``prompt -> text``
capability the pipeline is built with. Groq is asked first and OpenAI is the
fallback; moving to the next provider when one is unavailable happens here,
so the pipeline still makes exactly one call per operation.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

import httpx
from openai import OpenAI

from notely.core.config import settings
from notely.core.constants import AIModels, AIParams

logger = logging.getLogger(__name__)


class ProviderName(str, Enum):
    GROQ = "groq"
    OPENAI = "openai"


@dataclass
class Completion:
    """Text returned by one provider for one prompt."""
    text: str
    provider: ProviderName
    model: str
    tokens_used: int = 0


class AIProviderError(Exception):
    """Raised when a provider (or every provider) cannot answer."""
    pass


def _as_messages(prompt: str) -> List[Dict[str, str]]:
    return [{"role": "user", "content": prompt}]


class ChatProvider:
    """One chat-completion backend. Subclasses implement ``_complete``."""

    name: ProviderName

    def __init__(self, api_key: str):
        self.api_key = api_key
        self._client = None

    def _complete(self, prompt: str, model: str) -> Completion:
        raise NotImplementedError

    def complete(self, prompt: str, model: str = AIModels.TRANSFORM_MODEL) -> Completion:
        try:
            return self._complete(prompt, model)
        except AIProviderError:
            raise
        except Exception as e:
            raise AIProviderError(f"{self.name.value} request failed: {e}")


class GroqProvider(ChatProvider):
    """Groq over its OpenAI-compatible HTTP API."""

    name = ProviderName.GROQ
    BASE_URL = "https://api.groq.com/openai/v1"

    # Section rewrites need the larger model; classification is a short label
    MODEL_MAP = {
        AIModels.TRANSFORM_MODEL: "llama-3.3-70b-versatile",
        AIModels.CLASSIFY_MODEL: "llama-3.1-8b-instant",
    }

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.BASE_URL,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=120.0
            )
        return self._client

    def _complete(self, prompt: str, model: str) -> Completion:
        groq_model = self.MODEL_MAP.get(model, self.MODEL_MAP[AIModels.TRANSFORM_MODEL])
        try:
            response = self.client.post("/chat/completions", json={
                "model": groq_model,
                "messages": _as_messages(prompt),
                "temperature": AIParams.TEMPERATURE,
                "max_tokens": AIParams.MAX_TOKENS,
            })
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AIProviderError(f"Groq API error: {e.response.status_code} - {e.response.text}")

        data = response.json()
        return Completion(
            text=data["choices"][0]["message"]["content"] or "",
            provider=self.name,
            model=groq_model,
            tokens_used=data.get("usage", {}).get("total_tokens", 0)
        )


class OpenAIProvider(ChatProvider):
    """OpenAI through the official SDK."""

    name = ProviderName.OPENAI

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def _complete(self, prompt: str, model: str) -> Completion:
        response = self.client.chat.completions.create(
            model=model,
            messages=_as_messages(prompt),
            temperature=AIParams.TEMPERATURE,
            max_tokens=AIParams.MAX_TOKENS,
        )
        return Completion(
            text=response.choices[0].message.content or "",
            provider=self.name,
            model=model,
            tokens_used=response.usage.total_tokens if response.usage else 0
        )


class AIProvider:
    """Groq first, OpenAI as fallback; providers without a key are skipped."""

    def __init__(self, groq_api_key: Optional[str] = None, openai_api_key: Optional[str] = None):
        self.groq_api_key = groq_api_key or settings.GROQ_API_KEY
        self.openai_api_key = openai_api_key or settings.OPENAI_API_KEY
        self._providers: Optional[List[ChatProvider]] = None

    @property
    def providers(self) -> List[ChatProvider]:
        if self._providers is None:
            self._providers = []
            if self.groq_api_key:
                self._providers.append(GroqProvider(self.groq_api_key))
            if self.openai_api_key:
                self._providers.append(OpenAIProvider(self.openai_api_key))
        return self._providers

    def complete(self, prompt: str, model: str = AIModels.TRANSFORM_MODEL) -> Completion:
        if not self.providers:
            raise AIProviderError("No AI providers configured. Set GROQ_API_KEY or OPENAI_API_KEY.")

        last_error = None
        for provider in self.providers:
            try:
                completion = provider.complete(prompt, model)
            except AIProviderError as e:
                logger.warning(f"[AI] {provider.name.value} failed: {e}")
                last_error = e
                continue
            logger.debug(
                f"[AI] {completion.provider.value} answered with {completion.model} "
                f"({completion.tokens_used} tokens)"
            )
            return completion

        raise AIProviderError(f"All providers failed. Last error: {last_error}")

    def generate_text(self, prompt: str, model: str = AIModels.TRANSFORM_MODEL) -> str:
        """Send ``prompt`` as one user message and return the raw reply text."""
        return self.complete(prompt, model).text


_ai_provider: Optional[AIProvider] = None


def get_ai_provider() -> AIProvider:
    """Get or create the shared provider."""
    global _ai_provider
    if _ai_provider is None:
        _ai_provider = AIProvider()
    return _ai_provider
