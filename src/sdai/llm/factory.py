from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from anthropic import AsyncAnthropic
from google import genai
from openai import AsyncOpenAI

from sdai import config

from .anthropic_client import ClaudeBackend
from .base import LLMBackend
from .capabilities import ModelCapabilities, ProviderKind
from .errors import ConfigurationError
from .gemini_client import GeminiBackend
from .openai_client import OpenAIBackend
from .schema import SchemaAdapter

_KEY_MESSAGES = {
    ProviderKind.OPENAI: "To access this service you need to send an OpenAI key",
    ProviderKind.GEMINI: "To access this service you need to send a Google key",
    ProviderKind.CLAUDE: "To access this service you need to send an Anthropic key",
}


@dataclass(frozen=True)
class Credentials:
    openai_api_key: Optional[str] = None
    google_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    @classmethod
    def resolve(
        cls,
        *,
        openai_api_key: Optional[str] = None,
        google_api_key: Optional[str] = None,
        anthropic_api_key: Optional[str] = None,
    ) -> "Credentials":
        """Explicit keys first, then the process environment."""

        return cls(
            openai_api_key=openai_api_key or os.getenv(config.OPENAI_API_KEY_ENV),
            google_api_key=google_api_key or os.getenv(config.GOOGLE_API_KEY_ENV),
            anthropic_api_key=anthropic_api_key
            or os.getenv(config.ANTHROPIC_API_KEY_ENV),
        )

    def require(self, kind: ProviderKind) -> Optional[str]:
        """Return the key `kind` needs; local servers need none."""

        if kind is ProviderKind.LOCAL:
            return None
        key = {
            ProviderKind.OPENAI: self.openai_api_key,
            ProviderKind.GEMINI: self.google_api_key,
            ProviderKind.CLAUDE: self.anthropic_api_key,
        }[kind]
        if not key:
            raise ConfigurationError(_KEY_MESSAGES[kind])
        return key


def build_backend(
    capabilities: ModelCapabilities,
    credentials: Credentials,
    *,
    schema_adapter: SchemaAdapter,
    local_base_url: Optional[str] = None,
) -> LLMBackend:
    """Instantiate the one SDK client (and invoker) for the resolved provider kind."""

    kind = capabilities.provider_kind
    api_key = credentials.require(kind)

    if kind is ProviderKind.GEMINI:
        return GeminiBackend(genai.Client(api_key=api_key), capabilities, schema_adapter)

    if kind is ProviderKind.CLAUDE:
        return ClaudeBackend(
            AsyncAnthropic(api_key=api_key), capabilities, schema_adapter
        )

    if kind is ProviderKind.LOCAL:
        client = AsyncOpenAI(
            api_key=config.LOCAL_LLM_API_KEY,
            base_url=local_base_url or config.LOCAL_LLM_BASE_URL,
        )
        return OpenAIBackend(
            client, capabilities, schema_adapter, forward_reasoning_effort=False
        )

    return OpenAIBackend(AsyncOpenAI(api_key=api_key), capabilities, schema_adapter)
