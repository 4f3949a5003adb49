"""LLM provider abstractions (OpenAI / Gemini / Anthropic / local).

Design goals:
- Keep provider-specific SDKs isolated behind one facade.
- Resolve model capabilities from the identifier with explicit rule tables.
- Normalize every reply into one result with exactly one populated branch.
"""

from .capabilities import ModelCapabilities, ProviderKind, resolve_capabilities
from .errors import (
    ConfigurationError,
    LLMError,
    RefusalError,
    ResponseFormatError,
    SchemaConversionError,
)
from .facade import LLMFacade
from .types import CompletionResult, LLMMessage

__all__ = [
    "CompletionResult",
    "ConfigurationError",
    "LLMError",
    "LLMFacade",
    "LLMMessage",
    "ModelCapabilities",
    "ProviderKind",
    "RefusalError",
    "ResponseFormatError",
    "SchemaConversionError",
    "resolve_capabilities",
]
