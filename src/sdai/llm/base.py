from __future__ import annotations

from typing import Any, Dict, Protocol

from .capabilities import ModelCapabilities
from .schema import SchemaAdapter
from .types import CompletionRequest, CompletionResult


class LLMBackend(Protocol):
    """One provider's invoker: build the native request, send it, normalize the reply.

    A backend owns exactly one SDK client, created before the first call and
    never replaced afterwards.
    """

    capabilities: ModelCapabilities
    schema_adapter: SchemaAdapter

    def build_params(self, request: CompletionRequest) -> Dict[str, Any]:
        raise NotImplementedError

    async def send_completion(self, params: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def normalize(self, reply: Any, request: CompletionRequest) -> CompletionResult:
        raise NotImplementedError
