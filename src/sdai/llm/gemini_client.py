from __future__ import annotations

from typing import Any, Dict

from .base import LLMBackend
from .capabilities import ModelCapabilities
from .schema import SchemaAdapter
from .translate import to_gemini_format
from .types import CompletionRequest, CompletionResult


class GeminiBackend(LLMBackend):
    """google-genai invoker.

    Gemini never returns a pre-parsed object: structured output comes back as
    raw JSON text in `content` and parsing is left to the caller.
    """

    def __init__(
        self, client: Any, capabilities: ModelCapabilities, schema_adapter: SchemaAdapter
    ):
        self._client = client
        self.capabilities = capabilities
        self.schema_adapter = schema_adapter

    def build_params(self, request: CompletionRequest) -> Dict[str, Any]:
        prompt = to_gemini_format(request.messages)
        params: Dict[str, Any] = {"model": request.model, "contents": prompt.contents}

        config: Dict[str, Any] = {}
        if prompt.system_instruction:
            config["system_instruction"] = prompt.system_instruction

        temperature = self.capabilities.effective_temperature(request.temperature)
        if temperature is not None:
            config["temperature"] = temperature

        if request.schema is not None:
            config["response_mime_type"] = "application/json"
            config["response_json_schema"] = self.schema_adapter.to_json_schema(
                request.schema
            )

        if config:
            params["config"] = config
        return params

    async def send_completion(self, params: Dict[str, Any]) -> Any:
        return await self._client.aio.models.generate_content(**params)

    def normalize(self, reply: Any, request: CompletionRequest) -> CompletionResult:
        return CompletionResult(content=getattr(reply, "text", None) or "")
