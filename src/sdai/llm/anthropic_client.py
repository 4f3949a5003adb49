from __future__ import annotations

import json
from typing import Any, Dict

from sdai import config

from .base import LLMBackend
from .capabilities import ModelCapabilities
from .schema import (
    STRUCTURED_OUTPUT_TOOL,
    STRUCTURED_OUTPUT_TOOL_DESCRIPTION,
    SchemaAdapter,
)
from .translate import to_claude_format
from .types import CompletionRequest, CompletionResult


class ClaudeBackend(LLMBackend):
    """Anthropic Messages invoker.

    Structured output is requested by forcing a single tool call whose input
    schema is the requested schema; the tool input comes back JSON-encoded in
    `content`.
    """

    def __init__(
        self,
        client: Any,
        capabilities: ModelCapabilities,
        schema_adapter: SchemaAdapter,
        *,
        max_tokens: int = config.CLAUDE_MAX_TOKENS,
    ):
        self._client = client
        self.capabilities = capabilities
        self.schema_adapter = schema_adapter
        self._max_tokens = max_tokens

    def build_params(self, request: CompletionRequest) -> Dict[str, Any]:
        prompt = to_claude_format(request.messages)
        params: Dict[str, Any] = {
            "model": request.model,
            "messages": prompt.messages,
            "max_tokens": self._max_tokens,
        }

        if prompt.system:
            params["system"] = prompt.system

        temperature = self.capabilities.effective_temperature(request.temperature)
        if temperature is not None:
            params["temperature"] = temperature

        if request.schema is not None:
            params["tools"] = [
                {
                    "name": STRUCTURED_OUTPUT_TOOL,
                    "description": STRUCTURED_OUTPUT_TOOL_DESCRIPTION,
                    "input_schema": self.schema_adapter.to_json_schema(request.schema),
                }
            ]
            params["tool_choice"] = {"type": "tool", "name": STRUCTURED_OUTPUT_TOOL}

        return params

    async def send_completion(self, params: Dict[str, Any]) -> Any:
        return await self._client.messages.create(**params)

    def normalize(self, reply: Any, request: CompletionRequest) -> CompletionResult:
        blocks = getattr(reply, "content", None) or []
        if not blocks:
            return CompletionResult(content="")

        first = blocks[0]
        if request.schema is not None and getattr(first, "type", None) == "tool_use":
            return CompletionResult(content=json.dumps(first.input))
        return CompletionResult(content=getattr(first, "text", None) or "")
