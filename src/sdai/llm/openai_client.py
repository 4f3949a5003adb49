from __future__ import annotations

from typing import Any, Dict

from .base import LLMBackend
from .capabilities import ModelCapabilities
from .schema import SchemaAdapter
from .translate import to_openai_format
from .types import CompletionRequest, CompletionResult


class OpenAIBackend(LLMBackend):
    """Chat Completions invoker for OpenAI and OpenAI-compatible local servers.

    With a pydantic schema the SDK's `parse` helper is used, so the reply
    message may carry `refusal` or `parsed`; otherwise `content`.
    Reasoning effort is only forwarded when `forward_reasoning_effort` is set
    (the hosted OpenAI API; local servers do not understand it).
    """

    def __init__(
        self,
        client: Any,
        capabilities: ModelCapabilities,
        schema_adapter: SchemaAdapter,
        *,
        forward_reasoning_effort: bool = True,
    ):
        self._client = client
        self.capabilities = capabilities
        self.schema_adapter = schema_adapter
        self._forward_reasoning_effort = forward_reasoning_effort

    def build_params(self, request: CompletionRequest) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "model": request.model,
            "messages": to_openai_format(request.messages, self.capabilities),
        }

        if request.schema is not None:
            params["response_format"] = self.schema_adapter.to_openai(request.schema)

        temperature = self.capabilities.effective_temperature(request.temperature)
        if temperature is not None:
            params["temperature"] = temperature

        if request.reasoning_effort and self._forward_reasoning_effort:
            params["reasoning_effort"] = request.reasoning_effort

        return params

    async def send_completion(self, params: Dict[str, Any]) -> Any:
        if isinstance(params.get("response_format"), type):
            completion = await self._client.chat.completions.parse(**params)
        else:
            completion = await self._client.chat.completions.create(**params)
        return completion.choices[0].message

    def normalize(self, reply: Any, request: CompletionRequest) -> CompletionResult:
        refusal = getattr(reply, "refusal", None)
        if refusal:
            return CompletionResult(refusal=refusal)

        parsed = getattr(reply, "parsed", None)
        if parsed is not None:
            return CompletionResult(parsed=parsed)

        return CompletionResult(content=getattr(reply, "content", None) or "")
