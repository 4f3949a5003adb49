from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

from sdai import logger as logger_mod

from .base import LLMBackend
from .capabilities import (
    ModelCapabilities,
    ProviderKind,
    resolve_capabilities,
    split_reasoning_effort,
)
from .catalog import (
    CONFIGURABLE_PARAMETERS,
    DEFAULT_MODEL,
    MODELS,
    ModelOption,
    ParameterSpec,
)
from .factory import Credentials, build_backend
from .schema import JsonSchemaAdapter, SchemaAdapter
from .types import CompletionRequest, CompletionResult, LLMMessage, SchemaLike

log = logger_mod.get_logger(__name__)

MessageLike = Union[LLMMessage, Mapping[str, Any]]


def _coerce_messages(messages: Sequence[MessageLike]) -> List[LLMMessage]:
    return [
        m if isinstance(m, LLMMessage) else LLMMessage.from_dict(m) for m in messages
    ]


class LLMFacade:
    """Single entry point for structured completions across providers.

    The provider is resolved once from `model` at construction, and exactly one
    SDK client is created for it. A missing credential fails here, before any
    call is made. After construction nothing on the facade changes, so one
    instance can serve concurrent calls.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        *,
        openai_api_key: Optional[str] = None,
        google_api_key: Optional[str] = None,
        anthropic_api_key: Optional[str] = None,
        local_base_url: Optional[str] = None,
        schema_adapter: Optional[SchemaAdapter] = None,
    ):
        self._model = model
        self._capabilities = resolve_capabilities(model)
        credentials = Credentials.resolve(
            openai_api_key=openai_api_key,
            google_api_key=google_api_key,
            anthropic_api_key=anthropic_api_key,
        )
        self._backend: LLMBackend = build_backend(
            self._capabilities,
            credentials,
            schema_adapter=schema_adapter or JsonSchemaAdapter(),
            local_base_url=local_base_url,
        )
        log.info(
            f"LLM facade ready: model={model} provider={self._capabilities.provider_kind.value}"
        )

    @property
    def model(self) -> str:
        return self._model

    @property
    def capabilities(self) -> ModelCapabilities:
        return self._capabilities

    @property
    def provider_kind(self) -> ProviderKind:
        return self._capabilities.provider_kind

    async def create_chat_completion(
        self,
        messages: Sequence[MessageLike],
        model: Optional[str] = None,
        schema: SchemaLike = None,
        temperature: Optional[float] = None,
        reasoning_effort: Optional[str] = None,
    ) -> CompletionResult:
        """Run one completion and return exactly one of content/parsed/refusal.

        `model` defaults to the construction model; a trailing effort such as
        ``"o3-mini high"`` is split off (an explicit `reasoning_effort` wins).
        Provider and schema-conversion errors propagate unchanged.
        """

        base_model, suffix_effort = split_reasoning_effort(model or self._model)
        request = CompletionRequest(
            messages=_coerce_messages(messages),
            model=base_model,
            schema=schema,
            temperature=temperature,
            reasoning_effort=reasoning_effort or suffix_effort,
        )

        params = self._backend.build_params(request)
        log.debug(
            "LLM request: provider=%s model=%s messages=%d structured=%s",
            self.provider_kind.value,
            base_model,
            len(request.messages),
            schema is not None,
        )
        reply = await self._backend.send_completion(params)
        return self._backend.normalize(reply, request)

    @staticmethod
    def list_supported_models() -> List[ModelOption]:
        return list(MODELS)

    @staticmethod
    def list_configurable_parameters() -> List[ParameterSpec]:
        return list(CONFIGURABLE_PARAMETERS)
