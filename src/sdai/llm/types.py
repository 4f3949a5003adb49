from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional, Sequence

from pydantic import BaseModel

from .errors import RefusalError, ResponseFormatError

Role = Literal["system", "user", "assistant"]

# A pydantic model class or a JSON Schema dict.
SchemaLike = Any


@dataclass(frozen=True)
class LLMMessage:
    role: Role
    content: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LLMMessage":
        return cls(role=data["role"], content=data.get("content") or "")


@dataclass(frozen=True)
class CompletionRequest:
    """Everything one completion call needs, built fresh per call."""

    messages: Sequence[LLMMessage]
    model: str
    schema: SchemaLike = None
    temperature: Optional[float] = None
    reasoning_effort: Optional[str] = None


@dataclass(frozen=True)
class CompletionResult:
    """Provider-neutral result; exactly one of content/parsed/refusal is set.

    Check the branches in priority order: refusal, then parsed, then content.
    """

    content: Optional[str] = None
    parsed: Any = None
    refusal: Optional[str] = None

    def __post_init__(self) -> None:
        populated = [
            name
            for name in ("content", "parsed", "refusal")
            if getattr(self, name) is not None
        ]
        if len(populated) != 1:
            raise ValueError(
                f"CompletionResult needs exactly one of content/parsed/refusal, got {populated}"
            )

    def as_json(self) -> Any:
        """Return the structured payload, parsing text content when needed."""

        if self.refusal is not None:
            raise RefusalError(self.refusal)
        if self.parsed is not None:
            if isinstance(self.parsed, BaseModel):
                return self.parsed.model_dump()
            return self.parsed
        try:
            return json.loads(self.content or "")
        except json.JSONDecodeError as e:
            raise ResponseFormatError(f"Bad JSON returned by underlying LLM: {e}") from e
