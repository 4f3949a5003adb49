from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .capabilities import ModelCapabilities
from .types import LLMMessage


@dataclass(frozen=True)
class GeminiPrompt:
    system_instruction: Optional[str] = None
    contents: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class ClaudePrompt:
    system: Optional[str] = None
    messages: List[Dict[str, Any]] = field(default_factory=list)


def _gemini_entry(role: str, text: str) -> Dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


def to_gemini_format(messages: Sequence[LLMMessage]) -> GeminiPrompt:
    """Fold turns into a Gemini system instruction + contents.

    - empty turns are dropped (Gemini answers them with a 500)
    - the first system turn becomes the system instruction
    - later system turns become user turns, in place
    - assistant turns use Gemini's "model" role
    """

    system_instruction: Optional[str] = None
    contents: List[Dict[str, Any]] = []
    system_count = 0

    for m in messages:
        if not m.content:
            continue
        if m.role == "system":
            system_count += 1
            if system_count == 1:
                system_instruction = m.content
            else:
                contents.append(_gemini_entry("user", m.content))
        elif m.role == "user":
            contents.append(_gemini_entry("user", m.content))
        elif m.role == "assistant":
            contents.append(_gemini_entry("model", m.content))

    return GeminiPrompt(system_instruction=system_instruction, contents=contents)


def to_claude_format(messages: Sequence[LLMMessage]) -> ClaudePrompt:
    """Fold turns into an Anthropic system prompt + messages.

    Same system folding as Gemini; empty turns are kept.
    """

    system: Optional[str] = None
    out: List[Dict[str, Any]] = []
    system_count = 0

    for m in messages:
        if m.role == "system":
            system_count += 1
            if system_count == 1:
                system = m.content
            else:
                # TODO: confirm whether extra system turns should carry a marker
                # once they are demoted; today they are indistinguishable from user turns.
                out.append({"role": "user", "content": m.content})
        elif m.role in ("user", "assistant"):
            out.append({"role": m.role, "content": m.content})

    return ClaudePrompt(system=system, messages=out)


def to_openai_format(
    messages: Sequence[LLMMessage], capabilities: ModelCapabilities
) -> List[Dict[str, str]]:
    """Chat-completions messages; system turns use the model's system role name."""

    system_role = (
        capabilities.system_role_name if capabilities.supports_system_role else "user"
    )
    return [
        {
            "role": system_role if m.role == "system" else m.role,
            "content": m.content,
        }
        for m in messages
    ]
