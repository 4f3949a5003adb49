"""Model identifier -> capability record.

Every rule lives in one of the tables below so it can be read (and tested)
on its own:

- PROVIDER_RULES: ordered token -> provider kind; first token found wins.
- LEGACY_MODELS: identifiers without structured output or a system role.
- NO_TEMPERATURE_PREFIXES: reasoning-style and newest general-purpose families.
- SYSTEM_ROLE_NAMES: what each provider calls the system turn.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple


class ProviderKind(enum.Enum):
    OPENAI = "openai"
    GEMINI = "gemini"
    CLAUDE = "claude"
    LOCAL = "local"  # OpenAI-compatible local server


PROVIDER_RULES: Tuple[Tuple[str, ProviderKind], ...] = (
    ("gemini", ProviderKind.GEMINI),
    ("llama", ProviderKind.LOCAL),
    ("deepseek", ProviderKind.LOCAL),
    ("claude", ProviderKind.CLAUDE),
)
DEFAULT_PROVIDER_KIND = ProviderKind.OPENAI

LEGACY_MODELS = frozenset({"o1-mini"})
LEGACY_TEMPERATURE = 1.0

NO_TEMPERATURE_PREFIXES: Tuple[str, ...] = ("o", "gpt-5")

SYSTEM_ROLE_NAMES = {
    ProviderKind.OPENAI: "developer",
    ProviderKind.GEMINI: "system",
    ProviderKind.CLAUDE: "system",
    ProviderKind.LOCAL: "system",
}

REASONING_EFFORTS = frozenset({"minimal", "low", "medium", "high"})


@dataclass(frozen=True)
class ModelCapabilities:
    model: str
    provider_kind: ProviderKind
    supports_structured_output: bool
    supports_system_role: bool
    supports_temperature: bool
    system_role_name: str
    fixed_temperature: Optional[float] = None

    def effective_temperature(self, requested: Optional[float]) -> Optional[float]:
        """Temperature that may be sent for this model, or None to omit it."""

        if self.fixed_temperature is not None:
            return self.fixed_temperature
        if not self.supports_temperature:
            return None
        return requested


def split_reasoning_effort(identifier: str) -> Tuple[str, Optional[str]]:
    """Split ``"o3-mini high"`` into ``("o3-mini", "high")``.

    Identifiers without a recognized trailing effort come back unchanged.
    """

    parts = identifier.strip().rsplit(None, 1)
    if len(parts) == 2 and parts[1].lower() in REASONING_EFFORTS:
        return parts[0].strip(), parts[1].lower()
    return identifier.strip(), None


def provider_kind(identifier: str) -> ProviderKind:
    for token, kind in PROVIDER_RULES:
        if token in identifier:
            return kind
    return DEFAULT_PROVIDER_KIND


def supports_temperature(identifier: str) -> bool:
    return not identifier.startswith(NO_TEMPERATURE_PREFIXES)


def is_legacy(identifier: str) -> bool:
    return identifier in LEGACY_MODELS


def resolve_capabilities(identifier: str) -> ModelCapabilities:
    """Derive the capability record for a model identifier. Never fails."""

    base, _ = split_reasoning_effort(identifier)
    kind = provider_kind(base)
    legacy = is_legacy(base)
    return ModelCapabilities(
        model=base,
        provider_kind=kind,
        supports_structured_output=not legacy,
        supports_system_role=not legacy,
        supports_temperature=supports_temperature(base),
        system_role_name=SYSTEM_ROLE_NAMES[kind],
        fixed_temperature=LEGACY_TEMPERATURE if legacy else None,
    )
