"""Static model catalog and user-configurable parameters (presentation only)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class ModelOption:
    label: str
    value: str


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    type: str
    required: bool
    ui_element: str
    save_for_user: str
    label: str
    description: str
    default_value: Optional[Any] = None
    options: Tuple[ModelOption, ...] = ()


MODELS: Tuple[ModelOption, ...] = (
    ModelOption("GPT-5", "gpt-5"),
    ModelOption("GPT-5-mini", "gpt-5-mini"),
    ModelOption("GPT-5-nano", "gpt-5-nano"),
    ModelOption("GPT-4o", "gpt-4o"),
    ModelOption("GPT-4o-mini", "gpt-4o-mini"),
    ModelOption("GPT-4.1", "gpt-4.1"),
    ModelOption("GPT-4.1-mini", "gpt-4.1-mini"),
    ModelOption("GPT-4.1-nano", "gpt-4.1-nano"),
    ModelOption("Gemini 2.5-flash", "gemini-2.5-flash"),
    ModelOption(
        "Gemini 2.5-flash-preview-09-2025", "gemini-2.5-flash-preview-09-2025"
    ),
    ModelOption("Gemini 2.5-flash-lite", "gemini-2.5-flash-lite"),
    ModelOption("Gemini 2.5-pro", "gemini-2.5-pro"),
    ModelOption("Gemini 2.0", "gemini-2.0-flash"),
    ModelOption("Gemini 2.0-Lite", "gemini-2.0-flash-lite"),
    ModelOption("Gemini 1.5", "gemini-1.5-flash"),
    ModelOption("Claude Sonnet 4.5", "claude-sonnet-4-5-20250929"),
    ModelOption("Claude Opus 4.1", "claude-opus-4-1-20250805"),
    ModelOption("Claude Sonnet 4", "claude-sonnet-4-20250514"),
    ModelOption("o1", "o1"),
    ModelOption("o3-mini low", "o3-mini low"),
    ModelOption("o3-mini medium", "o3-mini medium"),
    ModelOption("o3-mini high", "o3-mini high"),
    ModelOption("o3", "o3"),
    ModelOption("o4-mini", "o4-mini"),
)

DEFAULT_MODEL = "gemini-2.5-flash-preview-09-2025"

CONFIGURABLE_PARAMETERS: Tuple[ParameterSpec, ...] = (
    ParameterSpec(
        name="openai_api_key",
        type="string",
        required=False,
        ui_element="password",
        save_for_user="global",
        label="Open AI API Key",
        description="Leave blank for the default, or your Open AI key - skprojectXXXXX",
    ),
    ParameterSpec(
        name="google_api_key",
        type="string",
        required=False,
        ui_element="password",
        save_for_user="global",
        label="Google API Key",
        description="Leave blank for the default, or your Google API key - XXXXXX",
    ),
    ParameterSpec(
        name="anthropic_api_key",
        type="string",
        required=False,
        ui_element="password",
        save_for_user="global",
        label="Anthropic API Key",
        description="Leave blank for the default, or your Anthropic API key - sk-ant-XXXXXX",
    ),
    ParameterSpec(
        name="underlying_model",
        type="string",
        required=False,
        ui_element="combobox",
        save_for_user="local",
        label="LLM Model",
        description="The LLM model that you want to use to process your queries.",
        default_value=DEFAULT_MODEL,
        options=MODELS,
    ),
)
