import asyncio
import json
from types import SimpleNamespace

import pytest
from pydantic import BaseModel


class Answer(BaseModel):
    answer: int


def test_missing_credential_fails_at_construction(fake_sdks):
    from sdai.llm import ConfigurationError, LLMFacade

    with pytest.raises(ConfigurationError):
        LLMFacade("gpt-5")
    with pytest.raises(ConfigurationError):
        LLMFacade("gemini-2.5-flash")
    with pytest.raises(ConfigurationError):
        LLMFacade("claude-sonnet-4-20250514")

    # nothing was allocated before the failure
    assert fake_sdks == {"openai": [], "genai": [], "anthropic": []}


def test_credentials_fall_back_to_environment(monkeypatch, fake_sdks):
    from sdai.llm import LLMFacade, ProviderKind

    monkeypatch.setenv("GOOGLE_API_KEY", "g-env")
    facade = LLMFacade("gemini-2.5-flash")

    assert facade.provider_kind is ProviderKind.GEMINI
    assert fake_sdks["genai"][0].init_kwargs == {"api_key": "g-env"}


def test_explicit_credential_wins_over_environment(monkeypatch, fake_sdks):
    from sdai.llm import LLMFacade

    monkeypatch.setenv("ANTHROPIC_API_KEY", "a-env")
    LLMFacade("claude-opus-4-1-20250805", anthropic_api_key="a-explicit")
    assert fake_sdks["anthropic"][0].init_kwargs == {"api_key": "a-explicit"}


def test_exactly_one_client_is_created(fake_sdks):
    from sdai.llm import LLMFacade

    LLMFacade(
        "claude-sonnet-4-20250514",
        openai_api_key="o",
        google_api_key="g",
        anthropic_api_key="a",
    )
    assert len(fake_sdks["anthropic"]) == 1
    assert fake_sdks["openai"] == [] and fake_sdks["genai"] == []


def test_local_models_need_no_key_and_use_local_base_url(fake_sdks):
    from sdai import config
    from sdai.llm import LLMFacade, ProviderKind

    facade = LLMFacade("deepseek-r1")
    assert facade.provider_kind is ProviderKind.LOCAL
    assert fake_sdks["openai"][0].init_kwargs["base_url"] == config.LOCAL_LLM_BASE_URL

    LLMFacade("llama3.1", local_base_url="http://gpu-box:11434/v1")
    assert fake_sdks["openai"][1].init_kwargs["base_url"] == "http://gpu-box:11434/v1"


@pytest.mark.asyncio
async def test_gpt5_request_uses_developer_role_and_no_temperature(fake_sdks, msg):
    from sdai.llm import LLMFacade

    facade = LLMFacade("gpt-5", openai_api_key="o")
    result = await facade.create_chat_completion(
        [msg("system", "Be terse"), msg("user", "Hi")], "gpt-5", temperature=0
    )

    client = fake_sdks["openai"][0]
    (sent,) = client.create.calls
    assert sent["messages"][0] == {"role": "developer", "content": "Be terse"}
    assert "temperature" not in sent
    assert "response_format" not in sent
    assert result.content == "hello"


@pytest.mark.asyncio
async def test_reasoning_suffix_is_split_and_forwarded(fake_sdks, msg):
    from sdai.llm import LLMFacade

    facade = LLMFacade("o3-mini high", openai_api_key="o")
    await facade.create_chat_completion([msg("user", "Q")])

    (sent,) = fake_sdks["openai"][0].create.calls
    assert sent["model"] == "o3-mini"
    assert sent["reasoning_effort"] == "high"


@pytest.mark.asyncio
async def test_explicit_reasoning_effort_wins_over_suffix(fake_sdks, msg):
    from sdai.llm import LLMFacade

    facade = LLMFacade("o3-mini", openai_api_key="o")
    await facade.create_chat_completion(
        [msg("user", "Q")], "o3-mini low", reasoning_effort="medium"
    )
    (sent,) = fake_sdks["openai"][0].create.calls
    assert sent["reasoning_effort"] == "medium"


@pytest.mark.asyncio
async def test_gemini_folds_system_turns(fake_sdks, msg):
    from sdai.llm import LLMFacade

    facade = LLMFacade("gemini-2.5-flash", google_api_key="g")
    result = await facade.create_chat_completion(
        [msg("system", "S1"), msg("system", "S2"), msg("user", "Q")],
        "gemini-2.5-flash",
    )

    (sent,) = fake_sdks["genai"][0].generate_content.calls
    assert sent["config"]["system_instruction"] == "S1"
    assert sent["contents"] == [
        {"role": "user", "parts": [{"text": "S2"}]},
        {"role": "user", "parts": [{"text": "Q"}]},
    ]
    assert result.content == '{"answer": 42}'


@pytest.mark.asyncio
async def test_claude_schema_forces_tool_and_returns_tool_input(fake_sdks, msg):
    from sdai.llm import LLMFacade

    facade = LLMFacade("claude-sonnet-4-5-20250929", anthropic_api_key="a")
    client = fake_sdks["anthropic"][0]
    client.create.reply = SimpleNamespace(
        content=[SimpleNamespace(type="tool_use", input={"answer": 9})]
    )

    result = await facade.create_chat_completion(
        [{"role": "system", "content": "S"}, {"role": "user", "content": "Q"}],
        "claude-sonnet-4-5-20250929",
        schema=Answer,
    )

    (sent,) = client.create.calls
    assert sent["tool_choice"]["type"] == "tool"
    assert result.content == json.dumps({"answer": 9})
    assert result.as_json() == {"answer": 9}


@pytest.mark.asyncio
async def test_openai_refusal_is_surfaced(fake_sdks, msg):
    from sdai.llm import LLMFacade, RefusalError

    facade = LLMFacade("gpt-4o", openai_api_key="o")
    fake_sdks["openai"][0].message = SimpleNamespace(
        content=None, parsed=None, refusal="I can't do that"
    )
    result = await facade.create_chat_completion([msg("user", "Q")], schema=Answer)

    assert result.refusal == "I can't do that"
    with pytest.raises(RefusalError):
        result.as_json()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "model,key",
    [
        ("gpt-4o", {"openai_api_key": "o"}),
        ("gemini-2.5-pro", {"google_api_key": "g"}),
        ("claude-sonnet-4-20250514", {"anthropic_api_key": "a"}),
        ("llama3.1", {}),
    ],
)
async def test_every_branch_yields_exactly_one_truthy_field(fake_sdks, msg, model, key):
    from sdai.llm import LLMFacade

    facade = LLMFacade(model, **key)
    result = await facade.create_chat_completion([msg("user", "Q")])

    truthy = [f for f in (result.content, result.parsed, result.refusal) if f]
    assert len(truthy) == 1


@pytest.mark.asyncio
async def test_transport_errors_propagate_unchanged(fake_sdks, msg):
    from sdai.llm import LLMFacade

    class Boom(Exception):
        pass

    facade = LLMFacade("gpt-4o", openai_api_key="o")

    async def _fail(**kwargs):
        raise Boom("rate limited")

    fake_sdks["openai"][0].chat.completions.create = _fail

    with pytest.raises(Boom):
        await facade.create_chat_completion([msg("user", "Q")])


@pytest.mark.asyncio
async def test_schema_conversion_errors_propagate(fake_sdks, msg):
    from sdai.llm import LLMFacade, SchemaConversionError

    facade = LLMFacade("gemini-2.5-flash", google_api_key="g")
    with pytest.raises(SchemaConversionError):
        await facade.create_chat_completion([msg("user", "Q")], schema={"type": 5})
    assert fake_sdks["genai"][0].generate_content.calls == []


def test_static_metadata_needs_no_construction():
    from sdai.llm import LLMFacade
    from sdai.llm.catalog import DEFAULT_MODEL

    models = LLMFacade.list_supported_models()
    assert {"gpt-5", "o3-mini high", DEFAULT_MODEL} <= {m.value for m in models}

    params = {p.name: p for p in LLMFacade.list_configurable_parameters()}
    assert params["underlying_model"].default_value == DEFAULT_MODEL
    assert params["underlying_model"].options == tuple(models)
    assert params["openai_api_key"].ui_element == "password"


def test_unlisted_identifier_still_resolves(fake_sdks):
    from sdai.llm import LLMFacade, ProviderKind

    facade = LLMFacade("gemini-9-ultra-experimental", google_api_key="g")
    assert facade.provider_kind is ProviderKind.GEMINI


@pytest.mark.asyncio
async def test_local_family_never_sends_reasoning_effort(fake_sdks, msg):
    from sdai.llm import LLMFacade, ProviderKind

    facade = LLMFacade("llama3.1 high")
    assert facade.provider_kind is ProviderKind.LOCAL

    await facade.create_chat_completion([msg("user", "Q")])
    await facade.create_chat_completion(
        [msg("user", "Q")], "llama3.1", reasoning_effort="low"
    )

    calls = fake_sdks["openai"][0].create.calls
    assert [c["model"] for c in calls] == ["llama3.1", "llama3.1"]
    assert all("reasoning_effort" not in c for c in calls)


@pytest.mark.asyncio
async def test_concurrent_calls_keep_their_own_turns(fake_sdks, msg):
    from sdai.llm import LLMFacade

    facade = LLMFacade("gpt-4o", openai_api_key="o")
    client = fake_sdks["openai"][0]

    async def _echo(**kwargs):
        # yield so the calls interleave
        await asyncio.sleep(0)
        last = kwargs["messages"][-1]["content"]
        await asyncio.sleep(0)
        message = SimpleNamespace(content=last, parsed=None, refusal=None)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    client.chat.completions.create = _echo

    prompts = [f"question {i}" for i in range(20)]
    results = await asyncio.gather(
        *(
            facade.create_chat_completion(
                [msg("system", f"system {p}"), msg("user", p)],
                "o3-mini high" if i % 2 else None,
            )
            for i, p in enumerate(prompts)
        )
    )

    assert [r.content for r in results] == prompts
    assert facade.model == "gpt-4o"
