from types import SimpleNamespace

import pytest


class _Recorder:
    """Async callable that records kwargs and returns a canned reply."""

    def __init__(self, reply=None):
        self.reply = reply
        self.calls: list[dict] = []

    async def __call__(self, **kwargs):
        self.calls.append(kwargs)
        return self.reply


class FakeOpenAIClient:
    def __init__(self, **kwargs):
        self.init_kwargs = kwargs
        self.message = SimpleNamespace(content="hello", parsed=None, refusal=None)
        self.create = _Recorder()
        self.parse = _Recorder()
        self.chat = SimpleNamespace(
            completions=SimpleNamespace(create=self._create, parse=self._parse)
        )

    def _completion(self):
        return SimpleNamespace(choices=[SimpleNamespace(message=self.message)])

    async def _create(self, **kwargs):
        await self.create(**kwargs)
        return self._completion()

    async def _parse(self, **kwargs):
        await self.parse(**kwargs)
        return self._completion()


class FakeGenaiClient:
    def __init__(self, **kwargs):
        self.init_kwargs = kwargs
        self.generate_content = _Recorder(SimpleNamespace(text='{"answer": 42}'))
        self.aio = SimpleNamespace(
            models=SimpleNamespace(generate_content=self.generate_content)
        )


class FakeAnthropicClient:
    def __init__(self, **kwargs):
        self.init_kwargs = kwargs
        self.create = _Recorder(
            SimpleNamespace(content=[SimpleNamespace(type="text", text="plain reply")])
        )
        self.messages = SimpleNamespace(create=self.create)


@pytest.fixture(autouse=True)
def _clean_provider_env(monkeypatch):
    for name in ("OPENAI_API_KEY", "GOOGLE_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_sdks(monkeypatch):
    """Replace the SDK client constructors used by the backend factory."""

    from sdai.llm import factory

    created: dict[str, list] = {"openai": [], "genai": [], "anthropic": []}

    def _openai(**kwargs):
        client = FakeOpenAIClient(**kwargs)
        created["openai"].append(client)
        return client

    def _genai(**kwargs):
        client = FakeGenaiClient(**kwargs)
        created["genai"].append(client)
        return client

    def _anthropic(**kwargs):
        client = FakeAnthropicClient(**kwargs)
        created["anthropic"].append(client)
        return client

    monkeypatch.setattr(factory, "AsyncOpenAI", _openai)
    monkeypatch.setattr(factory, "genai", SimpleNamespace(Client=_genai))
    monkeypatch.setattr(factory, "AsyncAnthropic", _anthropic)
    return created


@pytest.fixture
def msg():
    from sdai.llm.types import LLMMessage

    def _factory(role: str, content: str) -> LLMMessage:
        return LLMMessage(role=role, content=content)

    return _factory


@pytest.fixture
def fake_clients():
    """The fake SDK client classes, for wiring backends by hand."""

    return SimpleNamespace(
        openai=FakeOpenAIClient, genai=FakeGenaiClient, anthropic=FakeAnthropicClient
    )
