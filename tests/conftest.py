import json

import pytest

SAMPLE_FILES = [
    {"path": "main.py", "content": "print('hello a2a')\n"},
    {"path": "requirements.txt", "content": "a2a-sdk>=0.3.0\nopenai>=1.0.0\n"},
    {"path": "README.md", "content": "# Weather agent\n"},
    {"path": ".env.example", "content": "OPENAI_API_KEY=your_openai_api_key_here\n"},
]


class FakeResponse:
    def __init__(self, content):
        self.content = content


class FakeStructuredCallable:
    def __init__(self, owner):
        self._owner = owner

    async def ainvoke(self, messages, **kwargs):
        self._owner.calls.append("structured")
        self._owner.messages = messages
        if isinstance(self._owner.structured, Exception):
            raise self._owner.structured
        return self._owner.structured


class FakeChatModel:
    """Deterministic stand-in for the OpenAI chat model."""

    def __init__(self):
        # structured: include_raw-style dict, or an exception to raise
        self.structured = NotImplementedError("responses.parse unsupported")
        # text: AIMessage content (str or list of blocks), or an exception to raise
        self.text = json.dumps({"files": SAMPLE_FILES})
        self.calls = []
        self.messages = None
        self.schema = None
        self.init_args = None

    def with_structured_output(self, schema, **kwargs):
        self.schema = schema
        return FakeStructuredCallable(self)

    async def ainvoke(self, messages, **kwargs):
        self.calls.append("free_text")
        self.messages = messages
        if isinstance(self.text, Exception):
            raise self.text
        return FakeResponse(self.text)


@pytest.fixture
def sample_files():
    return json.loads(json.dumps(SAMPLE_FILES))


@pytest.fixture
def fake_llm(monkeypatch):
    """Patch get_llm so no test ever reaches the network."""
    fake = FakeChatModel()

    def _get_llm(model, reasoning_effort):
        fake.init_args = (model, reasoning_effort)
        return fake

    monkeypatch.setattr("a2a_codegen.core.llm_client.get_llm", _get_llm)
    return fake
