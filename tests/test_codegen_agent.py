import io
import json
import zipfile

import pytest
from pydantic import ValidationError

from a2a_codegen.core.codegen_agent import build_request, generate_a2a_archive, generate_a2a_server
from a2a_codegen.core.errors import (
    GenerationError,
    InputError,
    ModelInvocationError,
    NormalizationError,
    SchemaError,
)
from a2a_codegen.models import GenerationResult


def test_build_request_defaults():
    req = build_request("An agent")
    assert req.services == {}
    assert req.model == "gpt-5"
    assert req.reasoning_effort == "minimal"


def test_request_is_immutable():
    req = build_request("An agent")
    with pytest.raises(ValidationError):
        req.model = "other"


@pytest.mark.parametrize("kwargs", [
    {"agent_description": None},
    {"agent_description": ""},
    {"agent_description": "   "},
    {"agent_description": 42},
    {"agent_description": "x", "reasoning_effort": "extreme"},
    {"agent_description": "x", "services": ["not", "a", "map"]},
])
def test_build_request_rejects_bad_input(kwargs):
    with pytest.raises(InputError):
        build_request(**kwargs)


@pytest.mark.asyncio
async def test_input_error_before_any_model_call(fake_llm):
    with pytest.raises(InputError):
        await generate_a2a_server("")
    assert fake_llm.calls == []


@pytest.mark.asyncio
async def test_pipeline_passes_request_to_model(fake_llm):
    result = await generate_a2a_server(
        "Books meeting rooms",
        services={"calendar": {"provider": "google"}},
        model="gpt-5-mini",
        reasoning_effort="medium",
    )

    assert isinstance(result, GenerationResult)
    assert len(result.files) == 4
    assert fake_llm.init_args == ("gpt-5-mini", "medium")
    user_prompt = fake_llm.messages[1].content
    assert "Books meeting rooms" in user_prompt
    assert '"provider": "google"' in user_prompt


@pytest.mark.asyncio
async def test_fallback_is_invisible_to_caller(fake_llm, sample_files):
    fake_llm.text = "Here you go:\n```json\n" + json.dumps({"files": sample_files}) + "\n```"
    result = await generate_a2a_server("agent")
    assert [f.path for f in result.files] == [f["path"] for f in sample_files]


@pytest.mark.asyncio
@pytest.mark.parametrize("text, error", [
    (ConnectionError("boom"), ModelInvocationError),
    ("", ModelInvocationError),
    ("no json here", NormalizationError),
    ('{"files": [{"path": "only.py", "content": ""}]}', SchemaError),
    ('{"project": "x"}', SchemaError),
])
async def test_failures_surface_as_generation_errors(fake_llm, text, error):
    fake_llm.text = text
    with pytest.raises(error) as exc:
        await generate_a2a_server("agent")
    assert isinstance(exc.value, GenerationError)


@pytest.mark.asyncio
async def test_unexpected_invoker_error_is_wrapped(monkeypatch):
    async def _explode(*args, **kwargs):
        raise KeyError("surprise")

    monkeypatch.setattr("a2a_codegen.core.codegen_agent.invoke_model", _explode)
    with pytest.raises(ModelInvocationError):
        await generate_a2a_server("agent")


@pytest.mark.asyncio
async def test_archive_generation(fake_llm, sample_files):
    payload = await generate_a2a_archive("agent")
    assert payload.size == len(payload.data)
    with zipfile.ZipFile(io.BytesIO(payload.data)) as zf:
        assert zf.namelist() == [f["path"] for f in sample_files]


@pytest.mark.asyncio
async def test_deeply_nested_output_is_a_normalization_error(fake_llm):
    fake_llm.text = '{"a":' + "[" * 100000

    with pytest.raises(NormalizationError):
        await generate_a2a_server("agent")
