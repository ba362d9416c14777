import logging

import pytest

from a2a_codegen.core.errors import SchemaError
from a2a_codegen.core.validator import coerce_generation_result
from a2a_codegen.models import GeneratedFile, GenerationResult


def test_valid_payload(sample_files):
    result = coerce_generation_result({"files": sample_files})
    assert [f.path for f in result.files] == ["main.py", "requirements.txt", "README.md", ".env.example"]


def test_validating_a_valid_result_is_idempotent(sample_files):
    once = coerce_generation_result({"files": sample_files})
    assert coerce_generation_result(once) == once
    assert coerce_generation_result(once.model_dump()) == once


def test_malformed_entries_are_dropped_in_order(caplog):
    files = [
        {"path": "a.py", "content": "a"},
        {"path": "b.py"},
        "not-an-object",
        {"path": 3, "content": "x"},
        {"path": "c.py", "content": ""},
        None,
        {"path": "d.py", "content": ["list"]},
        {"path": "e.py", "content": "e", "extra": True},
    ]
    with caplog.at_level(logging.WARNING, logger="a2a_codegen.core.validator"):
        result = coerce_generation_result({"files": files})

    assert [(f.path, f.content) for f in result.files] == [("a.py", "a"), ("c.py", ""), ("e.py", "e")]
    assert len([r for r in caplog.records if "Dropping malformed" in r.getMessage()]) == 5


def test_one_file_fails_two_files_pass():
    with pytest.raises(SchemaError):
        coerce_generation_result({"files": [{"path": "a", "content": "a"}]})
    result = coerce_generation_result({"files": [{"path": "a", "content": "a"}, {"path": "b", "content": "b"}]})
    assert len(result.files) == 2


def test_count_gate_applies_after_filtering():
    with pytest.raises(SchemaError, match="missing or invalid 'files' array"):
        coerce_generation_result({"files": [{"path": "a", "content": "a"}, {"path": "b"}]})


@pytest.mark.parametrize("parsed", [None, [], "files", {"files": "a.py"}, {"files": None}, {"result": []}])
def test_structurally_broken_payloads(parsed):
    with pytest.raises(SchemaError):
        coerce_generation_result(parsed)


def test_duplicates_and_large_sets_pass_through():
    files = [{"path": "same.py", "content": str(i)} for i in range(50)]
    result = coerce_generation_result({"files": files})
    assert len(result.files) == 50


def test_accepts_nested_pydantic_entries():
    parsed = {"files": [GeneratedFile(path="a", content="1"), GeneratedFile(path="b", content="2")]}
    assert coerce_generation_result(parsed) == GenerationResult(files=parsed["files"])
