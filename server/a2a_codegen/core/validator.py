# a2a_codegen/core/validator.py
import logging
from typing import Any, List

from pydantic import BaseModel

from ..models import GeneratedFile, GenerationResult
from ..utils.config import MIN_FILES
from .errors import SchemaError

logger = logging.getLogger(__name__)


def _as_plain(parsed: Any) -> Any:
    # structured-output wrappers may hand back pydantic instances
    if isinstance(parsed, BaseModel):
        return parsed.model_dump()
    return parsed


def coerce_generation_result(parsed: Any) -> GenerationResult:
    """
    Parse-or-reject boundary for model output.

    Individually malformed entries of 'files' are dropped (and logged); the
    payload as a whole is rejected only when fewer than MIN_FILES entries survive.
    """
    parsed = _as_plain(parsed)
    files_raw = parsed.get("files") if isinstance(parsed, dict) else None
    if not isinstance(files_raw, list):
        raise SchemaError("Model output missing or invalid 'files' array")

    files: List[GeneratedFile] = []
    for idx, it in enumerate(files_raw):
        it = _as_plain(it)
        if isinstance(it, dict) and isinstance(it.get("path"), str) and isinstance(it.get("content"), str):
            files.append(GeneratedFile(path=it["path"], content=it["content"]))
        else:
            logger.warning("Dropping malformed file entry #%d: %s", idx, _describe(it))

    if len(files) < MIN_FILES:
        raise SchemaError("Model output missing or invalid 'files' array")
    return GenerationResult(files=files)


def _describe(it: Any) -> str:
    if isinstance(it, dict):
        keys = {k: type(v).__name__ for k, v in it.items()}
        return f"object with {keys}"
    return type(it).__name__
