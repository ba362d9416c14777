# a2a_codegen/core/llm_client.py
import json
import logging
import os
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from ..models import GenerationResult
from ..utils.config import DEBUG, LOG_DIR, OPENAI_API_KEY, OPENAI_BASE_URL, TIMEOUT
from .errors import ModelInvocationError, NormalizationError
from .normalizer import extract_json

logger = logging.getLogger(__name__)


# -------------------------
# Attempt outcomes
# -------------------------
class AttemptStatus(str, Enum):
    PARSED = "parsed"
    NEEDS_FALLBACK = "needs_fallback"
    FAILED = "failed"


@dataclass
class AttemptResult:
    status: AttemptStatus
    value: Any = None
    error: Optional[str] = None


# -------------------------
# LLM init
# -------------------------
def get_llm(model: str, reasoning_effort: str) -> ChatOpenAI:
    params: Dict[str, Any] = {
        "model": model,
        "api_key": OPENAI_API_KEY,
        "reasoning_effort": reasoning_effort,
        "use_responses_api": True,
        # the single structured -> free-text fallback is the only retry
        "max_retries": 0,
    }
    if OPENAI_BASE_URL:
        params["base_url"] = OPENAI_BASE_URL
    if TIMEOUT is not None:
        params["timeout"] = TIMEOUT
    return ChatOpenAI(**params)


def _save_debug_log(prefix: str, payload: Dict[str, Any]):
    if not DEBUG:
        return
    fname = f"{int(time.time())}_{prefix}.json"
    try:
        os.makedirs(LOG_DIR, exist_ok=True)
        with open(os.path.join(LOG_DIR, fname), "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, ensure_ascii=False, default=str)
    except OSError:
        logger.exception("Failed to write debug log")


def _messages(system_prompt: str, user_prompt: str) -> List[Any]:
    return [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]


# -------------------------
# Response text extraction
# -------------------------
def _fragment_text(fragment: Any) -> str:
    if isinstance(fragment, str):
        return fragment
    if isinstance(fragment, dict):
        if fragment.get("type") not in (None, "text", "output_text"):
            return ""
        text = fragment.get("text")
    else:
        text = getattr(fragment, "text", None)
    if isinstance(text, dict):
        text = text.get("value")
    elif text is not None and not isinstance(text, str):
        text = getattr(text, "value", None) or str(text)
    return text or ""


def extract_response_text(response: Any) -> str:
    """
    Collect the text of a free-text response.

    Handles a direct `output_text`, a plain string `content`, and list-shaped
    content (or a responses-style `output[].content[]`) whose text fragments
    are joined with newlines.
    """
    output_text = getattr(response, "output_text", None)
    if isinstance(output_text, str) and output_text:
        return output_text

    content = getattr(response, "content", None)
    if isinstance(content, str):
        return content

    fragments: List[Any] = []
    if isinstance(content, list):
        fragments.extend(content)
    for item in getattr(response, "output", None) or []:
        fragments.extend(getattr(item, "content", None) or [])
    return "\n".join(t for t in (_fragment_text(f) for f in fragments) if t)


# -------------------------
# Attempts
# -------------------------
async def _attempt_structured(llm: Any, messages: List[Any]) -> AttemptResult:
    try:
        structured_callable = llm.with_structured_output(GenerationResult, include_raw=True)
        result = await structured_callable.ainvoke(messages)
    except Exception as e:
        return AttemptResult(AttemptStatus.NEEDS_FALLBACK, error=repr(e))

    parsed = result.get("parsed") if isinstance(result, dict) else result
    if parsed is None:
        err = result.get("parsing_error") if isinstance(result, dict) else None
        return AttemptResult(AttemptStatus.NEEDS_FALLBACK, error=f"no parsed output ({err!r})")
    if hasattr(parsed, "model_dump"):
        parsed = parsed.model_dump()
    return AttemptResult(AttemptStatus.PARSED, value=parsed)


async def _attempt_free_text(llm: Any, messages: List[Any]) -> AttemptResult:
    try:
        response = await llm.ainvoke(messages)
    except Exception as e:
        logger.exception("Free-text model call failed")
        return AttemptResult(AttemptStatus.FAILED, error=repr(e))

    text = extract_response_text(response)
    if not text.strip():
        return AttemptResult(AttemptStatus.FAILED, error="Empty model output")
    return AttemptResult(AttemptStatus.PARSED, value=text)


async def invoke_model(system_prompt: str,
                       user_prompt: str,
                       model: str,
                       reasoning_effort: str) -> Any:
    """
    Structured-output call first; on any failure, one free-text call whose
    text goes through the JSON normalizer. Returns the parsed (unvalidated) value.
    """
    try:
        llm = get_llm(model, reasoning_effort)
    except Exception as e:
        raise ModelInvocationError(f"Could not initialise model client: {e}") from e
    messages = _messages(system_prompt, user_prompt)

    attempt = await _attempt_structured(llm, messages)
    if attempt.status is AttemptStatus.PARSED:
        logger.info("Structured output received from %s", model)
        return attempt.value
    logger.warning("Structured output unavailable for %s, falling back to free text: %s", model, attempt.error)

    attempt = await _attempt_free_text(llm, messages)
    if attempt.status is AttemptStatus.FAILED:
        _save_debug_log("llm_error", {"model": model, "prompt": user_prompt, "error": attempt.error})
        raise ModelInvocationError(f"Model generation failed: {attempt.error}")

    text = attempt.value
    try:
        return extract_json(text)
    except NormalizationError:
        _save_debug_log("llm_unparseable", {"model": model, "prompt": user_prompt, "raw_result": text})
        raise
