# a2a_codegen/core/normalizer.py
"""
JSON extraction from free-text model output (LLM trust boundary).

Strategy:
1. Strip one leading and one trailing code fence
2. Try direct json.loads (fast path)
3. Fallback: greedy match from the first '{' to the last '}' that ends a line
4. Otherwise raise NormalizationError with the raw text attached
"""
import json
import logging
import re
from typing import Any

from .errors import NormalizationError

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")
_JSON_BLOCK = re.compile(r"\{.*\}$", re.DOTALL | re.MULTILINE)


def strip_code_fences(text: str) -> str:
    s = (text or "").strip()
    s = _LEADING_FENCE.sub("", s, count=1)
    s = _TRAILING_FENCE.sub("", s, count=1)
    return s.strip()


def extract_json(text: str) -> Any:
    raw = strip_code_fences(text)
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        pass

    match = _JSON_BLOCK.search(raw)
    if match:
        try:
            return json.loads(match.group(0))
        except (ValueError, RecursionError):
            logger.debug("Brace-delimited block is not valid JSON (%d chars)", len(match.group(0)))

    raise NormalizationError("Failed to parse JSON from model output", raw_text=text)
