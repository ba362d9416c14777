# a2a_codegen/core/codegen_agent.py
"""
Code Generation Agent
- Exposes:
    async def generate_a2a_server(...) -> GenerationResult
    async def generate_a2a_archive(...) -> ArchivePayload
- Single responsibility module that wires the pipeline:
    request -> prompts -> model (structured, then free-text fallback) -> schema validation -> zip
"""
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from ..models import GenerationRequest, GenerationResult
from ..utils.config import DEFAULT_MODEL, DEFAULT_REASONING_EFFORT
from .errors import GenerationError, InputError, ModelInvocationError
from .llm_client import invoke_model
from .packager import ArchivePayload, build_archive
from .prompts import build_prompts
from .validator import coerce_generation_result

logger = logging.getLogger(__name__)


def build_request(agent_description: Optional[str],
                  services: Optional[Dict[str, Any]] = None,
                  model: Optional[str] = None,
                  reasoning_effort: Optional[str] = None) -> GenerationRequest:
    if not isinstance(agent_description, str) or not agent_description.strip():
        raise InputError("agentDescription required")
    try:
        return GenerationRequest(
            agent_description=agent_description,
            services=services if services is not None else {},
            model=model or DEFAULT_MODEL,
            reasoning_effort=reasoning_effort or DEFAULT_REASONING_EFFORT,
        )
    except ValidationError as e:
        raise InputError(f"Invalid generation request: {e}") from e


async def run_pipeline(request: GenerationRequest) -> GenerationResult:
    system_prompt, user_prompt = build_prompts(request)
    try:
        parsed = await invoke_model(system_prompt, user_prompt, request.model, request.reasoning_effort)
    except GenerationError:
        raise
    except Exception as e:
        logger.exception("Unexpected failure while invoking %s", request.model)
        raise ModelInvocationError(f"Model generation failed: {e}") from e

    result = coerce_generation_result(parsed)
    logger.info("Generated %d files with %s", len(result.files), request.model)
    return result


async def generate_a2a_server(agent_description: Optional[str],
                              services: Optional[Dict[str, Any]] = None,
                              model: Optional[str] = None,
                              reasoning_effort: Optional[str] = None) -> GenerationResult:
    """
    Entrypoint for JSON generation. Returns a GenerationResult with at least two
    files or raises one of the GenerationError kinds; never a partial file list.
    """
    request = build_request(agent_description, services, model, reasoning_effort)
    return await run_pipeline(request)


async def generate_a2a_archive(agent_description: Optional[str],
                               services: Optional[Dict[str, Any]] = None,
                               model: Optional[str] = None,
                               reasoning_effort: Optional[str] = None) -> ArchivePayload:
    result = await generate_a2a_server(agent_description, services, model, reasoning_effort)
    return await run_in_threadpool(build_archive, result)
