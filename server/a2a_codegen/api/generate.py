# a2a_codegen/api/generate.py
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from ..core.codegen_agent import build_request, run_pipeline
from ..core.errors import GenerationError, InputError
from ..core.packager import build_archive

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_payload(request: Request) -> Dict[str, Any]:
    # an unreadable body is treated like an empty one
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post("")
@router.post("/", include_in_schema=False)
async def generate_python(request: Request, zip_: Optional[str] = Query(None, alias="zip")):
    """
    Request JSON:
      { "agentDescription": "...", "services": {...}, "model": "gpt-5", "reasoningEffort": "minimal" }
    Response:
      { "files": [ {"path","content"}, ... ] }, or the files as a zip attachment when ?zip is set
    """
    payload = await _read_payload(request)
    try:
        gen_request = build_request(
            payload.get("agentDescription"),
            services=payload.get("services"),
            model=payload.get("model"),
            reasoning_effort=payload.get("reasoningEffort"),
        )
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        result = await run_pipeline(gen_request)
        if not zip_:
            return result.model_dump()
        archive = await run_in_threadpool(build_archive, result)
    except GenerationError as e:
        logger.error("Generation failed (%s): %s", type(e).__name__, e)
        raise HTTPException(status_code=500, detail=str(e))

    return Response(
        content=archive.data,
        media_type=archive.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{archive.filename}"',
            "Content-Length": str(archive.size),
            "Cache-Control": "no-store",
            "Accept-Ranges": "bytes",
        },
    )
