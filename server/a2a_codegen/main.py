import logging

from fastapi import FastAPI

from .api.generate import router as generate_router
from .utils.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title="A2A Python Server Generator")
app.include_router(generate_router, prefix="/api/generate-python")


@app.get("/health")
async def health():
    return {"status": "ok"}
