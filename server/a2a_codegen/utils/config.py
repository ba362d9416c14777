# a2a_codegen/utils/config.py
import os

from dotenv import load_dotenv

load_dotenv()

# Model client
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
OPENAI_BASE_URL = os.environ.get("OPENAI_BASE_URL") or None
DEFAULT_MODEL = os.environ.get("AI_MODEL", "gpt-5")
REASONING_EFFORTS = ("minimal", "medium", "high")
DEFAULT_REASONING_EFFORT = os.environ.get("AI_REASONING_EFFORT", "minimal")
if DEFAULT_REASONING_EFFORT not in REASONING_EFFORTS:
    DEFAULT_REASONING_EFFORT = "minimal"
# unset -> the transport's own default timeout applies
TIMEOUT = float(os.environ["AI_TIMEOUT"]) if os.environ.get("AI_TIMEOUT") else None

# Logging / debug dumps
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.environ.get("AI_BACKEND_LOG_DIR", "./ai_backend_logs")
DEBUG = os.environ.get("AI_DEBUG", "0") in ("1", "true", "True")

# Output contract
MIN_FILES = 2

# Archive
ARCHIVE_FILENAME = "a2a-python-server.zip"
ARCHIVE_MEDIA_TYPE = "application/zip"
ARCHIVE_COMPRESSION_LEVEL = 6
