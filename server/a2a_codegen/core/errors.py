# a2a_codegen/core/errors.py
"""
Error kinds raised by the generation pipeline.

Every error is terminal for the current request; nothing is retried here.
"""
from typing import Optional


class GenerationError(Exception):
    """Base class for every failure the pipeline surfaces to its caller."""


class InputError(GenerationError):
    """A required request field is missing or invalid."""


class ModelInvocationError(GenerationError):
    """Neither the structured nor the free-text model call produced output."""


class NormalizationError(GenerationError):
    """Free-text model output contained no extractable JSON object."""

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text


class SchemaError(GenerationError):
    """Parsed output lacked a valid files array of sufficient length."""


class PackagingError(GenerationError):
    """A generated file could not be represented as an archive entry."""
