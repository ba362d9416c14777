from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils.config import DEFAULT_MODEL, DEFAULT_REASONING_EFFORT, MIN_FILES

ReasoningEffort = Literal["minimal", "medium", "high"]


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    agent_description: str
    services: Dict[str, Any] = Field(default_factory=dict)
    model: str = DEFAULT_MODEL
    reasoning_effort: ReasoningEffort = DEFAULT_REASONING_EFFORT

    @field_validator("agent_description")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("agent_description must not be empty")
        return v


class GeneratedFile(BaseModel):
    path: str = Field(..., description="Relative path for the file")
    content: str = Field(..., description="File content as a string")


class GenerationResult(BaseModel):
    files: List[GeneratedFile] = Field(
        ..., min_length=MIN_FILES, description="Generated project files, in output order"
    )
