"""Request/response schemas for the image tool adapters.

Input validation behavior:
- `prompt`: 1..2048 characters.
- `steps`: integer 1..8, default 4.
- `outputPath`: non-empty absolute directory path.
- `filename`: non-empty name without extension or path separators.

Field names follow the public tool contract (`outputPath`), so the HTTP body
and the published JSON schema use the same keys.
"""

import os

from pydantic import BaseModel, Field, field_validator

from fluxtool.image.provider_config import (
    PROMPT_MAX_LENGTH,
    STEPS_DEFAULT,
    STEPS_MAX,
    STEPS_MIN,
)


class GenerateImageRequest(BaseModel):
    prompt: str = Field(
        min_length=1,
        max_length=PROMPT_MAX_LENGTH,
        description="Text description of the image to generate",
    )
    steps: int = Field(
        default=STEPS_DEFAULT,
        ge=STEPS_MIN,
        le=STEPS_MAX,
        description="Diffusion steps; higher is better quality but slower",
    )
    outputPath: str = Field(
        min_length=1,
        description="Absolute directory path the image is saved to",
    )
    filename: str = Field(
        min_length=1,
        description="Image file name without extension",
    )

    @field_validator("outputPath")
    @classmethod
    def require_absolute(cls, value: str) -> str:
        if not os.path.isabs(value):
            raise ValueError("outputPath must be an absolute path")
        return value

    @field_validator("filename")
    @classmethod
    def reject_separators(cls, value: str) -> str:
        if "/" in value or (os.sep != "/" and os.sep in value):
            raise ValueError("filename must not contain path separators")
        if value in (".", ".."):
            raise ValueError("filename must name a file")
        return value


class ToolContent(BaseModel):
    type: str = "text"
    text: str


class ToolResponse(BaseModel):
    """Tool output envelope: one text content item plus an error flag."""

    content: list[ToolContent]
    isError: bool = False

    @classmethod
    def from_text(cls, text: str, is_error: bool = False) -> "ToolResponse":
        return cls(content=[ToolContent(text=text)], isError=is_error)
