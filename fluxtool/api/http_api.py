"""
HTTP tool adapter for the text-to-image pipeline.

Architectural role:
- Register the `generate-image-from-text` tool and publish its input schema.
- Enforce adapter-level input validation through `GenerateImageRequest`.
- Delegate generation and persistence to `fluxtool.core.engine`.
- Wrap the engine's textual result in the tool response envelope.

Endpoint responsibilities:
- `GET /tools`: list the registered tool with name, description, input schema.
- `POST /tools/generate-image-from-text`: validate input, invoke the engine,
  return `{"content": [{"type": "text", "text": ...}], "isError": ...}`.

Input validation behavior:
- Schema violations are rejected by FastAPI with HTTP 422 before the engine
  runs.

Error handling strategy:
- Engine failures are returned as HTTP 200 with `isError: true`; the tool call
  itself succeeded, its outcome is described in the text.

Side effects:
- Loads environment variables at import time via `load_dotenv()`.
- Emits debug logs of incoming requests only when `DEBUG == "true"`.
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os

from fastapi import FastAPI

from fluxtool.api.schemas import GenerateImageRequest, ToolResponse
from fluxtool.core.engine import generate_image_from_text
from fluxtool.image.provider_config import TOOL_DESCRIPTION, TOOL_NAME

logger = logging.getLogger(__name__)

app = FastAPI(title="fluxtool")
# Sensitive request/response debug logging is opt-in.
DEBUG = os.getenv("DEBUG") == "true"


# ============================================================
# Tool Registration
# ============================================================

@app.get("/tools")
def list_tools():
    """
    Return the registered tools with their JSON input schema.

    Response formatting:
    - `tools[]` entries with `name`, `description`, `inputSchema`
    """
    return {
        "tools": [
            {
                "name": TOOL_NAME,
                "description": TOOL_DESCRIPTION,
                "inputSchema": GenerateImageRequest.model_json_schema(),
            }
        ]
    }


# ============================================================
# Tool Invocation
# ============================================================

@app.post(f"/tools/{TOOL_NAME}", response_model=ToolResponse)
async def call_generate_image(request: GenerateImageRequest) -> ToolResponse:
    """
    Run one text-to-image invocation.

    Request lifecycle:
    1. FastAPI validates the body against `GenerateImageRequest`.
    2. The engine generates, extracts, decodes, and saves the image.
    3. The engine's message is wrapped in a single text content item.
    """
    if DEBUG:
        logger.debug("Incoming tool call: %r", request.model_dump())

    result = await generate_image_from_text(
        prompt=request.prompt,
        steps=request.steps,
        output_path=request.outputPath,
        filename=request.filename,
    )

    return ToolResponse.from_text(result.text, is_error=not result.ok)
