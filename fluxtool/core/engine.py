"""Tool-invocation orchestration for text-to-image generation.

Architectural role:
    Provides the single execution pipeline used by API/CLI adapters to turn one
    validated tool call into one textual `ToolResult`.

Control-flow model:
    1. Call the remote provider (`fluxtool.image.client`) in a worker thread.
    2. Short-circuit on a non-success HTTP status, reporting it verbatim.
    3. Locate the image payload (`fluxtool.image.extractor`).
    4. Decode the payload; a malformed candidate is reported apart from a
       missing one.
    5. Persist the bytes (`fluxtool.image.persistence`), falling back to the
       temp directory when the requested directory is not writable.
    6. Format one human-readable message.

Error handling strategy:
    Every failure resolves to a `ToolResult` failure variant. Unexpected
    exceptions are logged with traceback and converted to text; nothing
    propagates to the host transport.

Concurrency:
    The remote call is the only suspension point. Invocations share no state
    except the filesystem (see `fluxtool.image.persistence`).

Determinism:
    Branch selection is deterministic for a given provider response and
    filesystem state. Generated image content is not.
"""

import asyncio
import json
import logging
from typing import Any

from fluxtool.core.errors import PayloadInvalidError, PersistenceError
from fluxtool.core.result_types import (
    FailureKind,
    NotFound,
    PersistenceOutcome,
    ToolResult,
    UpstreamResponse,
)
from fluxtool.image.client import send_image_request
from fluxtool.image.extractor import (
    CANDIDATE_FIELDS,
    decode_image_payload,
    extract_image_payload,
)
from fluxtool.image.persistence import persist_image

logger = logging.getLogger(__name__)


# ============================================================
# Message formatting
# ============================================================

def _dump_body(body: Any) -> str:
    if isinstance(body, str):
        return body
    return json.dumps(body, ensure_ascii=False)


def format_success_message(outcome: PersistenceOutcome) -> str:
    if outcome.used_fallback:
        return (
            f"Could not save the image to {outcome.primary_path} (the directory is not "
            f"writable); saved it to a temporary location instead: {outcome.path}.\n"
            f"Copy it to the requested location with:\n{outcome.remediation}"
        )
    return f"Image generated and saved to: {outcome.path}"


def format_transport_failure(response: UpstreamResponse) -> str:
    status = f"{response.status_code} {response.reason}".strip()
    return f"Image API request failed: {status} - {_dump_body(response.body)}"


def format_not_found_message(outcome: NotFound, upstream_errors: Any = None) -> str:
    tried = ", ".join(outcome.tried or CANDIDATE_FIELDS)
    message = f"The API response does not contain an image (checked: {tried})"
    if upstream_errors:
        message += f" - API errors: {_dump_body(upstream_errors)}"
    return message


def format_invalid_payload_message(error: PayloadInvalidError) -> str:
    return f"The API returned an image that could not be decoded: {error}"


def format_persistence_failure(error: PersistenceError) -> str:
    return f"Failed to save the generated image: {error}"


def format_unexpected_error(error: BaseException) -> str:
    return f"An error occurred: {error}"


# ============================================================
# Pipeline
# ============================================================

async def _run_pipeline(prompt: str, output_path: str, filename: str) -> ToolResult:
    response = await asyncio.to_thread(send_image_request, prompt)

    if not response.ok:
        return ToolResult.failure(
            FailureKind.TRANSPORT,
            format_transport_failure(response),
            status_code=response.status_code,
            body=response.body,
        )

    extracted = extract_image_payload(response.body)
    if isinstance(extracted, NotFound):
        logger.warning("No image field found, tried: %s", ", ".join(extracted.tried))
        upstream_errors = response.body.get("errors") if isinstance(response.body, dict) else None
        return ToolResult.failure(
            FailureKind.PAYLOAD_NOT_FOUND,
            format_not_found_message(extracted, upstream_errors),
            errors=upstream_errors,
        )

    try:
        image_bytes = decode_image_payload(extracted)
    except PayloadInvalidError as e:
        logger.warning("Image field %s could not be decoded: %s", e.source, e.reason)
        return ToolResult.failure(
            FailureKind.PAYLOAD_INVALID,
            format_invalid_payload_message(e),
            source=e.source,
        )

    try:
        outcome = persist_image(image_bytes, output_path, filename)
    except PersistenceError as e:
        return ToolResult.failure(
            FailureKind.PERSISTENCE,
            format_persistence_failure(e),
            primary_path=e.primary_path,
            fallback_path=e.fallback_path,
        )

    return ToolResult.success(format_success_message(outcome), outcome)


async def generate_image_from_text(
    prompt: str,
    steps: int,
    output_path: str,
    filename: str,
) -> ToolResult:
    """Generate one image and save it to `<output_path>/<filename>.jpg`.

    Args:
        prompt: Validated text prompt.
        steps: Validated diffusion step count. Recorded for diagnostics; the
            provider call itself only carries the prompt.
        output_path: Absolute destination directory.
        filename: File name without extension.

    Returns:
        `ToolResult`. `ok` is true for primary and fallback saves alike; the
        fallback message carries a `cp` remediation command.

    Error handling:
        - Non-success HTTP status -> `TRANSPORT` failure with status and body.
        - No candidate field -> `PAYLOAD_NOT_FOUND`.
        - Undecodable candidate -> `PAYLOAD_INVALID`.
        - Primary and fallback write both failed -> `PERSISTENCE`.
        - Anything else -> `UNEXPECTED`, logged with traceback.
    """
    logger.info(
        "Generating image: steps=%d output_path=%s filename=%s",
        steps,
        output_path,
        filename,
    )

    try:
        return await _run_pipeline(prompt, output_path, filename)
    except Exception as e:
        logger.exception("Image generation failed")
        return ToolResult.failure(FailureKind.UNEXPECTED, format_unexpected_error(e))
