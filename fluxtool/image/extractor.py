"""Image payload extraction from loosely structured provider responses.

Processing flow:
    1. Check candidate fields in fixed priority order
       (`image` -> `result.image` -> `result.data`).
    2. Return the first candidate holding a non-empty string as `ImagePayload`.
    3. Return `NotFound` when no candidate matched.
    4. Decode the payload separately (`decode_image_payload`), so a present but
       malformed field is reported apart from a missing one.

Shape tolerance:
    The provider does not guarantee one response schema across versions. Each
    candidate is checked explicitly for container type and value type; a field
    holding a non-string value is skipped, not coerced.

Base64:
    Whitespace (line wrapping as produced by MIME encoders) is removed first;
    the rest is decoded strictly (`validate=True`). Characters outside the base64
    alphabet, bad padding, or an empty decoded result raise
    `PayloadInvalidError`.

Determinism:
    Pure inspection of the given object; no I/O.
"""

import base64
import binascii
from typing import Any

from fluxtool.core.errors import PayloadInvalidError
from fluxtool.core.result_types import ImagePayload, NotFound

# Checked in this order; first match wins.
CANDIDATE_FIELDS = ("image", "result.image", "result.data")


def _lookup(response: dict, dotted: str) -> Any:
    """Resolve a dotted field path, returning `None` when any level is missing."""
    node: Any = response
    for part in dotted.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def extract_image_payload(response: Any) -> ImagePayload | NotFound:
    """Locate the base64 image string in a decoded provider response.

    Args:
        response: Decoded JSON value returned by the provider.

    Returns:
        `ImagePayload` for the first candidate field holding a non-empty string,
        otherwise `NotFound` listing the fields that were tried.

    Edge cases:
        - Non-dict responses (list, null, scalar) -> `NotFound`.
        - `result` present but not an object -> nested candidates are skipped.
        - Empty strings count as absent.
    """
    if not isinstance(response, dict):
        return NotFound(tried=CANDIDATE_FIELDS)

    for dotted in CANDIDATE_FIELDS:
        value = _lookup(response, dotted)
        if isinstance(value, str) and value:
            return ImagePayload(data=value, source=dotted)

    return NotFound(tried=CANDIDATE_FIELDS)


def decode_image_payload(payload: ImagePayload) -> bytes:
    """Decode an extracted payload into raw image bytes.

    Raises:
        PayloadInvalidError: The string is not strict base64 or decodes to
            zero bytes.
    """
    # MIME encoders wrap lines every 76 characters.
    compact = "".join(payload.data.split())
    try:
        data = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise PayloadInvalidError(payload.source, str(e)) from e

    if not data:
        raise PayloadInvalidError(payload.source, "decoded payload is empty")

    return data


def describe_response_shape(response: Any) -> dict:
    """Summarize a response for diagnostic logging without dumping image data."""
    if not isinstance(response, dict):
        return {"type": type(response).__name__}

    shape: dict[str, Any] = {"keys": sorted(response.keys())}

    image = response.get("image")
    if image is not None:
        shape["image_type"] = type(image).__name__
        if isinstance(image, str):
            shape["image_length"] = len(image)
            shape["image_preview"] = image[:50]

    result = response.get("result")
    if result is not None:
        shape["result_type"] = type(result).__name__
        if isinstance(result, dict):
            shape["result_keys"] = sorted(result.keys())

    if "errors" in response:
        shape["errors"] = response["errors"]

    return shape
