"""Cloudflare Workers AI text-to-image HTTP client.

Processing flow:
    1. Resolve account id and API token from the environment.
    2. Build the model endpoint URL from the configured template.
    3. POST `{"prompt": ...}` with bearer authorization.
    4. Return an `UpstreamResponse` carrying status and decoded body.

Base64 and files:
    - This module does not decode Base64 content.
    - This module does not write files.

Error handling strategy:
    - Non-2xx responses are returned, not raised, so callers can report the
      status and body verbatim.
    - A non-JSON body on a non-2xx response is kept as raw text.
    - A non-JSON body on a 2xx response raises `RuntimeError`.
    - Network-layer failures propagate as `requests` exceptions.

Retry behavior:
    No retry loop is implemented. Each call is attempted once.

Security considerations:
    - The prompt is only logged when `DEBUG=true`.
    - The API token is never logged.
"""

import logging
import os

import requests

from fluxtool.core.result_types import UpstreamResponse
from fluxtool.image.extractor import describe_response_shape
from fluxtool.image.provider_config import (
    IMAGE_MODEL,
    IMAGE_REQUEST_TIMEOUT,
    build_endpoint_url,
    get_credentials,
)

logger = logging.getLogger(__name__)

# Sensitive request debug logging is opt-in.
DEBUG = os.getenv("DEBUG") == "true"


def send_image_request(prompt: str, model: str = IMAGE_MODEL) -> UpstreamResponse:
    """Send one text-to-image request to the configured Cloudflare model.

    Args:
        prompt: Text prompt forwarded unchanged.
        model: Model route appended to the account endpoint.

    Returns:
        `UpstreamResponse` with status, reason, ok flag, and decoded body.

    Interaction with core:
        Called by `fluxtool.core.engine.generate_image_from_text` in a worker
        thread; its result feeds the response extractor.

    Error handling:
        - Non-2xx status -> returned with `ok=False`.
        - 2xx with non-JSON body -> `RuntimeError`.
        - Connection/timeout failures -> `requests.exceptions.RequestException`.
    """
    account_id, api_token = get_credentials()
    url = build_endpoint_url(account_id, model)

    headers = {
        "Authorization": f"Bearer {api_token}",
        "Content-Type": "application/json",
    }
    payload = {"prompt": prompt}

    logger.info("Sending image request to %s", url)
    if DEBUG:
        logger.debug("Request body: %r", payload)

    response = requests.post(url, json=payload, headers=headers, timeout=IMAGE_REQUEST_TIMEOUT)

    logger.info("Image provider responded: %s %s", response.status_code, response.reason)
    logger.debug("Response headers: %s", dict(response.headers))

    try:
        body = response.json()
    except ValueError:
        if response.ok:
            raise RuntimeError(
                f"Image provider returned a non-JSON response with status {response.status_code}"
            )
        body = response.text
    else:
        logger.debug("Response shape: %s", describe_response_shape(body))
        if isinstance(body, dict) and body.get("errors"):
            logger.warning("Image provider reported errors: %s", body["errors"])

    return UpstreamResponse(
        status_code=response.status_code,
        reason=response.reason or "",
        ok=response.ok,
        body=body,
    )
