"""Provider/runtime configuration for the image-generation layer.

Architectural role:
    Centralizes endpoint, model, credential, and filesystem constants for
    `fluxtool.image.client` and `fluxtool.image.persistence`.

Image call flow integration:
    - `client.send_image_request` consumes `build_endpoint_url`,
      `get_credentials`, and `IMAGE_REQUEST_TIMEOUT`.
    - `persistence.persist_image` consumes `IMAGE_EXTENSION`,
      `WRITE_TEST_FILENAME`, and `FALLBACK_SUBDIR_NAME`.

Determinism:
    Constants are resolved at import time. Credentials are read from the process
    environment on every call so a refreshed `.env` or test override applies
    without re-importing.

Failure behavior:
    Missing credentials are represented as empty strings. They are not validated
    here; the remote service rejects the call and the caller reports that
    authorization failure verbatim.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Tool identity exposed by API adapters.
TOOL_NAME = "generate-image-from-text"
TOOL_DESCRIPTION = "Generate an image from a text prompt with the Cloudflare Workers AI Flux model"

# Remote endpoint, templated with the account identifier and model route.
IMAGE_PROVIDER_URL_TEMPLATE = (
    "https://api.cloudflare.com/client/v4/accounts/{account_id}/ai/run/{model}"
)
IMAGE_MODEL = os.getenv("CLOUDFLARE_IMAGE_MODEL", "@cf/black-forest-labs/flux-1-schnell")

def parse_timeout(raw):
    """Parse a timeout in seconds; unset, malformed or non-positive -> `None`."""
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring malformed IMAGE_REQUEST_TIMEOUT=%r", raw)
        return None
    if value <= 0:
        logger.warning("Ignoring non-positive IMAGE_REQUEST_TIMEOUT=%r", raw)
        return None
    return value


# Unset means the call blocks until the provider answers.
IMAGE_REQUEST_TIMEOUT = parse_timeout(os.getenv("IMAGE_REQUEST_TIMEOUT"))

# Filesystem layout for persisted images.
IMAGE_EXTENSION = ".jpg"
WRITE_TEST_FILENAME = ".write-test"
FALLBACK_SUBDIR_NAME = os.getenv("IMAGE_FALLBACK_SUBDIR", "mcp_generated_images")

# Input bounds enforced by the adapter schemas.
PROMPT_MAX_LENGTH = 2048
STEPS_MIN = 1
STEPS_MAX = 8
STEPS_DEFAULT = 4


def get_credentials():
    """Return `(account_id, api_token)` from the process environment.

    Returns:
        Tuple of strings; missing values are returned as `""`.

    Edge cases:
        - Missing values only emit a warning. The request is still sent and the
          provider's authorization error becomes the tool result.
    """
    account_id = os.getenv("CLOUDFLARE_ACCOUNT_ID", "")
    api_token = os.getenv("CLOUDFLARE_API_TOKEN", "")

    if not account_id or not api_token:
        logger.warning(
            "Cloudflare credentials incomplete (account_id set: %s, api_token set: %s)",
            bool(account_id),
            bool(api_token),
        )

    return account_id, api_token


def build_endpoint_url(account_id: str, model: str = IMAGE_MODEL) -> str:
    """Fill the provider URL template for one account and model."""
    return IMAGE_PROVIDER_URL_TEMPLATE.format(account_id=account_id, model=model)
