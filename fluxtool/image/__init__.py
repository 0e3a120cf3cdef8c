"""Image generation adapter package.

Scope:
    Provides the Cloudflare text-to-image client, extraction of the base64
    image payload from provider responses, and persistence of decoded bytes.

Module split:
    - `provider_config`: environment-driven endpoint, credential, and path settings.
    - `client`: HTTP transport to the provider.
    - `extractor`: response-shape probing and base64 decoding.
    - `persistence`: primary/fallback file writing.
"""
