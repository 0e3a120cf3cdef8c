"""Exception types raised by the image pipeline.

`fluxtool.core.engine` catches each of these and maps it to a `ToolResult`
failure variant; nothing here reaches the host transport directly.
"""


class PayloadInvalidError(ValueError):
    """A candidate image field exists but is not decodable base64."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Image field '{source}' is not valid base64: {reason}")


class PersistenceError(RuntimeError):
    """Both the requested location and the fallback location failed."""

    def __init__(self, primary_path: str, fallback_path: str, primary_error, fallback_error):
        self.primary_path = primary_path
        self.fallback_path = fallback_path
        self.primary_error = primary_error
        self.fallback_error = fallback_error
        super().__init__(
            f"Could not save image to {primary_path} ({primary_error}) "
            f"or to fallback {fallback_path} ({fallback_error})"
        )
