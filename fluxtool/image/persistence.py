"""Image persistence with write probing and a temporary-directory fallback.

Processing flow:
    1. Derive the primary target `<directory>/<stem>.jpg`.
    2. Create the primary directory (recursively) when missing.
    3. Check writability with a zero-length sentinel file, removed immediately.
    4. Write the image bytes to the primary target.
    5. On any failure in steps 2-4, write to
       `<tempdir>/<FALLBACK_SUBDIR_NAME>/<stem>.jpg` instead and return a
       `cp` remediation command pointing back at the primary target.
    6. If the fallback also fails, raise `PersistenceError`.

Write strategy:
    Bytes are written to a temporary sibling file and moved into place with
    `os.replace`. The temporary file is removed if anything fails, so a final
    path never holds a truncated image. Saved files get the usual
    umask-derived mode so other processes can read them.

Shared fallback directory:
    The fallback directory is process-wide and fixed. Two invocations with the
    same stem overwrite each other there (last writer wins).

Known limitation:
    The sentinel check and the real write are separate steps; permissions can
    change in between. That case is handled like any other primary failure.

Side effects:
    Creates directories, creates/deletes the sentinel, writes exactly one image
    file in exactly one of the two locations.
"""

import logging
import os
import shlex
import tempfile
import uuid

from fluxtool.core.errors import PersistenceError
from fluxtool.core.result_types import PersistenceOutcome
from fluxtool.image.provider_config import (
    FALLBACK_SUBDIR_NAME,
    IMAGE_EXTENSION,
    WRITE_TEST_FILENAME,
)

logger = logging.getLogger(__name__)


def build_target_path(directory: str, stem: str) -> str:
    """Return the one path an image with `stem` is saved to inside `directory`."""
    return os.path.join(directory, f"{stem}{IMAGE_EXTENSION}")


def fallback_directory() -> str:
    """Return the process-wide fallback directory under the OS temp root."""
    return os.path.join(tempfile.gettempdir(), FALLBACK_SUBDIR_NAME)


def build_remediation(fallback_path: str, primary_path: str) -> str:
    """Shell command that copies the fallback file to the requested location."""
    return f"cp {shlex.quote(fallback_path)} {shlex.quote(primary_path)}"


def check_writable(directory: str) -> None:
    """Create and delete a zero-length sentinel inside `directory`.

    Raises:
        OSError: The directory cannot hold new files.
    """
    sentinel = os.path.join(directory, WRITE_TEST_FILENAME)
    with open(sentinel, "wb"):
        pass
    os.remove(sentinel)


def _write_bytes(path: str, data: bytes) -> None:
    """Write `data` to `path` through a temporary sibling file.

    The sibling is created with mode 0666 minus the umask, the same mode a
    plain `open(path, "wb")` would give the final file.
    """
    directory = os.path.dirname(path) or "."
    part_path = os.path.join(
        directory, f".{os.path.basename(path)}.{uuid.uuid4().hex}.part"
    )
    fd = os.open(part_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o666)
    try:
        with os.fdopen(fd, "wb") as part_file:
            part_file.write(data)
            part_file.flush()
            os.fsync(part_file.fileno())
        os.replace(part_path, path)
    except BaseException:
        if os.path.exists(part_path):
            os.remove(part_path)
        raise


def _save_to_primary(data: bytes, directory: str, target_path: str) -> None:
    os.makedirs(directory, exist_ok=True)
    check_writable(directory)
    _write_bytes(target_path, data)


def persist_image(data: bytes, primary_dir: str, stem: str) -> PersistenceOutcome:
    """Save image bytes to `primary_dir`, falling back to the temp directory.

    Args:
        data: Decoded image bytes.
        primary_dir: Absolute directory requested by the caller.
        stem: File name without extension.

    Returns:
        `PersistenceOutcome` naming the path actually written.

    Raises:
        PersistenceError: Both the primary and the fallback attempt failed.

    Edge cases:
        - `primary_dir` existing as a regular file fails directory creation and
          takes the fallback path.
        - Missing parents are created for both locations.
    """
    primary_path = build_target_path(primary_dir, stem)

    primary_error = None
    try:
        _save_to_primary(data, primary_dir, primary_path)
    except Exception as e:
        primary_error = e
        logger.warning("Saving to %s failed: %s", primary_path, e)
    else:
        logger.info("Image saved to %s (%d bytes)", primary_path, len(data))
        return PersistenceOutcome(path=primary_path, primary_path=primary_path)

    temp_dir = fallback_directory()
    fallback_path = build_target_path(temp_dir, stem)

    try:
        os.makedirs(temp_dir, exist_ok=True)
        _write_bytes(fallback_path, data)
    except OSError as fallback_error:
        logger.error("Fallback save to %s failed: %s", fallback_path, fallback_error)
        raise PersistenceError(
            primary_path, fallback_path, primary_error, fallback_error
        ) from fallback_error

    logger.info("Image saved to fallback location %s", fallback_path)
    return PersistenceOutcome(
        path=fallback_path,
        primary_path=primary_path,
        used_fallback=True,
        remediation=build_remediation(fallback_path, primary_path),
    )
