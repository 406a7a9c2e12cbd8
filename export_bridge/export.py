import base64
import os

import structlog

from .commands import command
from .errors import DecodeFailure, InvalidDataUrl, WriteFailure

log = structlog.get_logger(__name__)


def split_data_url(data_url):
    """Return (prefix, payload) split at the first comma."""
    if not isinstance(data_url, str):
        raise InvalidDataUrl()
    prefix, sep, payload = data_url.partition(",")
    if not sep:
        raise InvalidDataUrl()
    return prefix, payload


def decode_payload(payload: str) -> bytes:
    try:
        decoded = base64.b64decode(payload, validate=True)
    except ValueError as err:
        # binascii.Error, or non-ascii characters in a str payload
        raise DecodeFailure(err) from err

    # b64decode tolerates surplus padding and non-zero trailing bits;
    # only the canonical encoding of the decoded bytes is accepted.
    canonical = base64.b64encode(decoded).decode("ascii")
    if canonical != payload:
        if canonical.rstrip("=") == payload.rstrip("="):
            raise DecodeFailure("Invalid padding")
        raise DecodeFailure(f"Invalid last symbol, offset {len(canonical.rstrip('=')) - 1}")
    return decoded


@command("save_export_image")
def save_export_image(path, data_url):
    """
    Decode the base64 payload of `data_url` and write it to `path`.

    The file is created or truncated. Parent directories are not created
    and nothing is written unless the payload decodes cleanly.
    """
    _, payload = split_data_url(data_url)
    image_bytes = decode_payload(payload)

    if not isinstance(path, (str, os.PathLike)):
        raise WriteFailure(f"path must be a string, got {type(path).__name__}")

    try:
        with open(path, "wb") as f:
            f.write(image_bytes)
    except OSError as err:
        log.warning("export failed", path=str(path), error=str(err))
        raise WriteFailure(err) from err

    log.info("exported image", path=str(path), size=len(image_bytes))
