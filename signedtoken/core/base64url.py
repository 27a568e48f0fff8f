"""Base64url helpers (no padding, URL-safe).

Padding is restored up to the next multiple of 4 before decoding.
"""

import base64
import binascii
import re

from ..exceptions import MalformedEncodingError

_ALPHABET = re.compile(r"^[A-Za-z0-9_-]*$")


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(data: str) -> bytes:
    """Decode an unpadded base64url string.

    Raises:
        MalformedEncodingError: On characters outside the URL-safe alphabet
            or a length no valid encoding can have.
    """
    if not isinstance(data, str) or not _ALPHABET.match(data):
        raise MalformedEncodingError("Segment contains characters outside the base64url alphabet")
    # A single leftover character cannot encode a whole byte.
    if len(data) % 4 == 1:
        raise MalformedEncodingError("Segment has an impossible base64url length")

    padded = data + "=" * (-len(data) % 4)
    try:
        return base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, ValueError) as e:
        raise MalformedEncodingError(f"Invalid base64url encoding: {e}") from e
