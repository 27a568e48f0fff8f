"""HMAC signature over ``header_segment.payload_segment``."""

import hmac

from .algorithms import HashFunction
from .base64url import b64url_encode


def _signing_input(header_segment: str, payload_segment: str) -> bytes:
    return f"{header_segment}.{payload_segment}".encode("utf-8", "surrogatepass")


def sign(header_segment: str, payload_segment: str, key: bytes, hash_func: HashFunction) -> str:
    digest = hmac.new(key, _signing_input(header_segment, payload_segment), hash_func).digest()
    return b64url_encode(digest)


def verify(
    header_segment: str,
    payload_segment: str,
    signature_segment: str,
    key: bytes,
    hash_func: HashFunction,
) -> bool:
    """Recompute the signature and compare whole segments in constant time."""
    expected = sign(header_segment, payload_segment, key, hash_func)
    return hmac.compare_digest(expected.encode("ascii"), signature_segment.encode("utf-8", "surrogatepass"))
