"""signedtoken — compact HMAC-signed tokens.

Builds, signs and verifies ``header.payload.signature`` tokens, with optional
expiry carried inside the payload.
"""

from .core.token_codec import TokenCodec
from .exceptions import (
    ErrorCode,
    ExpiredTokenError,
    InvalidFormatError,
    InvalidSignatureError,
    MalformedEncodingError,
    MalformedPayloadError,
    TokenError,
    UnsupportedAlgorithmError,
)

__version__ = "1.0.0"

__all__ = [
    "TokenCodec",
    "ErrorCode",
    "TokenError",
    "UnsupportedAlgorithmError",
    "InvalidFormatError",
    "MalformedEncodingError",
    "MalformedPayloadError",
    "InvalidSignatureError",
    "ExpiredTokenError",
]
