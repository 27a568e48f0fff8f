"""Encode, decode and verify compact signed tokens.

A token is ``header.payload.signature``, each part base64url without padding:

    header     {"typ":"JWT","alg":"HS256"}
    payload    the caller's JSON object, plus ``expired`` when a lifetime is set
    signature  HMAC of ``header.payload`` with the codec's secret

A codec is configured once and holds no mutable state afterwards, so one
instance can be shared freely between threads. Rotating the secret means
building a new codec.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Union

from ..exceptions import InvalidFormatError, InvalidSignatureError, MalformedEncodingError
from . import expiration, segments, signature
from .algorithms import DEFAULT_ALGORITHM, HashFunction, resolve

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)

# Placeholder secret for tests and local development.
DEFAULT_SECRET_KEY = "my_secret_key"


@dataclass(frozen=True)
class CodecConfig:
    """Per-codec settings. Immutable; the secret is kept out of repr."""
    secret_key: bytes = field(repr=False)
    expire_seconds: int = 0
    algorithm: str = DEFAULT_ALGORITHM


class TokenCodec:
    """Signed token codec bound to one (secret, lifetime, algorithm) triple."""

    def __init__(
        self,
        secret_key: Union[str, bytes] = DEFAULT_SECRET_KEY,
        expire_seconds: int = 0,
        algorithm: str = DEFAULT_ALGORITHM,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            secret_key: HMAC key. ``str`` keys are UTF-8 encoded.
            expire_seconds: Token lifetime; 0 disables expiry entirely.
            algorithm: ``HS256``, ``HS384`` or ``HS512``.
            clock: Returns the current epoch time; only read when expiry is on.

        Raises:
            UnsupportedAlgorithmError: Unknown ``algorithm``.
            ValueError: Negative ``expire_seconds``.
        """
        self._hash_func: HashFunction = resolve(algorithm)
        if isinstance(expire_seconds, bool) or not isinstance(expire_seconds, int):
            raise ValueError(f"expire_seconds must be an integer, got {expire_seconds!r}")
        if expire_seconds < 0:
            raise ValueError(f"expire_seconds must be >= 0, got {expire_seconds}")
        if isinstance(secret_key, str):
            secret_key = secret_key.encode("utf-8")

        self._config = CodecConfig(
            secret_key=bytes(secret_key),
            expire_seconds=expire_seconds,
            algorithm=algorithm,
        )
        self._clock = clock
        self._header_segment = segments.build_header_segment(algorithm)

        logger.debug(
            "Token codec ready",
            extra={"algorithm": algorithm, "expire_seconds": expire_seconds},
        )

    @classmethod
    def create(
        cls,
        secret_key: Union[str, bytes] = DEFAULT_SECRET_KEY,
        expire_time: int = 0,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> "TokenCodec":
        return cls(secret_key, expire_time, algorithm)

    @classmethod
    def from_settings(cls, settings: "Settings", **kwargs: Any) -> "TokenCodec":
        """Build a codec from the ``jwt_*`` fields of ``settings``."""
        return cls(
            secret_key=settings.jwt_secret_key,
            expire_seconds=settings.jwt_expire_seconds,
            algorithm=settings.jwt_algorithm,
            **kwargs,
        )

    @property
    def config(self) -> CodecConfig:
        return self._config

    @property
    def algorithm(self) -> str:
        return self._config.algorithm

    @property
    def expire_seconds(self) -> int:
        return self._config.expire_seconds

    def __repr__(self) -> str:
        return f"TokenCodec(algorithm={self.algorithm!r}, expire_seconds={self.expire_seconds})"

    def encode(self, payload: Mapping[str, Any]) -> str:
        """Sign ``payload`` and return the compact token.

        Raises:
            MalformedPayloadError: Payload is not a JSON-serializable mapping
                with string keys, or sets the reserved ``expired`` field.
        """
        body = expiration.apply_on_encode(
            payload, self._config.expire_seconds, self._now() if self._config.expire_seconds else 0
        )
        payload_segment = segments.build_payload_segment(body)
        signature_segment = signature.sign(
            self._header_segment, payload_segment, self._config.secret_key, self._hash_func
        )
        return f"{self._header_segment}.{payload_segment}.{signature_segment}"

    def decode(self, token: str) -> Dict[str, Any]:
        """Read the payload WITHOUT checking the signature or expiry.

        For inspecting tokens already trusted by other means. Never use the
        result for an authentication decision; use ``verify`` for that.
        """
        _, payload_segment, _ = self._split(token)
        return expiration.strip_on_read(segments.parse_payload_segment(payload_segment))

    def verify(self, token: str) -> Dict[str, Any]:
        """Check signature and expiry, then return the payload.

        Raises:
            InvalidFormatError: Not three dot-separated segments.
            InvalidSignatureError: Signature does not match this codec's key.
            MalformedEncodingError: Non-ASCII token, or payload segment is
                not base64url.
            MalformedPayloadError: Payload is not a JSON object, or lacks a
                usable expiry while expiry is enabled.
            ExpiredTokenError: Expiry timestamp reached.
        """
        header_segment, payload_segment, signature_segment = self._split(token)
        if not signature.verify(
            header_segment,
            payload_segment,
            signature_segment,
            self._config.secret_key,
            self._hash_func,
        ):
            raise InvalidSignatureError()

        payload = segments.parse_payload_segment(payload_segment)
        if self._config.expire_seconds:
            expiration.check_expiry(payload, self._config.expire_seconds, self._now())
        return expiration.strip_on_read(payload)

    def _now(self) -> int:
        return int(self._clock())

    @staticmethod
    def _split(token: str) -> List[str]:
        if not isinstance(token, str):
            raise InvalidFormatError(f"Token must be a string, got {type(token).__name__}")
        parts = token.split(".")
        if len(parts) != 3:
            raise InvalidFormatError(segments=len(parts))
        if not token.isascii():
            raise MalformedEncodingError("Token contains non-ASCII characters")
        return parts
