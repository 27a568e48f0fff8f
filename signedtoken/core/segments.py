"""Header and payload segment construction.

Each segment is compact JSON, ASCII-only (non-ASCII text becomes ``\\uXXXX``
escapes), then base64url. The signature covers these exact bytes, so
serialization keeps the caller's key order and never sorts.
"""

import json
from typing import Any, Dict, Mapping

from ..exceptions import MalformedPayloadError
from .base64url import b64url_decode, b64url_encode

TOKEN_TYPE = "JWT"

_SEPARATORS = (",", ":")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _dumps(data: Mapping[str, Any]) -> bytes:
    return json.dumps(
        data, separators=_SEPARATORS, ensure_ascii=True, allow_nan=False
    ).encode("ascii")


def build_header_segment(algorithm: str) -> str:
    return b64url_encode(_dumps({"typ": TOKEN_TYPE, "alg": algorithm}))


def build_payload_segment(payload: Mapping[str, Any]) -> str:
    """Serialize ``payload`` in its own key order and base64url it.

    Raises:
        MalformedPayloadError: If the payload is not a mapping with string
            keys, or holds values JSON cannot represent.
    """
    if not isinstance(payload, Mapping):
        raise MalformedPayloadError(
            f"Payload must be a mapping, got {type(payload).__name__}"
        )
    try:
        raw = _dumps(dict(payload))
    except (TypeError, ValueError) as e:
        raise MalformedPayloadError(f"Payload is not JSON serializable: {e}") from e
    # json turns int/float/bool/None keys into strings, which would not
    # survive the round trip. Runs after dumps so cycles are already rejected.
    _check_keys(payload)
    return b64url_encode(raw)


def _check_keys(value: Any) -> None:
    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                raise MalformedPayloadError(f"Payload keys must be strings, got {key!r}")
            _check_keys(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_keys(item)


def parse_payload_segment(segment: str) -> Dict[str, Any]:
    """Decode a payload segment back into a JSON object.

    MalformedEncodingError (a MalformedPayloadError) for bad base64url,
    MalformedPayloadError for bad JSON or a non-object document.
    """
    raw = b64url_decode(segment)
    try:
        data = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedPayloadError(f"Invalid payload JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedPayloadError(
            f"Payload must be a JSON object, got {type(data).__name__}"
        )
    return data
