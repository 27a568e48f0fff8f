"""Expiry bookkeeping carried inside the payload.

When a codec has a positive lifetime, ``encode`` adds ``expired`` (absolute
epoch seconds) to the payload and ``verify`` rejects the token once the clock
reaches it. The field is stripped from every payload handed back to callers.
"""

from typing import Any, Dict, Mapping

from ..exceptions import ExpiredTokenError, MalformedPayloadError

EXPIRY_FIELD = "expired"


def apply_on_encode(payload: Mapping[str, Any], duration: int, now: int) -> Dict[str, Any]:
    """Return a copy of ``payload`` with the expiry field added when ``duration > 0``.

    The field is reserved: a payload that already carries it is rejected
    whatever the duration, otherwise it would vanish on the way back.
    """
    # dict() would happily turn a list of pairs into a payload.
    if not isinstance(payload, Mapping):
        raise MalformedPayloadError(
            f"Payload must be a mapping, got {type(payload).__name__}"
        )
    if EXPIRY_FIELD in payload:
        raise MalformedPayloadError(f"Payload must not set the reserved `{EXPIRY_FIELD}` field")
    result = dict(payload)
    if duration > 0:
        result[EXPIRY_FIELD] = now + duration
    return result


def strip_on_read(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if key != EXPIRY_FIELD}


def check_expiry(payload: Mapping[str, Any], duration: int, now: int) -> None:
    """Raise if an expiring token is past its expiry (or has none).

    No-op when ``duration`` is 0.
    """
    if duration <= 0:
        return

    expired_at = payload.get(EXPIRY_FIELD)
    # bool is an int subclass; true/false is not a timestamp.
    if isinstance(expired_at, bool) or not isinstance(expired_at, (int, float)):
        raise MalformedPayloadError(f"Missing or invalid `{EXPIRY_FIELD}` timestamp")

    if now >= expired_at:
        raise ExpiredTokenError(int(expired_at))
