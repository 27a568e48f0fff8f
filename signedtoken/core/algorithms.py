"""Registry of the keyed-hash algorithms a codec may sign with."""

import hashlib
from typing import Callable, Dict

from ..exceptions import UnsupportedAlgorithmError

HashFunction = Callable[..., "hashlib._Hash"]

DEFAULT_ALGORITHM = "HS256"

# JWT identifier -> hashlib constructor used with hmac.
_HMAC_ALGORITHMS: Dict[str, HashFunction] = {
    "HS256": hashlib.sha256,
    "HS384": hashlib.sha384,
    "HS512": hashlib.sha512,
}

SUPPORTED_ALGORITHMS = tuple(_HMAC_ALGORITHMS)


def resolve(identifier: str) -> HashFunction:
    """Return the hash constructor for ``identifier``.

    Raises UnsupportedAlgorithmError for anything outside the registry.
    Identifiers are matched exactly; ``hs256`` is not ``HS256``.
    """
    try:
        return _HMAC_ALGORITHMS[identifier]
    except (KeyError, TypeError):
        raise UnsupportedAlgorithmError(str(identifier)) from None


def is_supported(identifier: str) -> bool:
    return identifier in _HMAC_ALGORITHMS
