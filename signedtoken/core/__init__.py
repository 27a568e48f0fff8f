"""Token codec and its building blocks."""

from .algorithms import SUPPORTED_ALGORITHMS
from .token_codec import CodecConfig, TokenCodec

__all__ = ["CodecConfig", "SUPPORTED_ALGORITHMS", "TokenCodec"]
