"""Exceptions for invalid transaction encoding and decoding."""

from .exceptions import (
    ChainIdMismatchError,
    InvalidSignatureError,
    MissingChainIdError,
    RLPArityError,
    TransactionDecodeError,
    TransactionEncodingError,
    UnresolvedNameError,
    UnsupportedRLPElementError,
)

__all__ = [
    "ChainIdMismatchError",
    "InvalidSignatureError",
    "MissingChainIdError",
    "RLPArityError",
    "TransactionDecodeError",
    "TransactionEncodingError",
    "UnresolvedNameError",
    "UnsupportedRLPElementError",
]
