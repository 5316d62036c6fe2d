"""
Typed transaction requests, the envelope over them and their signatures.
"""

from .signature import Signature, to_eip155_v
from .transaction_types import (
    AccessListTransactionRequest,
    DynamicFeeTransactionRequest,
    LegacyTransactionRequest,
    TransactionDefaults,
    TransactionRequestBase,
    TransactionType,
)
from .typed_transaction import TransactionRequest, TypedTransaction

__all__ = (
    "AccessListTransactionRequest",
    "DynamicFeeTransactionRequest",
    "LegacyTransactionRequest",
    "Signature",
    "TransactionDefaults",
    "TransactionRequest",
    "TransactionRequestBase",
    "TransactionType",
    "TypedTransaction",
    "to_eip155_v",
)
