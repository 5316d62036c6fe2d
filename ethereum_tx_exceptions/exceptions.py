"""Exceptions raised while encoding or decoding typed transactions."""

from dataclasses import dataclass
from typing import Any


class TransactionEncodingError(Exception):
    """
    Base class for errors that abort an encoding.

    An encoding is never produced on a best-effort basis: if any of these is raised,
    no bytes (and therefore no signing hash) exist for the transaction.
    """

    pass


@dataclass(kw_only=True)
class UnresolvedNameError(TransactionEncodingError):
    """An address field still contains a human-readable name at encode time."""

    name: str

    def __init__(self, name: str, *args):
        """Initialize the exception with the unresolved name."""
        super().__init__(args)
        self.name = name

    def __str__(self):
        """Print exception string."""
        return f"name '{self.name}' must be resolved to an address before encoding"


@dataclass(kw_only=True)
class RLPArityError(TransactionEncodingError):
    """The number of appended fields does not match the declared list length."""

    declared: int
    appended: int

    def __init__(self, declared: int, appended: int, *args):
        """Initialize the exception with the declared and appended field counts."""
        super().__init__(args)
        self.declared = declared
        self.appended = appended

    def __str__(self):
        """Print exception string."""
        return (
            f"rlp list declared with {self.declared} fields "
            f"but {self.appended} fields were appended"
        )


@dataclass(kw_only=True)
class ChainIdMismatchError(TransactionEncodingError):
    """The chain id supplied to the encoder differs from the one stored in the transaction."""

    stored: int
    supplied: int

    def __init__(self, stored: int, supplied: int, *args):
        """Initialize the exception with both chain ids."""
        super().__init__(args)
        self.stored = stored
        self.supplied = supplied

    def __str__(self):
        """Print exception string."""
        return (
            f"chain id mismatch: transaction is bound to chain {self.stored}, "
            f"encoder was given chain {self.supplied}"
        )


@dataclass(kw_only=True)
class MissingChainIdError(TransactionEncodingError):
    """A transaction type whose signing payload includes the chain id was given none."""

    transaction_type: int

    def __init__(self, transaction_type: int, *args):
        """Initialize the exception with the transaction type."""
        super().__init__(args)
        self.transaction_type = transaction_type

    def __str__(self):
        """Print exception string."""
        return f"chain id is required to encode a type {self.transaction_type} transaction"


@dataclass(kw_only=True)
class InvalidSignatureError(TransactionEncodingError):
    """Signature `v` cannot be reduced to a recovery parity of 0 or 1."""

    v: int
    chain_id: int | None

    def __init__(self, v: int, chain_id: int | None = None, *args):
        """Initialize the exception with the offending `v` and chain id."""
        super().__init__(args)
        self.v = v
        self.chain_id = chain_id

    def __str__(self):
        """Print exception string."""
        if self.chain_id is None:
            return f"signature v={self.v} is not a valid recovery value"
        return f"signature v={self.v} is not a valid recovery value for chain {self.chain_id}"


@dataclass(kw_only=True)
class UnsupportedRLPElementError(TransactionEncodingError):
    """A value of a type that has no RLP representation was appended."""

    element: Any

    def __init__(self, element: Any, *args):
        """Initialize the exception with the offending element."""
        super().__init__(args)
        self.element = element

    def __str__(self):
        """Print exception string."""
        return f"unable to rlp serialize element {self.element!r} of type {type(self.element)}"


class TransactionDecodeError(ValueError):
    """Raw transaction bytes could not be decoded into a typed transaction."""

    pass
