"""Transaction request types for the three supported wire formats."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, ClassVar, List, Literal, TypeVar

from pydantic import ConfigDict, Field, model_validator

from ethereum_tx_base_types import (
    AccessList,
    Address,
    Bytes,
    CamelModel,
    HexNumber,
    NameOrAddress,
    RLPList,
)
from ethereum_tx_exceptions import ChainIdMismatchError, MissingChainIdError

from .signature import Signature

R = TypeVar("R", bound="TransactionRequestBase")


class TransactionType(IntEnum):
    """Transaction types."""

    LEGACY = 0
    ACCESS_LIST = 1
    DYNAMIC_FEE = 2


@dataclass
class TransactionDefaults:
    """Default values for transactions."""

    chain_id: int = 1


class TransactionRequestBase(CamelModel):
    """
    Fields shared by all transaction requests.

    Every field is optional: an absent field still occupies its position in the RLP
    list, encoded as the empty string. `sender` is informational only and is never
    encoded.
    """

    sender: Address | None = Field(None, alias="from")
    to: NameOrAddress | None = None
    gas: HexNumber | None = None
    value: HexNumber | None = None
    data: Bytes | None = None
    nonce: HexNumber | None = None

    transaction_type: ClassVar[TransactionType]
    rlp_base_fields: ClassVar[List[str]]

    zero: ClassVar[Literal[0]] = 0

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    @model_validator(mode="before")
    @classmethod
    def validate_type_tag(cls, data: Any) -> Any:
        """Accept a `type` key only when it names this request's own transaction type."""
        if isinstance(data, dict) and "type" in data:
            data = dict(data)
            type_tag = HexNumber(data.pop("type"))
            if type_tag != cls.transaction_type:
                raise ValueError(
                    f"type {type_tag.hex()} does not match {cls.__name__} "
                    f"(type {int(cls.transaction_type)})"
                )
        return data

    @classmethod
    def pay(cls: type[R], to: NameOrAddress, value: int) -> R:
        """Create a request that transfers `value` to `to`."""
        return cls(to=to, value=value)

    def with_sender(self: R, sender: Address) -> R:
        """Create a copy of the request with a modified sender."""
        return self.copy(sender=sender)

    def with_to(self: R, to: NameOrAddress | None) -> R:
        """Create a copy of the request with a modified recipient."""
        return self.copy(to=to)

    def with_gas(self: R, gas: int) -> R:
        """Create a copy of the request with a modified gas limit."""
        return self.copy(gas=gas)

    def with_value(self: R, value: int) -> R:
        """Create a copy of the request with a modified value."""
        return self.copy(value=value)

    def with_data(self: R, data: Bytes) -> R:
        """Create a copy of the request with modified call data."""
        return self.copy(data=data)

    def with_nonce(self: R, nonce: int) -> R:
        """Create a copy of the request with a modified nonce."""
        return self.copy(nonce=nonce)

    def get_rlp_prefix(self) -> bytes:
        """
        Return the transaction type as bytes to be prepended to the serialized
        transaction if type is not 0.
        """
        if self.transaction_type > 0:
            return bytes([self.transaction_type])
        return b""

    def rlp_base(self, stream: RLPList) -> RLPList:
        """Append the fields common to the signed and unsigned encodings, in order."""
        return stream.append_fields(self, self.rlp_base_fields)

    def rlp(self, chain_id: int | None = None) -> Bytes:
        """Return the unsigned RLP encoding, without the type prefix."""
        raise NotImplementedError(f"unsigned encoding not implemented for {type(self).__name__}")

    def signature_v(self, signature: Signature) -> int:
        """Return the `v` value appended to the signed encoding."""
        return signature.v

    def rlp_signed(self, signature: Signature) -> Bytes:
        """Return the signed RLP encoding, without the type prefix."""
        stream = RLPList(len(self.rlp_base_fields) + 3)
        return (
            self.rlp_base(stream)
            .append(self.signature_v(signature))
            .append(signature.r)
            .append(signature.s)
            .out()
        )


class LegacyTransactionRequest(TransactionRequestBase):
    """Pre-EIP-2718 transaction paying a flat gas price."""

    gas_price: HexNumber | None = None

    transaction_type: ClassVar[TransactionType] = TransactionType.LEGACY
    rlp_base_fields: ClassVar[List[str]] = ["nonce", "gas_price", "gas", "to", "value", "data"]

    def with_gas_price(self, gas_price: int) -> "LegacyTransactionRequest":
        """Create a copy of the request with a modified gas price."""
        return self.copy(gas_price=gas_price)

    def rlp(self, chain_id: int | None = None) -> Bytes:
        """
        Return the unsigned RLP encoding.

        With a chain id, `chain_id, 0, 0` are appended (EIP-155); without one the
        six-field pre-EIP-155 list is produced.
        """
        if chain_id is None:
            return self.rlp_base(RLPList(len(self.rlp_base_fields))).out()
        stream = RLPList(len(self.rlp_base_fields) + 3)
        return self.rlp_base(stream).append(chain_id).append(self.zero).append(self.zero).out()


class AccessListTransactionRequest(TransactionRequestBase):
    """EIP-2930 transaction: a legacy transaction with an access list."""

    gas_price: HexNumber | None = None
    access_list: AccessList = Field(default_factory=AccessList)

    transaction_type: ClassVar[TransactionType] = TransactionType.ACCESS_LIST
    rlp_base_fields: ClassVar[List[str]] = [
        "nonce",
        "gas_price",
        "gas",
        "to",
        "value",
        "data",
        "access_list",
    ]

    def with_gas_price(self, gas_price: int) -> "AccessListTransactionRequest":
        """Create a copy of the request with a modified gas price."""
        return self.copy(gas_price=gas_price)

    def with_access_list(self, access_list: AccessList) -> "AccessListTransactionRequest":
        """Create a copy of the request with a modified access list."""
        return self.copy(access_list=access_list)

    def rlp(self, chain_id: int | None = None) -> Bytes:
        """Return the unsigned RLP encoding, which always commits to a chain id."""
        if chain_id is None:
            raise MissingChainIdError(self.transaction_type)
        stream = RLPList(len(self.rlp_base_fields) + 3)
        return self.rlp_base(stream).append(chain_id).append(self.zero).append(self.zero).out()


class DynamicFeeTransactionRequest(TransactionRequestBase):
    """EIP-1559 transaction: priority fee and fee cap instead of a gas price."""

    access_list: AccessList = Field(default_factory=AccessList)
    max_priority_fee_per_gas: HexNumber | None = None
    max_fee_per_gas: HexNumber | None = None
    chain_id: HexNumber = Field(default_factory=lambda: HexNumber(TransactionDefaults.chain_id))

    transaction_type: ClassVar[TransactionType] = TransactionType.DYNAMIC_FEE
    rlp_base_fields: ClassVar[List[str]] = [
        "chain_id",
        "nonce",
        "max_priority_fee_per_gas",
        "max_fee_per_gas",
        "gas",
        "to",
        "value",
        "data",
        "access_list",
    ]

    def with_access_list(self, access_list: AccessList) -> "DynamicFeeTransactionRequest":
        """Create a copy of the request with a modified access list."""
        return self.copy(access_list=access_list)

    def with_max_fee_per_gas(self, max_fee_per_gas: int) -> "DynamicFeeTransactionRequest":
        """Create a copy of the request with a modified fee cap."""
        return self.copy(max_fee_per_gas=max_fee_per_gas)

    def with_max_priority_fee_per_gas(
        self, max_priority_fee_per_gas: int
    ) -> "DynamicFeeTransactionRequest":
        """Create a copy of the request with a modified priority fee."""
        return self.copy(max_priority_fee_per_gas=max_priority_fee_per_gas)

    def with_chain_id(self, chain_id: int) -> "DynamicFeeTransactionRequest":
        """Create a copy of the request bound to a different chain."""
        return self.copy(chain_id=chain_id)

    def rlp(self, chain_id: int | None = None) -> Bytes:
        """
        Return the unsigned RLP encoding.

        The chain id is part of the base fields; a chain id given here must match it.
        """
        if chain_id is not None and chain_id != self.chain_id:
            raise ChainIdMismatchError(self.chain_id, chain_id)
        return self.rlp_base(RLPList(len(self.rlp_base_fields))).out()

    def signature_v(self, signature: Signature) -> int:
        """Return the recovery parity, which replaces `v` in the signed encoding."""
        return signature.recovery_id(self.chain_id)
