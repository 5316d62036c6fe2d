"""Typed transaction envelope over the supported transaction requests."""

from typing import Annotated, Any, Callable, Dict, List, Tuple, Type, Union

import ethereum_rlp as eth_rlp
from coincurve.keys import PrivateKey, PublicKey
from ethereum_rlp.exceptions import DecodingError
from pydantic import Discriminator, Tag, model_serializer, model_validator

from ethereum_tx_base_types import (
    AccessList,
    Address,
    Bytes,
    BytesConvertible,
    EthereumTxRootModel,
    Hash,
    HexNumber,
    Name,
    NameOrAddress,
    ZeroPaddedHexNumber,
    to_number,
)
from ethereum_tx_exceptions import TransactionDecodeError
from ethereum_tx_logging import get_logger

from .signature import Signature, to_eip155_v
from .transaction_types import (
    AccessListTransactionRequest,
    DynamicFeeTransactionRequest,
    LegacyTransactionRequest,
    TransactionRequestBase,
    TransactionType,
)

logger = get_logger(__name__)

TRANSACTION_REQUEST_TYPES: Dict[TransactionType, Type[TransactionRequestBase]] = {
    TransactionType.LEGACY: LegacyTransactionRequest,
    TransactionType.ACCESS_LIST: AccessListTransactionRequest,
    TransactionType.DYNAMIC_FEE: DynamicFeeTransactionRequest,
}


def transaction_type_discriminator(v: Any) -> str | None:
    """Discriminator function that returns the transaction type as a string."""
    if isinstance(v, dict):
        type_tag = v.get("type")
        if type_tag is None:
            return None
        try:
            return str(to_number(type_tag))
        except ValueError:
            return None
    transaction_type = getattr(v, "transaction_type", None)
    if transaction_type is None:
        return None
    return str(int(transaction_type))


TransactionRequest = Annotated[
    Union[
        Annotated[LegacyTransactionRequest, Tag(str(int(TransactionType.LEGACY)))],
        Annotated[AccessListTransactionRequest, Tag(str(int(TransactionType.ACCESS_LIST)))],
        Annotated[DynamicFeeTransactionRequest, Tag(str(int(TransactionType.DYNAMIC_FEE)))],
    ],
    Discriminator(transaction_type_discriminator),
]


def decode_uint(field: str, value: Any) -> HexNumber:
    """Decode a canonical RLP integer."""
    if not isinstance(value, bytes):
        raise TransactionDecodeError(f"{field} must be an rlp string")
    if value[:1] == b"\x00":
        raise TransactionDecodeError(f"{field} is not canonical: leading zero bytes")
    return HexNumber(int.from_bytes(value, byteorder="big"))


def decode_to(value: Any) -> Address | None:
    """Decode the recipient; the empty string means contract creation."""
    if not isinstance(value, bytes):
        raise TransactionDecodeError("to must be an rlp string")
    if value == b"":
        return None
    if len(value) != Address.byte_length:
        raise TransactionDecodeError(f"to must be {Address.byte_length} bytes, got {len(value)}")
    return Address(value)


def decode_data(value: Any) -> Bytes:
    """Decode the call data."""
    if not isinstance(value, bytes):
        raise TransactionDecodeError("data must be an rlp string")
    return Bytes(value)


class TypedTransaction(EthereumTxRootModel[TransactionRequest]):
    """
    Envelope holding exactly one transaction request.

    The envelope wraps the request without copying it; setters mutate the wrapped
    request in place. Its JSON form is the request's JSON plus a `type` tag.
    """

    root: TransactionRequest

    @model_validator(mode="before")
    @classmethod
    def validate_type_is_present(cls, data: Any) -> Any:
        """Require the `type` tag when parsing from a mapping."""
        if isinstance(data, dict) and "type" not in data:
            raise ValueError("transaction type is missing")
        return data

    @model_serializer(mode="wrap")
    def serialize_with_type(self, serializer, info):
        """Add the zero-padded `type` tag to the serialized request."""
        data = serializer(self)
        type_tag = ZeroPaddedHexNumber(self.transaction_type)
        data["type"] = str(type_tag) if info.mode_is_json() else type_tag
        return data

    @property
    def request(self) -> TransactionRequestBase:
        """Return the wrapped request."""
        match self.root:
            case (
                LegacyTransactionRequest()
                | AccessListTransactionRequest()
                | DynamicFeeTransactionRequest()
            ):
                return self.root
        raise TypeError(f"unsupported transaction request: {type(self.root).__name__}")

    @property
    def transaction_type(self) -> TransactionType:
        """Return the type of the wrapped request."""
        return self.request.transaction_type

    @property
    def sender(self) -> Address | None:
        """Return the sender."""
        return self.request.sender

    @property
    def to(self) -> NameOrAddress | None:
        """Return the recipient."""
        return self.request.to

    @property
    def nonce(self) -> HexNumber | None:
        """Return the nonce."""
        return self.request.nonce

    @property
    def value(self) -> HexNumber | None:
        """Return the transferred value."""
        return self.request.value

    @property
    def gas(self) -> HexNumber | None:
        """Return the gas limit."""
        return self.request.gas

    @property
    def data(self) -> Bytes | None:
        """Return the call data."""
        return self.request.data

    @property
    def gas_price(self) -> HexNumber | None:
        """Return the gas price, which is the fee cap for dynamic fee requests."""
        match self.root:
            case LegacyTransactionRequest() | AccessListTransactionRequest():
                return self.root.gas_price
            case DynamicFeeTransactionRequest():
                return self.root.max_fee_per_gas
        raise TypeError(f"unsupported transaction request: {type(self.root).__name__}")

    @property
    def chain_id(self) -> HexNumber | None:
        """Return the chain id stored in the request, if its type stores one."""
        match self.root:
            case LegacyTransactionRequest() | AccessListTransactionRequest():
                return None
            case DynamicFeeTransactionRequest():
                return self.root.chain_id
        raise TypeError(f"unsupported transaction request: {type(self.root).__name__}")

    @property
    def access_list(self) -> AccessList | None:
        """Return the access list, if the request type has one."""
        match self.root:
            case LegacyTransactionRequest():
                return None
            case AccessListTransactionRequest() | DynamicFeeTransactionRequest():
                return self.root.access_list
        raise TypeError(f"unsupported transaction request: {type(self.root).__name__}")

    def set_sender(self, sender: Address) -> "TypedTransaction":
        """Set the sender."""
        self.request.sender = sender
        return self

    def set_to(self, to: NameOrAddress | None) -> "TypedTransaction":
        """Set the recipient."""
        self.request.to = to
        return self

    def set_nonce(self, nonce: int) -> "TypedTransaction":
        """Set the nonce."""
        self.request.nonce = nonce
        return self

    def set_value(self, value: int) -> "TypedTransaction":
        """Set the transferred value."""
        self.request.value = value
        return self

    def set_gas(self, gas: int) -> "TypedTransaction":
        """Set the gas limit."""
        self.request.gas = gas
        return self

    def set_data(self, data: Bytes) -> "TypedTransaction":
        """Set the call data."""
        self.request.data = data
        return self

    def set_gas_price(self, gas_price: int) -> "TypedTransaction":
        """Set the gas price; dynamic fee requests get it as both fee cap and priority fee."""
        match self.root:
            case LegacyTransactionRequest() | AccessListTransactionRequest():
                self.root.gas_price = gas_price
            case DynamicFeeTransactionRequest():
                self.root.max_fee_per_gas = gas_price
                self.root.max_priority_fee_per_gas = gas_price
            case _:
                raise TypeError(f"unsupported transaction request: {type(self.root).__name__}")
        return self

    def resolve_names(self, resolver: Callable[[Name], NameOrAddress]) -> "TypedTransaction":
        """Replace a name in the recipient with the address returned by `resolver`."""
        if isinstance(self.request.to, Name):
            name = self.request.to
            self.request.to = Address(resolver(name))
            logger.debug(f"Resolved {name} to {self.request.to}")
        return self

    def encode_unsigned(self, chain_id: int | None = None) -> Bytes:
        """Return the type-prefixed unsigned encoding."""
        request = self.request
        encoded = Bytes(request.get_rlp_prefix() + request.rlp(chain_id))
        logger.debug(f"Unsigned type {int(self.transaction_type)} encoding: {encoded}")
        return encoded

    def encode_signed(self, signature: Signature) -> Bytes:
        """Return the type-prefixed signed encoding, ready to broadcast."""
        request = self.request
        encoded = Bytes(request.get_rlp_prefix() + request.rlp_signed(signature))
        logger.debug(f"Signed type {int(self.transaction_type)} encoding: {encoded}")
        return encoded

    def sighash(self, chain_id: int | None = None) -> Hash:
        """Return the hash signed by the sender: keccak256 of the unsigned encoding."""
        signing_hash = self.encode_unsigned(chain_id).keccak256()
        logger.verbose(f"Signing hash: {signing_hash}")
        return signing_hash

    def hash(self, signature: Signature) -> Hash:
        """Return the transaction hash: keccak256 of the signed encoding."""
        return self.encode_signed(signature).keccak256()

    def signature_chain_id(self, chain_id: int | None = None) -> int | None:
        """Return the chain id folded into signatures over this transaction."""
        match self.root:
            case LegacyTransactionRequest() | AccessListTransactionRequest():
                return chain_id
            case DynamicFeeTransactionRequest():
                return self.root.chain_id if chain_id is None else chain_id
        raise TypeError(f"unsupported transaction request: {type(self.root).__name__}")

    def sign(self, secret_key: BytesConvertible | int, chain_id: int | None = None) -> Signature:
        """Sign the signing hash and return the signature in EIP-155 form."""
        signing_hash = self.sighash(chain_id)
        signature_bytes = PrivateKey(secret=Hash(secret_key)).sign_recoverable(
            signing_hash, hasher=None
        )
        signature = Signature.from_recoverable_bytes(
            signature_bytes, self.signature_chain_id(chain_id)
        )
        logger.verbose(f"Signed {signing_hash} with v={signature.v}")
        return signature

    def recover_sender(self, signature: Signature, chain_id: int | None = None) -> Address:
        """
        Recover the address that produced `signature`.

        For legacy and access list requests the chain id defaults to the one folded
        into `signature.v`.
        """
        if chain_id is None and not isinstance(self.root, DynamicFeeTransactionRequest):
            chain_id = signature.chain_id
        signing_hash = self.sighash(chain_id)
        public_key = PublicKey.from_signature_and_message(
            signature.to_recoverable_bytes(self.signature_chain_id(chain_id)),
            signing_hash,
            hasher=None,
        )
        return Address(Bytes(public_key.format(compressed=False)[1:]).keccak256()[32 - 20 :])

    @classmethod
    def decode_signed(cls, raw: BytesConvertible) -> Tuple["TypedTransaction", Signature]:
        """
        Parse a signed, type-prefixed encoding back into a transaction and signature.

        Bare legacy encodings and legacy encodings with a `0x00` prefix are both
        accepted. Absent and zero integers share an encoding, so every decoded
        integer field is populated.
        """
        try:
            raw = Bytes(raw)
        except ValueError as e:
            raise TransactionDecodeError(f"invalid transaction bytes: {e}") from e
        if len(raw) == 0:
            raise TransactionDecodeError("empty transaction")

        if raw[0] >= 0xC0:
            transaction_type, payload = TransactionType.LEGACY, bytes(raw)
        elif raw[0] in TRANSACTION_REQUEST_TYPES:
            transaction_type, payload = TransactionType(raw[0]), bytes(raw[1:])
        else:
            raise TransactionDecodeError(f"unsupported transaction type 0x{raw[0]:02x}")

        try:
            fields = eth_rlp.decode(payload)
        except DecodingError as e:
            raise TransactionDecodeError(f"invalid rlp: {e}") from e
        if eth_rlp.encode(fields) != payload:
            raise TransactionDecodeError("rlp payload is not canonical or has trailing bytes")
        if not isinstance(fields, list):
            raise TransactionDecodeError("transaction must be an rlp list")

        request_type = TRANSACTION_REQUEST_TYPES[transaction_type]
        expected_length = len(request_type.rlp_base_fields) + 3
        if len(fields) != expected_length:
            raise TransactionDecodeError(
                f"type {int(transaction_type)} transaction must have {expected_length} "
                f"fields, got {len(fields)}"
            )

        request = cls.decode_request(request_type, fields[:-3])
        v, r, s = (decode_uint(name, value) for name, value in zip("vrs", fields[-3:]))
        if isinstance(request, DynamicFeeTransactionRequest):
            if v not in (0, 1):
                raise TransactionDecodeError(f"signature parity must be 0 or 1, got {v}")
            v = HexNumber(to_eip155_v(v, request.chain_id))
        logger.debug(f"Decoded type {int(transaction_type)} transaction")
        return cls(request), Signature(v=v, r=r, s=s)

    @staticmethod
    def decode_request(
        request_type: Type[TransactionRequestBase], fields: List[Any]
    ) -> TransactionRequestBase:
        """Build a request from its decoded base fields."""
        values: Dict[str, Any] = {}
        for name, value in zip(request_type.rlp_base_fields, fields):
            if name == "to":
                values[name] = decode_to(value)
            elif name == "data":
                values[name] = decode_data(value)
            elif name == "access_list":
                values[name] = AccessList.from_rlp(value)
            else:
                values[name] = decode_uint(name, value)
        return request_type(**values)
