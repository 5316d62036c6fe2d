"""Scalar types of transaction fields and their JSON representation."""

from typing import Any, ClassVar, SupportsBytes, TypeAlias

from Crypto.Hash import keccak
from pydantic import GetCoreSchemaHandler
from pydantic_core.core_schema import (
    PlainValidatorFunctionSchema,
    no_info_plain_validator_function,
    to_string_ser_schema,
)

from .conversions import (
    BytesConvertible,
    FixedSizeBytesConvertible,
    NumberConvertible,
    to_bytes,
    to_fixed_size_bytes,
    to_number,
)


class StringSchema:
    """
    Parse the type by calling its constructor and serialize it with `str()`.

    Constructors raise `ValueError` on bad input, which pydantic reports as a
    validation error.
    """

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> PlainValidatorFunctionSchema:
        """Return the plain validator schema of the type."""
        return no_info_plain_validator_function(source_type, serialization=to_string_ser_schema())


class HexNumber(int, StringSchema):
    """Unsigned integer field, shown as a minimal `0x` hex string."""

    def __new__(cls, input_number: NumberConvertible):
        """Create a new HexNumber object."""
        if type(input_number) is cls:
            return input_number
        return super().__new__(cls, to_number(input_number))

    def __str__(self) -> str:
        """Return the hex representation of the number."""
        return self.hex()

    def hex(self) -> str:
        """Return the hex representation of the number."""
        return hex(self)


class ZeroPaddedHexNumber(HexNumber):
    """Hex number padded to whole bytes, as used for the `type` tag (`0x02`)."""

    def hex(self) -> str:
        """Return the hex representation of the number, padded to whole bytes."""
        width = max(1, (int(self).bit_length() + 7) // 8)
        return "0x" + int(self).to_bytes(width, byteorder="big").hex()


class Bytes(bytes, StringSchema):
    """Byte string of any length, shown as `0x` hex."""

    def __new__(cls, input_bytes: BytesConvertible = b""):
        """Create a new Bytes object."""
        if type(input_bytes) is cls:
            return input_bytes
        return super().__new__(cls, to_bytes(input_bytes))

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return super().__hash__()

    def __str__(self) -> str:
        """Return the hex representation of the bytes."""
        return self.hex()

    def hex(self, *args, **kwargs) -> str:
        """Return the hex representation of the bytes."""
        return "0x" + super().hex(*args, **kwargs)

    def keccak256(self) -> "Hash":
        """Return the keccak256 digest of the bytes."""
        digest = keccak.new(digest_bits=256)
        digest.update(bytes(self))
        return Hash(digest.digest())


class FixedSizeBytes(Bytes):
    """
    Byte string of exactly `byte_length` bytes.

    Comparisons against integers, hex strings and shorter byte strings left-pad the
    other operand to the same width, so `Address(1) == 1 == "0x1"`.
    """

    byte_length: ClassVar[int]

    def __new__(cls, input_bytes: FixedSizeBytesConvertible, *, left_padding: bool = False):
        """Create a new fixed size byte string."""
        if type(input_bytes) is cls:
            return input_bytes
        return super().__new__(
            cls, to_fixed_size_bytes(input_bytes, cls.byte_length, left_padding=left_padding)
        )

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return super().__hash__()

    def __eq__(self, other: object) -> bool:
        """Compare against another value of the same width after padding."""
        if other is None:
            return False
        if not isinstance(other, FixedSizeBytes):
            if not isinstance(other, (str, int, bytes, SupportsBytes)):
                return NotImplemented
            try:
                other = type(self)(other, left_padding=True)
            except ValueError:
                return False
        return bytes(self) == bytes(other)

    def __ne__(self, other: object) -> bool:
        """Compare against another value of the same width after padding."""
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return equal
        return not equal


class Address(FixedSizeBytes):
    """20-byte account address."""

    byte_length = 20


class Hash(FixedSizeBytes):
    """32-byte hash, also used for storage keys and secret keys."""

    byte_length = 32


class Name(str, StringSchema):
    """
    Human-readable identifier (e.g. an ENS name) standing in for an address.

    A name has no RLP representation; it has to be resolved to an `Address`
    before the transaction holding it can be encoded.
    """

    def __new__(cls, name: str):
        """Create a new Name object."""
        if type(name) is cls:
            return name
        if not isinstance(name, str):
            raise ValueError(f"invalid type for `name`: {type(name).__name__}")
        if not name:
            raise ValueError("name must not be empty")
        if name.startswith("0x"):
            raise ValueError(f"malformed address: {name}")
        return super().__new__(cls, name)


NameOrAddress: TypeAlias = Address | Name
