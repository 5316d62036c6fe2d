"""Conversions from JSON and Python inputs into unsigned integers and byte strings."""

from typing import List, SupportsBytes, TypeAlias

BytesConvertible: TypeAlias = str | bytes | SupportsBytes | List[int]
FixedSizeBytesConvertible: TypeAlias = BytesConvertible | int
NumberConvertible: TypeAlias = str | bytes | int


def strip_hex_prefix(value: str) -> str:
    """Return the digits of a hex string, with or without its `0x` prefix."""
    return value[2:] if value[:2] in ("0x", "0X") else value


def to_bytes(input_bytes: BytesConvertible) -> bytes:
    """
    Convert a hex string, a byte string or a list of byte values into bytes.

    Hex strings of odd length are read as if they had a leading zero digit, so
    `"0x1"` is `b"\\x01"`.
    """
    if isinstance(input_bytes, (bytes, list, SupportsBytes)):
        return bytes(input_bytes)
    if isinstance(input_bytes, str):
        digits = strip_hex_prefix(input_bytes)
        if len(digits) % 2:
            digits = "0" + digits
        return bytes.fromhex(digits)
    raise ValueError(f"invalid type for `bytes`: {type(input_bytes).__name__}")


def to_fixed_size_bytes(
    input_bytes: FixedSizeBytesConvertible,
    size: int,
    *,
    left_padding: bool = False,
) -> bytes:
    """
    Convert the input into exactly `size` bytes.

    Integers are always written big-endian over the full width. Byte inputs must
    already have the right width unless `left_padding` is set, in which case
    shorter inputs are padded with leading zeros.
    """
    if isinstance(input_bytes, bool):
        raise ValueError("invalid type for fixed size bytes: bool")
    if isinstance(input_bytes, int):
        if input_bytes < 0:
            raise ValueError(f"negative value {input_bytes} can not be converted to bytes")
        return input_bytes.to_bytes(size, byteorder="big")
    converted = to_bytes(input_bytes)
    if len(converted) == size:
        return converted
    if len(converted) < size and left_padding:
        return converted.rjust(size, b"\x00")
    raise ValueError(f"expected {size} bytes, got {len(converted)}")


def to_number(input_number: NumberConvertible) -> int:
    """
    Convert the input into a non-negative integer.

    Strings are read as hex when `0x` prefixed and as decimal otherwise; byte
    strings are read big-endian.
    """
    if isinstance(input_number, bool):
        raise ValueError("invalid type for `number`: bool")
    if isinstance(input_number, int):
        number = int(input_number)
    elif isinstance(input_number, str):
        number = int(input_number, 0)
    elif isinstance(input_number, bytes):
        number = int.from_bytes(input_number, byteorder="big")
    else:
        raise ValueError(f"invalid type for `number`: {type(input_number).__name__}")
    if number < 0:
        raise ValueError(f"negative value {number} is not a valid unsigned number")
    return number
