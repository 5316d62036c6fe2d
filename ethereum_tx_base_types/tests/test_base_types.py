"""
Test suite for `ethereum_tx_base_types` module base types.
"""

from typing import Any

import pytest
from pydantic import TypeAdapter, ValidationError

from ..base_types import (
    Address,
    Bytes,
    Hash,
    HexNumber,
    Name,
    NameOrAddress,
    ZeroPaddedHexNumber,
)


@pytest.mark.parametrize(
    "a, b, equal",
    [
        (Address(0), Address(0), True),
        (Address(0), Address(1), False),
        (Address(1), Address(0), False),
        (Address(1), "0x1", True),
        (Address(1), "0x2", False),
        (Address(1), 1, True),
        (Address(1), 2, False),
        (Address(1), b"\x01", True),
        (Address(1), b"\x02", False),
        ("0x1", Address(1), True),
        ("0x2", Address(1), False),
        (1, Address(1), True),
        (2, Address(1), False),
        (b"\x01", Address(1), True),
        (b"\x02", Address(1), False),
        (Hash(0), Hash(0), True),
        (Hash(0), Hash(1), False),
        (Hash(1), "0x1", True),
        (Hash(1), 1, True),
        (Hash(1), b"\x02", False),
        (Address(1), None, False),
        (Address(1), "0x" + "01" * 21, False),
    ],
)
def test_comparisons(a: Any, b: Any, equal: bool):
    """
    Test the comparison methods of the base types.
    """
    if equal:
        assert a == b
        assert not a != b
    else:
        assert a != b
        assert not a == b


@pytest.mark.parametrize(
    "number, expected_str",
    [
        pytest.param(HexNumber(0x539), "0x539", id="hex-number"),
        pytest.param(HexNumber("0x186a0"), "0x186a0", id="hex-number-from-hex-string"),
        pytest.param(HexNumber("100000"), "0x186a0", id="hex-number-from-decimal-string"),
        pytest.param(HexNumber(b"\x01\x00"), "0x100", id="hex-number-from-bytes"),
        pytest.param(HexNumber(0), "0x0", id="hex-number-zero"),
        pytest.param(ZeroPaddedHexNumber(0), "0x00", id="zero-padded-zero"),
        pytest.param(ZeroPaddedHexNumber(2), "0x02", id="zero-padded-two"),
        pytest.param(ZeroPaddedHexNumber(0x100), "0x0100", id="zero-padded-odd-length"),
    ],
)
def test_number_string_representation(number: HexNumber, expected_str: str):
    """
    Test the string representation of the number types.
    """
    assert str(number) == expected_str


@pytest.mark.parametrize(
    "invalid_input",
    [
        pytest.param(-1, id="negative"),
        pytest.param(True, id="bool"),
        pytest.param("0xzz", id="malformed-hex"),
        pytest.param(1.5, id="float"),
    ],
)
def test_number_invalid_input(invalid_input: Any):
    """
    Test that numbers reject inputs that are not unsigned integers.
    """
    with pytest.raises(ValueError):
        HexNumber(invalid_input)


def test_bytes():
    """
    Test the `Bytes` type conversions and representation.
    """
    assert Bytes("0x5544") == b"\x55\x44"
    assert Bytes("0x1") == b"\x01"
    assert Bytes([0x55, 0x44]) == b"\x55\x44"
    assert Bytes("0x") == b""
    assert str(Bytes(b"\x00\x01")) == "0x0001"


def test_keccak256():
    """
    Test the keccak256 digest of the empty string.
    """
    assert Bytes(b"").keccak256() == Hash(
        "0xc5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    )


@pytest.mark.parametrize(
    "input_bytes, left_padding",
    [
        pytest.param("0x01", False, id="too-short"),
        pytest.param("0x" + "00" * 21, False, id="too-long"),
        pytest.param("0x" + "00" * 21, True, id="too-long-with-padding"),
        pytest.param(-1, False, id="negative-int"),
    ],
)
def test_fixed_size_bytes_invalid_width(input_bytes: Any, left_padding: bool):
    """
    Test that fixed size bytes reject inputs of the wrong width.
    """
    with pytest.raises(ValueError):
        Address(input_bytes, left_padding=left_padding)


def test_fixed_size_bytes_padding():
    """
    Test explicit left padding of fixed size bytes.
    """
    assert Address("0x01", left_padding=True) == Address(1)
    assert len(Hash(1)) == 32
    assert str(Address(0xAA)) == "0x00000000000000000000000000000000000000aa"


@pytest.mark.parametrize(
    "name",
    [
        pytest.param("", id="empty"),
        pytest.param("0x1234", id="hex-prefixed"),
        pytest.param(b"vitalik.eth", id="bytes"),
    ],
)
def test_name_invalid(name: Any):
    """
    Test that names cannot be empty or look like an address.
    """
    with pytest.raises(ValueError):
        Name(name)


@pytest.mark.parametrize(
    "value, expected_type",
    [
        pytest.param("0x96216849c49358B10257cb55b28eA603c874b05E", Address, id="address"),
        pytest.param("vitalik.eth", Name, id="name"),
    ],
)
def test_name_or_address_parsing(value: str, expected_type: type):
    """
    Test that an address-or-name field parses addresses first and falls back to names.
    """
    adapter: TypeAdapter = TypeAdapter(NameOrAddress)
    parsed = adapter.validate_python(value)
    assert type(parsed) is expected_type


def test_name_or_address_rejects_malformed_address():
    """
    Test that a malformed hex address is not silently treated as a name.
    """
    adapter: TypeAdapter = TypeAdapter(NameOrAddress)
    with pytest.raises(ValidationError):
        adapter.validate_python("0x1234")


def test_pydantic_serialization():
    """
    Test that the base types serialize to JSON strings.
    """
    assert TypeAdapter(HexNumber).dump_python(HexNumber(10), mode="json") == "0xa"
    assert TypeAdapter(Bytes).dump_python(Bytes("0x5544"), mode="json") == "0x5544"
    assert TypeAdapter(Address).dump_python(Address(1), mode="json") == "0x" + "00" * 19 + "01"
