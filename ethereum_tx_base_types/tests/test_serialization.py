"""
Test suite for the RLP serialization helpers.
"""

from typing import Any, List

import pytest

from ethereum_tx_exceptions import RLPArityError, UnresolvedNameError, UnsupportedRLPElementError

from ..base_types import Address, Bytes, Hash, HexNumber, Name
from ..serialization import RLPList, to_serializable_element


@pytest.mark.parametrize(
    "values, expected",
    [
        pytest.param([1, 2, 3], "0xc3010203", id="small-integers"),
        pytest.param([0], "0xc180", id="zero-is-empty-string"),
        pytest.param([None], "0xc180", id="none-is-empty-string"),
        pytest.param([b""], "0xc180", id="empty-bytes"),
        pytest.param([HexNumber(0x400)], "0xc3820400", id="minimal-big-endian"),
        pytest.param([[]], "0xc1c0", id="empty-list"),
        pytest.param([Bytes("0x5544")], "0xc3825544", id="bytes-passthrough"),
        pytest.param(
            [Address(1)],
            "0xd594" + "00" * 19 + "01",
            id="address-fixed-width",
        ),
    ],
)
def test_rlp_list(values: List[Any], expected: str):
    """
    Test that appended values are encoded in place with their canonical form.
    """
    stream = RLPList(len(values))
    for value in values:
        stream.append(value)
    assert stream.out() == Bytes(expected)


def test_rlp_list_absent_values_keep_arity():
    """
    Test that a missing value still occupies its slot in the list.
    """
    present = RLPList(3).append(1).append(2).append(3).out()
    absent = RLPList(3).append(1).append(None).append(3).out()
    assert present[0] == absent[0] == 0xC3
    assert absent == Bytes("0xc3018003")


def test_rlp_list_appending_past_arity():
    """
    Test that a list cannot grow past its declared length.
    """
    stream = RLPList(1).append(1)
    with pytest.raises(RLPArityError) as exc_info:
        stream.append(2)
    assert exc_info.value.declared == 1
    assert exc_info.value.appended == 2


def test_rlp_list_finishing_short_of_arity():
    """
    Test that a list cannot be finished before all declared fields are appended.
    """
    stream = RLPList(3).append(1).append(2)
    assert len(stream) == 2
    with pytest.raises(RLPArityError):
        stream.out()


def test_rlp_list_append_fields():
    """
    Test appending named attributes of an object.
    """

    class Fields:
        nonce = 1
        gas = None

    assert RLPList(2).append_fields(Fields(), ["nonce", "gas"]).out() == Bytes("0xc20180")


def test_unresolved_name():
    """
    Test that a name cannot be encoded.
    """
    with pytest.raises(UnresolvedNameError) as exc_info:
        RLPList(1).append(Name("vitalik.eth"))
    assert exc_info.value.name == "vitalik.eth"


@pytest.mark.parametrize(
    "element",
    [
        pytest.param(True, id="bool"),
        pytest.param(1.5, id="float"),
        pytest.param({"a": 1}, id="dict"),
    ],
)
def test_unsupported_element(element: Any):
    """
    Test that values without an RLP representation are rejected.
    """
    with pytest.raises(UnsupportedRLPElementError):
        to_serializable_element(element)


def test_nested_lists_are_serialized():
    """
    Test that nested sequences are converted element by element.
    """
    assert to_serializable_element([Hash(1), [None]]) == [Hash(1), [b""]]
