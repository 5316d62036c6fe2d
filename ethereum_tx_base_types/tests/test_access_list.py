"""
Test suite for the access list codec.
"""

from typing import Any

import ethereum_rlp as eth_rlp
import pytest
from pydantic import ValidationError

from ethereum_tx_exceptions import TransactionDecodeError

from ..base_types import Address, Bytes, Hash
from ..composite_types import AccessList, AccessListItem
from ..json import to_json


def test_access_list_rlp_keeps_storage_keys_fixed_width():
    """
    Test that storage keys are encoded with their full 32 bytes.
    """
    access_list = AccessList([AccessListItem(address=1, storage_keys=[1])])
    assert access_list.rlp() == Bytes(
        "0xf838f794" + "00" * 19 + "01" + "e1a0" + "00" * 31 + "01"
    )


def test_empty_access_list():
    """
    Test that an empty access list encodes as the empty RLP list.
    """
    assert AccessList().rlp() == Bytes("0xc0")
    assert len(AccessList()) == 0


def test_access_list_order_is_preserved():
    """
    Test that items are encoded in the order they were supplied.
    """
    first = AccessListItem(address=1, storage_keys=[1, 2])
    second = AccessListItem(address=2, storage_keys=[])
    assert AccessList([first, second]).rlp() != AccessList([second, first]).rlp()
    assert AccessListItem(address=1, storage_keys=[1, 2]).rlp() != (
        AccessListItem(address=1, storage_keys=[2, 1]).rlp()
    )
    assert [item.address for item in AccessList([second, first])] == [Address(2), Address(1)]


def test_access_list_json():
    """
    Test the JSON representation of an access list.
    """
    access_list = AccessList(
        [
            {
                "address": "0x0000000000000000000000000000000000000001",
                "storageKeys": [
                    "0x0100000000000000000000000000000000000000000000000000000000000000"
                ],
            }
        ]
    )
    assert access_list[0].storage_keys == [
        Hash("0x0100000000000000000000000000000000000000000000000000000000000000")
    ]
    assert to_json(access_list) == [
        {
            "address": "0x0000000000000000000000000000000000000001",
            "storageKeys": ["0x0100000000000000000000000000000000000000000000000000000000000000"],
        }
    ]


def test_access_list_json_rejects_unknown_fields():
    """
    Test that unknown fields in an access list item are rejected.
    """
    with pytest.raises(ValidationError):
        AccessListItem.model_validate(
            {"address": "0x0000000000000000000000000000000000000001", "storageKeys": [], "x": 1}
        )


def test_access_list_from_rlp():
    """
    Test that decoding is the structural inverse of encoding.
    """
    access_list = AccessList(
        [
            AccessListItem(address=0x1234, storage_keys=[0, 1]),
            AccessListItem(address=0x5678, storage_keys=[]),
        ]
    )
    assert AccessList.from_rlp(eth_rlp.decode(access_list.rlp())) == access_list


@pytest.mark.parametrize(
    "decoded",
    [
        pytest.param(b"", id="not-a-list"),
        pytest.param([[b"\x01" * 20]], id="missing-storage-keys"),
        pytest.param([[b"\x01" * 19, []]], id="short-address"),
        pytest.param([[b"\x01" * 20, b""]], id="storage-keys-not-a-list"),
        pytest.param([[b"\x01" * 20, [b"\x01"]]], id="trimmed-storage-key"),
        pytest.param([[b"\x01" * 20, [], []]], id="extra-field"),
    ],
)
def test_access_list_from_rlp_invalid(decoded: Any):
    """
    Test that structural mismatches are reported as decode errors.
    """
    with pytest.raises(TransactionDecodeError):
        AccessList.from_rlp(decoded)
