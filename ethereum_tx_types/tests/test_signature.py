"""
Test suite for the transaction signature type.
"""

import pytest

from ethereum_tx_exceptions import InvalidSignatureError

from ..signature import Signature, to_eip155_v

R = 0x28EF61340BD939BC2195FE537567866003E1A15D3C71FF63E1590620AA636276
S = 0x67CBE9D8997F761AECB703304B3800CCF555C9F3DC64214B297FB1966A3B6D83


@pytest.mark.parametrize(
    "v, chain_id, expected",
    [
        pytest.param(0, None, 0, id="bare-parity-0"),
        pytest.param(1, 0x539, 1, id="bare-parity-1"),
        pytest.param(27, None, 0, id="pre-eip155-27"),
        pytest.param(28, 1, 1, id="pre-eip155-28"),
        pytest.param(37, 1, 0, id="eip155-mainnet-0"),
        pytest.param(38, 1, 1, id="eip155-mainnet-1"),
        pytest.param(0x539 * 2 + 35, 0x539, 0, id="eip155-chain-1337-0"),
        pytest.param(0x539 * 2 + 36, 0x539, 1, id="eip155-chain-1337-1"),
        pytest.param(0x539 * 2 + 36, None, 1, id="eip155-any-chain"),
    ],
)
def test_recovery_id(v: int, chain_id: int | None, expected: int):
    """
    Test reduction of `v` to the recovery parity.
    """
    assert Signature(v=v, r=R, s=S).recovery_id(chain_id) == expected


@pytest.mark.parametrize(
    "v, chain_id",
    [
        pytest.param(2, None, id="between-parity-and-27"),
        pytest.param(29, None, id="above-28"),
        pytest.param(37, 0x539, id="other-chain"),
        pytest.param(0x539 * 2 + 37, 0x539, id="parity-out-of-range"),
    ],
)
def test_recovery_id_invalid(v: int, chain_id: int | None):
    """
    Test that values that do not reduce to 0 or 1 are rejected.
    """
    with pytest.raises(InvalidSignatureError) as exc_info:
        Signature(v=v, r=R, s=S).recovery_id(chain_id)
    assert exc_info.value.v == v
    assert exc_info.value.chain_id == chain_id


@pytest.mark.parametrize(
    "v, expected_chain_id",
    [
        pytest.param(27, None, id="pre-eip155"),
        pytest.param(37, 1, id="mainnet"),
        pytest.param(0x539 * 2 + 36, 0x539, id="chain-1337"),
    ],
)
def test_chain_id(v: int, expected_chain_id: int | None):
    """
    Test the chain id folded into `v`.
    """
    assert Signature(v=v, r=R, s=S).chain_id == expected_chain_id


def test_to_eip155_v():
    """
    Test folding of a recovery parity with and without a chain id.
    """
    assert to_eip155_v(0) == 27
    assert to_eip155_v(1) == 28
    assert to_eip155_v(0, 1) == 37
    assert to_eip155_v(1, 0x539) == 0x539 * 2 + 36


def test_recoverable_bytes():
    """
    Test conversion to and from the 65-byte recoverable form.
    """
    signature = Signature(v=38, r=R, s=S)
    recoverable = signature.to_recoverable_bytes(1)
    assert len(recoverable) == 65
    assert recoverable[:32] == R.to_bytes(32, byteorder="big")
    assert recoverable[32:64] == S.to_bytes(32, byteorder="big")
    assert recoverable[64] == 1
    assert Signature.from_recoverable_bytes(recoverable, 1) == signature
    assert Signature.from_recoverable_bytes(recoverable).v == 28


def test_from_recoverable_bytes_invalid():
    """
    Test that malformed recoverable signatures are rejected.
    """
    with pytest.raises(ValueError):
        Signature.from_recoverable_bytes(b"\x00" * 64)
    with pytest.raises(InvalidSignatureError):
        Signature.from_recoverable_bytes(b"\x00" * 64 + b"\x02")


def test_signature_json():
    """
    Test the JSON representation of a signature.
    """
    signature = Signature.model_validate({"v": "0x25", "r": hex(R), "s": hex(S)})
    assert signature.v == 37
    assert signature.model_dump(mode="json") == {"v": "0x25", "r": hex(R), "s": hex(S)}
