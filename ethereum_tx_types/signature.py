"""ECDSA signature attached to a transaction."""

from typing import ClassVar

from pydantic import ConfigDict

from ethereum_tx_base_types import BytesConvertible, CamelModel, HexNumber, to_bytes
from ethereum_tx_exceptions import InvalidSignatureError


def to_eip155_v(recovery_id: int, chain_id: int | None = None) -> int:
    """Fold a recovery parity and an optional chain id into a `v` value."""
    if chain_id is None:
        return recovery_id + 27
    return recovery_id + 35 + chain_id * 2


class Signature(CamelModel):
    """
    Recoverable signature `{v, r, s}`.

    `v` is always stored in EIP-155 form: `chain_id * 2 + 35 + recovery_id`, or
    `27 + recovery_id` when no chain id is folded in.
    """

    v: HexNumber
    r: HexNumber
    s: HexNumber

    model_config = ConfigDict(extra="forbid")

    recoverable_length: ClassVar[int] = 65

    @property
    def chain_id(self) -> int | None:
        """Return the chain id folded into `v`, if any."""
        if self.v < 35:
            return None
        return (self.v - 35) // 2

    def recovery_id(self, chain_id: int | None = None) -> int:
        """
        Reduce `v` to the recovery parity (0 or 1).

        Accepts the EIP-155 form for `chain_id` (or for any chain when `chain_id` is
        not given), the `27/28` form and a bare parity.
        """
        v = int(self.v)
        if v in (0, 1):
            return v
        if v in (27, 28):
            return v - 27
        if v >= 35:
            if chain_id is None:
                return (v - 35) % 2
            recovery_id = v - 35 - chain_id * 2
            if recovery_id in (0, 1):
                return recovery_id
        raise InvalidSignatureError(v, chain_id)

    def to_recoverable_bytes(self, chain_id: int | None = None) -> bytes:
        """Return `r || s || recovery_id`, the 65-byte form used by the ECDSA backend."""
        return (
            int(self.r).to_bytes(32, byteorder="big")
            + int(self.s).to_bytes(32, byteorder="big")
            + bytes([self.recovery_id(chain_id)])
        )

    @classmethod
    def from_recoverable_bytes(
        cls, signature_bytes: BytesConvertible, chain_id: int | None = None
    ) -> "Signature":
        """Build a signature from `r || s || recovery_id`, folding in the chain id."""
        signature_bytes = to_bytes(signature_bytes)
        if len(signature_bytes) != cls.recoverable_length:
            raise ValueError(
                f"recoverable signature must be {cls.recoverable_length} bytes, "
                f"got {len(signature_bytes)}"
            )
        recovery_id = signature_bytes[64]
        if recovery_id not in (0, 1):
            raise InvalidSignatureError(recovery_id, chain_id)
        return cls(
            v=to_eip155_v(recovery_id, chain_id),
            r=int.from_bytes(signature_bytes[0:32], byteorder="big"),
            s=int.from_bytes(signature_bytes[32:64], byteorder="big"),
        )
