"""RLP serialization helpers for transaction types."""

from typing import Any, ClassVar, List

import ethereum_rlp as eth_rlp
from ethereum_types.numeric import Uint

from ethereum_tx_exceptions import RLPArityError, UnresolvedNameError, UnsupportedRLPElementError

from .base_types import Bytes, Name


def to_serializable_element(v: Any) -> Any:
    """Return a serializable element that can be passed to `eth_rlp.encode`."""
    if isinstance(v, Name):
        raise UnresolvedNameError(v)
    elif isinstance(v, bool) or (isinstance(v, int) and v < 0):
        raise UnsupportedRLPElementError(v)
    elif isinstance(v, int):
        return Uint(v)
    elif isinstance(v, bytes):
        return v
    elif isinstance(v, (list, tuple)):
        return [to_serializable_element(v) for v in v]
    elif isinstance(v, RLPSerializable):
        return v.to_list()
    elif v is None:
        # Absent values keep their position in the list as the empty string.
        return b""
    raise UnsupportedRLPElementError(v)


class RLPSerializable:
    """Class that adds RLP serialization to another class."""

    rlp_fields: ClassVar[List[str]]

    def get_rlp_fields(self) -> List[str]:
        """
        Return an ordered list of field names to be included in RLP serialization.

        Function can be overridden to customize the logic to return the fields.

        By default, rlp_fields class variable is used.
        """
        return self.rlp_fields

    def get_rlp_prefix(self) -> bytes:
        """
        Return a prefix that has to be appended to the serialized object.

        By default, an empty string is returned.
        """
        return b""

    def to_list_from_fields(self, fields: List[str]) -> List[Any]:
        """Return an RLP serializable list that can be passed to `eth_rlp.encode`."""
        values_list: List[Any] = []
        for field in fields:
            assert hasattr(self, field), (
                f'Unable to rlp serialize field "{field}" '
                f'in object type "{self.__class__.__name__}"'
            )
            values_list.append(to_serializable_element(getattr(self, field)))
        return values_list

    def to_list(self) -> List[Any]:
        """Return an RLP serializable list that can be passed to `eth_rlp.encode`."""
        return self.to_list_from_fields(self.get_rlp_fields())

    def rlp(self) -> Bytes:
        """Return the serialized object."""
        return Bytes(self.get_rlp_prefix() + eth_rlp.encode(self.to_list()))


class RLPList:
    """
    RLP list builder with a length declared up front.

    Every append occupies exactly one position of the list, with `None` encoded as
    the empty string, so the arity of the output never depends on which values are
    present. Appending past the declared length, or finishing before reaching it,
    raises `RLPArityError`.
    """

    arity: int
    items: List[Any]

    def __init__(self, arity: int):
        """Begin a list of `arity` fields."""
        self.arity = arity
        self.items = []

    def __len__(self) -> int:
        """Return the number of fields appended so far."""
        return len(self.items)

    def append(self, value: Any) -> "RLPList":
        """Append a single field to the list."""
        if len(self.items) >= self.arity:
            raise RLPArityError(self.arity, len(self.items) + 1)
        self.items.append(to_serializable_element(value))
        return self

    def append_fields(self, obj: Any, fields: List[str]) -> "RLPList":
        """Append the named attributes of `obj`, in order."""
        for field in fields:
            self.append(getattr(obj, field))
        return self

    def out(self) -> Bytes:
        """Return the encoded list."""
        if len(self.items) != self.arity:
            raise RLPArityError(self.arity, len(self.items))
        return Bytes(eth_rlp.encode(self.items))
