"""Base composite types for transactions."""

from typing import Any, ClassVar, Iterator, List

from pydantic import ConfigDict, Field

from ethereum_tx_exceptions import TransactionDecodeError

from .base_types import Address, Hash
from .pydantic import CamelModel, EthereumTxRootModel
from .serialization import RLPSerializable


class AccessListItem(CamelModel, RLPSerializable):
    """Address and storage keys a transaction declares it will access."""

    address: Address
    storage_keys: List[Hash]

    model_config = ConfigDict(extra="forbid")

    rlp_fields: ClassVar[List[str]] = ["address", "storage_keys"]


class AccessList(EthereumTxRootModel[List[AccessListItem]], RLPSerializable):
    """
    Access list for transactions.

    Items are encoded in the order they were supplied: two lists holding the same
    items in a different order produce different signing hashes.
    """

    root: List[AccessListItem] = Field(default_factory=list)

    def __iter__(self) -> Iterator[AccessListItem]:  # type: ignore[override]
        """Return an iterator over the access list items."""
        return iter(self.root)

    def __len__(self) -> int:
        """Return the number of items in the access list."""
        return len(self.root)

    def __getitem__(self, index: int) -> AccessListItem:
        """Return an item from the access list."""
        return self.root[index]

    def to_list(self) -> List[Any]:
        """Return the access list as `[[address, [storage_key, ...]], ...]`."""
        return [item.to_list() for item in self.root]

    @classmethod
    def from_rlp(cls, decoded: Any) -> "AccessList":
        """
        Build an access list from its decoded RLP structure.

        Storage keys must be exactly 32 bytes and addresses exactly 20 bytes, the
        same widths they are encoded with.
        """
        if not isinstance(decoded, list):
            raise TransactionDecodeError("access list must be an rlp list")
        items: List[AccessListItem] = []
        for index, entry in enumerate(decoded):
            if not isinstance(entry, list) or len(entry) != 2:
                raise TransactionDecodeError(
                    f"access list item {index} must be a list of [address, storage_keys]"
                )
            address, storage_keys = entry
            if not isinstance(address, bytes) or len(address) != Address.byte_length:
                raise TransactionDecodeError(f"access list item {index} has an invalid address")
            if not isinstance(storage_keys, list):
                raise TransactionDecodeError(
                    f"access list item {index} storage keys must be an rlp list"
                )
            for key in storage_keys:
                if not isinstance(key, bytes) or len(key) != Hash.byte_length:
                    raise TransactionDecodeError(
                        f"access list item {index} has an invalid storage key"
                    )
            items.append(
                AccessListItem(
                    address=Address(address),
                    storage_keys=[Hash(key) for key in storage_keys],
                )
            )
        return cls(items)
