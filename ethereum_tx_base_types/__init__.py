"""
Common definitions and types.
"""

from .base_types import (
    Address,
    Bytes,
    FixedSizeBytes,
    Hash,
    HexNumber,
    Name,
    NameOrAddress,
    ZeroPaddedHexNumber,
)
from .composite_types import AccessList, AccessListItem
from .conversions import BytesConvertible, to_bytes, to_number
from .json import to_json
from .pydantic import CamelModel, EthereumTxBaseModel, EthereumTxRootModel
from .serialization import RLPList, RLPSerializable, to_serializable_element

__all__ = (
    "AccessList",
    "AccessListItem",
    "Address",
    "Bytes",
    "BytesConvertible",
    "CamelModel",
    "EthereumTxBaseModel",
    "EthereumTxRootModel",
    "FixedSizeBytes",
    "Hash",
    "HexNumber",
    "Name",
    "NameOrAddress",
    "RLPList",
    "RLPSerializable",
    "ZeroPaddedHexNumber",
    "to_bytes",
    "to_json",
    "to_number",
    "to_serializable_element",
)
