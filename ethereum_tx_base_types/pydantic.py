"""Pydantic base models shared by the transaction types."""

from typing import Any, List, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel
from pydantic.alias_generators import to_camel

Model = TypeVar("Model", bound="CamelModel")

RootModelRootType = TypeVar("RootModelRootType")


class HexReprMixin:
    """Show only the fields that are set, with scalars in their hex form."""

    def __repr_args__(self) -> List[Tuple[str | None, Any]]:
        """Return the `(name, value)` pairs shown by `repr`."""
        if isinstance(self, RootModel):
            return [("root", self.root)]
        args: List[Tuple[str | None, Any]] = []
        for name in type(self).model_fields:  # type: ignore[attr-defined]
            value = getattr(self, name)
            if value is None:
                continue
            args.append((name, value if isinstance(value, (list, BaseModel)) else str(value)))
        return args


class EthereumTxBaseModel(HexReprMixin, BaseModel):
    """Base model for all transaction models."""

    pass


class EthereumTxRootModel(HexReprMixin, RootModel[RootModelRootType]):
    """Base root model for all transaction models."""

    root: Any


class CamelModel(EthereumTxBaseModel):
    """
    Model whose JSON keys are the camelCase form of its field names.

    `max_fee_per_gas` is read and written as `maxFeePerGas`; the snake_case names
    are accepted on input as well.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
    )

    def copy(self: Model, **kwargs) -> Model:  # type: ignore[override]
        """Return a validated copy of the model with the given fields replaced."""
        return type(self).model_validate(self.model_dump(exclude_unset=True) | kwargs)
