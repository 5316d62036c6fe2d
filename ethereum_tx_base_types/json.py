"""
JSON encoding for transaction types.
"""

from typing import Any, List

from pydantic import BaseModel


def to_json(input: BaseModel | List[BaseModel]) -> Any:
    """
    Return the JSON data of a model: camelCase keys, hex strings and no absent fields.
    """
    if isinstance(input, list):
        return [to_json(item) for item in input]
    return input.model_dump(mode="json", by_alias=True, exclude_none=True)
