"""Storage encoding boundary — the last check before values reach a store."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from docweave_core.exceptions import UnencodableValueError

_SCALARS = (str, int, float, bool, type(None))


@runtime_checkable
class StorageEncodable(Protocol):
    """A value that knows how (or refuses) to encode itself for storage."""

    def __storage_encode__(self, field_name: str) -> Any: ...


def encode_value(field_name: str, value: Any) -> Any:
    """Encode one field value into plain JSON-compatible data.

    Scalars pass through, lists and dicts are encoded recursively and objects
    implementing ``__storage_encode__`` encode themselves. Anything else raises
    UnencodableValueError.
    """
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, StorageEncodable):
        return value.__storage_encode__(field_name)
    if isinstance(value, (list, tuple)):
        return [encode_value(field_name, item) for item in value]
    if isinstance(value, dict):
        return {str(key): encode_value(field_name, item) for key, item in value.items()}
    raise UnencodableValueError(field_name, value)


def encode_attributes(attributes: dict[str, Any]) -> dict[str, Any]:
    """Encode every attribute of a document body."""
    return {name: encode_value(name, value) for name, value in attributes.items()}


def same_value(left: Any, right: Any) -> bool:
    """Exact equality for stored values: booleans never equal numbers."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return bool(left == right)
