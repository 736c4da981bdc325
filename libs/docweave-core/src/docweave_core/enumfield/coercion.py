"""Field type translating enum labels to stored values and back."""

from __future__ import annotations

from typing import Any

from docweave_core.documents.validation import is_blank
from docweave_core.enumfield.mapping import NOT_FOUND, MappingTable
from docweave_core.enumfield.sentinels import InvalidKey, InvalidValue


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and is_blank(value))


class EnumType:
    """Coerces an enum field across the storage boundary. Never raises.

    Write side (``to_storage``)::

        blank            -> None
        label            -> its stored value
        a stored value   -> unchanged (coercion may run more than once)
        anything else    -> InvalidKey(value)

    Read side (``from_storage``)::

        a stored value   -> its label
        blank            -> None
        InvalidKey       -> the key as originally assigned
        anything else    -> InvalidValue(value)
    """

    def __init__(self, mappings: MappingTable) -> None:
        self._mappings = mappings

    @property
    def mappings(self) -> MappingTable:
        return self._mappings

    def to_storage(self, value: Any) -> Any:
        if _is_blank(value):
            return None
        stored = self._mappings.lookup_by_label(value)
        if stored is not NOT_FOUND:
            return stored
        if self._mappings.has_value(value) or isinstance(value, InvalidKey):
            return value
        if isinstance(value, InvalidValue):
            # Writing back what was read keeps the loaded data untouched.
            return value.database_value
        return InvalidKey(value)

    def from_storage(self, value: Any) -> Any:
        label = self._mappings.lookup_by_value(value)
        if label is not NOT_FOUND:
            return label
        if _is_blank(value):
            return None
        if isinstance(value, InvalidKey):
            return value.original_key
        return InvalidValue(value)

    def evolve(self, value: Any) -> Any:
        return self.to_storage(value)

    def __repr__(self) -> str:
        return f"EnumType({dict(self._mappings)!r})"
