"""Immutable bidirectional label <-> stored value tables."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Final, TypeAlias

from docweave_core.exceptions import (
    DuplicateLabelError,
    DuplicateValueError,
    FrozenStateError,
    InvalidDefinitionError,
)

StoredValue: TypeAlias = str | int | float | bool | None


class _NotFound:
    _instance: _NotFound | None = None

    def __new__(cls) -> _NotFound:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


# Lookup miss marker; ``None`` is a legitimate stored value.
NOT_FOUND: Final = _NotFound()


def _value_key(value: Any) -> tuple[bool, Any]:
    # Keeps True/False apart from 1/0 when used as a dict key.
    return (isinstance(value, bool), value)


class MappingTable(Mapping[str, StoredValue]):
    """Ordered ``label -> stored value`` table for one enum field.

    Reads work like a dict keyed by label; ``StrEnum`` members index it too.
    Any attempt to change it raises FrozenStateError.
    """

    __slots__ = ("_entries", "_labels_by_value")

    def __init__(self, entries: Iterable[tuple[str, StoredValue]]) -> None:
        table: dict[str, StoredValue] = {}
        reverse: dict[tuple[bool, Any], str] = {}
        for label, value in entries:
            if label in table:
                raise DuplicateLabelError(label)
            key = _value_key(value)
            if key in reverse:
                raise DuplicateValueError(value, (reverse[key], label))
            table[label] = value
            reverse[key] = label
        object.__setattr__(self, "_entries", table)
        object.__setattr__(self, "_labels_by_value", reverse)

    def __getitem__(self, label: str) -> StoredValue:
        return self._entries[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, label: object) -> bool:
        try:
            return label in self._entries
        except TypeError:
            return False

    def __setitem__(self, label: str, value: StoredValue) -> None:
        msg = f"can't modify frozen enum mapping (label {label!r})"
        raise FrozenStateError(msg)

    def __delitem__(self, label: str) -> None:
        msg = f"can't modify frozen enum mapping (label {label!r})"
        raise FrozenStateError(msg)

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"can't modify frozen enum mapping (attribute {name!r})"
        raise FrozenStateError(msg)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def lookup_by_label(self, label: Any) -> StoredValue | _NotFound:
        if not isinstance(label, str):
            return NOT_FOUND
        return self._entries.get(label, NOT_FOUND)

    def lookup_by_value(self, value: Any) -> str | _NotFound:
        """The label storing exactly ``value`` (``True`` never matches ``1``)."""
        try:
            return self._labels_by_value.get(_value_key(value), NOT_FOUND)
        except TypeError:
            return NOT_FOUND

    def has_value(self, value: Any) -> bool:
        return self.lookup_by_value(value) is not NOT_FOUND

    def __repr__(self) -> str:
        return f"MappingTable({self._entries!r})"


def _normalize_label(label: Any) -> str:
    if isinstance(label, enum.Enum) and not isinstance(label, str):
        normalized = label.name
    else:
        normalized = str(label)
    if not normalized.strip():
        msg = f"Enum labels must be non-empty, got {label!r}"
        raise InvalidDefinitionError(msg)
    return normalized


def _check_value(label: str, value: Any) -> StoredValue:
    if isinstance(value, enum.Enum):
        value = value.value
    if not isinstance(value, (str, int, float, bool, type(None))):
        msg = (
            f"Enum value for {label!r} must be a string, number, boolean or None, "
            f"got {type(value).__name__}"
        )
        raise InvalidDefinitionError(msg)
    return value


def build_mapping(definition: Any) -> MappingTable:
    """Normalise an enum definition into a MappingTable.

    ``definition`` is either a mapping of label to stored value (values kept
    verbatim, ``None`` included) or an iterable of labels, each stored as its
    own string. An ``enum.Enum`` class counts as an iterable of its members.
    """
    if isinstance(definition, MappingTable):
        return definition
    if isinstance(definition, Mapping):
        pairs = [
            (label, _check_value(label, value))
            for label, value in ((_normalize_label(k), v) for k, v in definition.items())
        ]
    elif isinstance(definition, (str, bytes)) or not isinstance(definition, Iterable):
        msg = f"Enum definition must be a list of labels or a mapping, got {definition!r}"
        raise InvalidDefinitionError(msg)
    else:
        labels = [_normalize_label(label) for label in definition]
        pairs = [(label, label) for label in labels]
    if not pairs:
        msg = "Enum definition must contain at least one label"
        raise InvalidDefinitionError(msg)
    return MappingTable(pairs)
