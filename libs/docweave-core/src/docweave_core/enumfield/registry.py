"""Per-model, copy-on-extend registry of enum definitions."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from docweave_core.enumfield.mapping import MappingTable
from docweave_core.exceptions import (
    DefinitionError,
    DuplicateDefinitionError,
    FrozenStateError,
)
from docweave_core.strings import pluralize

if TYPE_CHECKING:
    from docweave_core.documents.document import Document

logger = logging.getLogger(__name__)

REGISTRY_ATTRIBUTE = "enums"


class EnumRegistry(Mapping[str, MappingTable]):
    """Read-only ``field name -> MappingTable`` view of a model's enums."""

    __slots__ = ("_tables",)

    def __init__(self, tables: Mapping[str, MappingTable] | None = None) -> None:
        object.__setattr__(self, "_tables", MappingProxyType(dict(tables or {})))

    def __getitem__(self, name: str) -> MappingTable:
        return self._tables[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __setitem__(self, name: str, table: MappingTable) -> None:
        msg = f"can't modify frozen enum registry (field {name!r})"
        raise FrozenStateError(msg)

    def __delitem__(self, name: str) -> None:
        msg = f"can't modify frozen enum registry (field {name!r})"
        raise FrozenStateError(msg)

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"can't modify frozen enum registry (attribute {name!r})"
        raise FrozenStateError(msg)

    def extended(self, name: str, table: MappingTable) -> EnumRegistry:
        """A new registry holding every current entry plus ``name``."""
        return EnumRegistry({**self._tables, name: table})

    def __repr__(self) -> str:
        return f"EnumRegistry({list(self._tables)!r})"


def constant_name(field_name: str) -> str:
    """Class constant exposing a field's mapping (``read_status`` -> ``READ_STATUSES``)."""
    return pluralize(field_name).upper()


def enum_registry(model: type[Document]) -> EnumRegistry:
    """The registry visible on ``model``, inherited or its own; empty if none."""
    registry = getattr(model, REGISTRY_ATTRIBUTE, None)
    if registry is None:
        return EnumRegistry()
    if not isinstance(registry, EnumRegistry):
        msg = f"{model.__name__}.{REGISTRY_ATTRIBUTE} is already defined and is not an enum registry"
        raise DefinitionError(msg)
    return registry


def check_constant(model: type[Document], field_name: str) -> str:
    """Raise DuplicateDefinitionError if the field's constant name is taken."""
    const_name = constant_name(field_name)
    if model.members().resolves(const_name):
        raise DuplicateDefinitionError(field_name, model.__name__, const_name)
    return const_name


def register_enum(model: type[Document], field_name: str, table: MappingTable) -> None:
    """Expose ``table`` as a class constant and in ``model.enums``.

    Checks run before anything is written, so a failed registration leaves
    the model untouched. The declaring model gets a fresh registry; the one
    it inherited is never modified.
    """
    const_name = check_constant(model, field_name)
    registry = enum_registry(model).extended(field_name, table)

    setattr(model, const_name, table)
    model.declare_member(const_name, "class")
    setattr(model, REGISTRY_ATTRIBUTE, registry)
    model.declare_member(REGISTRY_ATTRIBUTE, "class")
    logger.debug("Registered enum %s.%s as %s", model.__name__, field_name, const_name)
