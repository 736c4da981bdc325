"""Builds an enum field's full API from its definition."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from docweave_core.documents.encoding import same_value
from docweave_core.documents.members import MemberKind
from docweave_core.documents.validation import InclusionValidator
from docweave_core.enumfield.coercion import EnumType
from docweave_core.enumfield.mapping import MappingTable, StoredValue, build_mapping
from docweave_core.enumfield.registry import REGISTRY_ATTRIBUTE, check_constant, register_enum
from docweave_core.exceptions import (
    InvalidDefinitionError,
    MemberConflictError,
    UnknownDefaultError,
)

if TYPE_CHECKING:
    from docweave_core.documents.criteria import Criteria
    from docweave_core.documents.document import Document

logger = logging.getLogger(__name__)

INVALID_MESSAGE = "is invalid"


class EnumOptions(BaseModel):
    """Options shared by every field of one enum declaration.

    ``prefix`` / ``suffix``: ``True`` uses the field name, a string is used
    literally. ``default`` is a label, not a stored value.
    """

    model_config = ConfigDict(frozen=True)

    prefix: bool | str | None = None
    suffix: bool | str | None = None
    default: str | None = None


def resolve_affix(option: bool | str | None, field_name: str) -> str | None:
    if option is True:
        return field_name
    if option:
        return str(option)
    return None


def method_base(label: str, field_name: str, options: EnumOptions) -> str:
    """``[prefix_]label[_suffix]`` — the stem of a label's generated members."""
    parts = [
        resolve_affix(options.prefix, field_name),
        label,
        resolve_affix(options.suffix, field_name),
    ]
    return "_".join(part for part in parts if part)


def predicate_name(base: str) -> str:
    return f"is_{base}"


def mutator_name(base: str) -> str:
    return f"set_{base}_and_save"


def detect_conflict(model: type[Document], enum_name: str, member: str, kind: MemberKind) -> None:
    if model.members().resolves(member):
        raise MemberConflictError(enum_name, model.__name__, kind, member)


def _predicate(field_name: str, value: StoredValue) -> Callable[[Document], bool]:
    def predicate(self: Document) -> bool:
        # Stored values are compared, so sentinel-wrapped values never match.
        return same_value(self[field_name], value)

    return predicate


def _mutator(field_name: str, label: str) -> Callable[[Document], None]:
    def mutator(self: Document) -> None:
        self.update_and_save(**{field_name: label})

    return mutator


def _scope(field_name: str, label: str) -> Callable[[type[Document]], Criteria[Any]]:
    def scope(model: type[Document]) -> Criteria[Any]:
        return model.where(**{field_name: label})

    return scope


def _install(
    model: type[Document], member: str, kind: MemberKind, function: Callable[..., Any]
) -> None:
    function.__name__ = member
    function.__qualname__ = f"{model.__qualname__}.{member}"
    if kind == "class":
        model.scope(member, function)
    else:
        model.declare_generated(member, function, kind=kind)


def synthesize(
    model: type[Document],
    field_name: str,
    definition: Any,
    options: EnumOptions,
) -> MappingTable:
    """Declare enum field ``field_name`` on ``model``.

    Installs the storage field (with ``EnumType`` coercion and the default
    label), the ``FIELD_NAMES`` constant, the ``model.enums`` entry and an
    inclusion rule, then per label a predicate ``is_<base>``, a mutator
    ``set_<base>_and_save`` and a scope ``<base>``.

    Every name the declaration would add is checked before the model is
    touched, so a failed declaration leaves the model unchanged.
    """
    table = build_mapping(definition)
    if options.default is not None and options.default not in table:
        raise UnknownDefaultError(options.default)
    bases = {label: method_base(label, field_name, options) for label in table}
    for label, base in bases.items():
        if not base.isidentifier():
            msg = f"Enum {field_name!r} label {label!r} does not produce a valid member name ({base!r})"
            raise InvalidDefinitionError(msg)
    const_name = check_constant(model, field_name)
    detect_conflict(model, field_name, field_name, "instance")

    members: list[tuple[str, MemberKind, Callable[..., Any]]] = []
    for label, value in table.items():
        base = bases[label]
        members += [
            (predicate_name(base), "instance", _predicate(field_name, value)),
            (mutator_name(base), "instance", _mutator(field_name, label)),
            (base, "class", _scope(field_name, label)),
        ]
    planned = {field_name, const_name, REGISTRY_ATTRIBUTE}
    for member, kind, _ in members:
        if member in planned:
            raise MemberConflictError(field_name, model.__name__, kind, member)
        detect_conflict(model, field_name, member, kind)
        planned.add(member)

    register_enum(model, field_name, table)
    model.field(field_name, EnumType(table), default=options.default)
    model.validates(
        field_name, InclusionValidator(table.labels, allow_none=True, message=INVALID_MESSAGE)
    )
    for member, kind, function in members:
        _install(model, member, kind, function)

    logger.debug(
        "Declared enum %s.%s with labels %s", model.__name__, field_name, ", ".join(table.labels)
    )
    return table
