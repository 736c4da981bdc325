"""Closed-set fields for documents: mapping tables, coercion and generated members."""

from docweave_core.enumfield.coercion import EnumType
from docweave_core.enumfield.declaration import EnumField, enum
from docweave_core.enumfield.mapping import NOT_FOUND, MappingTable, StoredValue, build_mapping
from docweave_core.enumfield.registry import EnumRegistry, constant_name, enum_registry
from docweave_core.enumfield.sentinels import InvalidKey, InvalidValue
from docweave_core.enumfield.synthesizer import EnumOptions, method_base, synthesize

__all__ = [
    "NOT_FOUND",
    "EnumField",
    "EnumOptions",
    "EnumRegistry",
    "EnumType",
    "InvalidKey",
    "InvalidValue",
    "MappingTable",
    "StoredValue",
    "build_mapping",
    "constant_name",
    "enum",
    "enum_registry",
    "method_base",
    "synthesize",
]
