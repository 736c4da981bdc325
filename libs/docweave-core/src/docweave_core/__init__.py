"""docweave-core — document models with closed-set enum fields."""

__version__ = "0.1.0"

from docweave_core.documents import (
    Criteria,
    Document,
    Field,
    InMemoryDocumentStore,
)
from docweave_core.enumfield import EnumField, InvalidKey, InvalidValue, enum
from docweave_core.exceptions import (
    DefinitionError,
    DocumentInvalidError,
    DocumentNotFoundError,
    DocweaveError,
    FrozenStateError,
    MemberConflictError,
    UnsafeSerializationError,
)

__all__ = [
    "Criteria",
    "DefinitionError",
    "DocumentInvalidError",
    "DocumentNotFoundError",
    "DocweaveError",
    "Document",
    "EnumField",
    "Field",
    "FrozenStateError",
    "InMemoryDocumentStore",
    "InvalidKey",
    "InvalidValue",
    "MemberConflictError",
    "UnsafeSerializationError",
    "enum",
]
