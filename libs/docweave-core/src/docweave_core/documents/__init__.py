"""Document mapping layer — models, fields, criteria, validation and stores."""

from docweave_core.documents.criteria import Criteria
from docweave_core.documents.document import RESERVED_NAMES, Document
from docweave_core.documents.fields import Declaration, Field, FieldType, Passthrough
from docweave_core.documents.identifiers import CollectionName, DocumentId
from docweave_core.documents.members import MemberRegistry
from docweave_core.documents.store import Condition, DocumentStore, InMemoryDocumentStore, SortKey
from docweave_core.documents.validation import (
    Errors,
    InclusionValidator,
    PresenceValidator,
    UniquenessValidator,
    Validator,
)

__all__ = [
    "RESERVED_NAMES",
    "CollectionName",
    "Condition",
    "Criteria",
    "Declaration",
    "Document",
    "DocumentId",
    "DocumentStore",
    "Errors",
    "Field",
    "FieldType",
    "InMemoryDocumentStore",
    "InclusionValidator",
    "MemberRegistry",
    "Passthrough",
    "PresenceValidator",
    "SortKey",
    "UniquenessValidator",
    "Validator",
]
