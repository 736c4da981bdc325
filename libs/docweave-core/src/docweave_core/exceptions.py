"""Error hierarchy for docweave-core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from docweave_core.documents.validation import Errors


class DocweaveError(Exception):
    """Base exception for all docweave-core errors."""


class FrozenStateError(DocweaveError, TypeError):
    """An immutable table or registry was asked to change."""


# -- Declaration-time errors ------------------------------------------------


class DefinitionError(DocweaveError):
    """A model declaration is invalid. Raised while the class is being built."""


class InvalidDefinitionError(DefinitionError):
    """An enum definition argument is malformed."""


class DuplicateLabelError(DefinitionError):
    """Two labels of one enum normalise to the same string."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Duplicate enum label: {label!r}")
        self.label = label


class DuplicateValueError(DefinitionError):
    """Two labels of one enum map to the same stored value."""

    def __init__(self, value: Any, labels: tuple[str, str]) -> None:
        super().__init__(
            f"Stored value {value!r} is mapped by both {labels[0]!r} and {labels[1]!r}"
        )
        self.value = value
        self.labels = labels


class UnknownDefaultError(DefinitionError):
    """The default label is not one of the enum's labels."""

    def __init__(self, default: str) -> None:
        super().__init__(f"default key {default} is not among enum options")
        self.default = default


class DuplicateDefinitionError(DefinitionError):
    """Declaring the enum would overwrite an existing class constant."""

    def __init__(self, enum_name: str, model_name: str, const_name: str) -> None:
        super().__init__(
            f"Defining enum {enum_name!r} on {model_name} would overwrite "
            f"existing constant {model_name}.{const_name}"
        )
        self.enum_name = enum_name
        self.model_name = model_name
        self.const_name = const_name


class MemberConflictError(DefinitionError):
    """A generated member name is already taken on the model."""

    def __init__(self, enum_name: str, model_name: str, kind: str, method: str) -> None:
        super().__init__(
            f'You tried to define an enum named "{enum_name}" on the model "{model_name}", '
            f'but this will generate {kind} method "{method}", which is already defined.'
        )
        self.enum_name = enum_name
        self.model_name = model_name
        self.kind = kind
        self.method = method


# -- Runtime errors ---------------------------------------------------------


class DocumentError(DocweaveError):
    """Base for errors raised while working with document instances."""


class DocumentNotFoundError(DocumentError):
    """Requested document does not exist in its collection."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(f"Document not found in {collection!r}: {document_id}")
        self.collection = collection
        self.document_id = document_id


class DuplicateDocumentError(DocumentError):
    """A document with the same id already exists in the collection."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(f"Duplicate document in {collection!r}: {document_id}")
        self.collection = collection
        self.document_id = document_id


class UnknownAttributeError(DocumentError):
    """An attribute was assigned that the model does not declare."""

    def __init__(self, model_name: str, attribute: str) -> None:
        super().__init__(f"{model_name} has no field {attribute!r}")
        self.model_name = model_name
        self.attribute = attribute


class DocumentInvalidError(DocumentError):
    """A save that requires validation found errors."""

    def __init__(self, model_name: str, errors: Errors) -> None:
        messages = ", ".join(errors.full_messages())
        super().__init__(f"Validation of {model_name} failed: {messages}")
        self.model_name = model_name
        self.errors = errors


class StoreNotConfiguredError(DocumentError):
    """A model was used for persistence before a store was bound."""

    def __init__(self, model_name: str) -> None:
        super().__init__(f"No document store bound for {model_name}. Call use_store() first.")
        self.model_name = model_name


class UnencodableValueError(DocumentError):
    """A field value has no storage encoding."""

    def __init__(self, field_name: str, value: Any) -> None:
        super().__init__(
            f"Cannot encode value of type {type(value).__name__} for field {field_name!r}"
        )
        self.field_name = field_name
        self.value = value


class UnsafeSerializationError(DocumentError):
    """An unrecognised enum key reached the storage encoder."""

    def __init__(self, original_key: Any, field_name: str) -> None:
        super().__init__(f"invalid enum key for field {field_name!r}: {original_key!r}")
        self.original_key = original_key
        self.field_name = field_name
