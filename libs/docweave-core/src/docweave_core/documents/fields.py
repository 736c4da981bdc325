"""Field declarations and the storage type adapters they delegate to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, overload

if TYPE_CHECKING:
    from docweave_core.documents.document import Document


class FieldType(Protocol):
    """Translates values between their read form and their stored form."""

    def to_storage(self, value: Any) -> Any:
        """Convert an assigned value into the value kept in the document body."""
        ...

    def from_storage(self, value: Any) -> Any:
        """Convert a stored value into what the attribute getter returns."""
        ...

    def evolve(self, value: Any) -> Any:
        """Convert a query criterion into a comparable stored value."""
        ...


class Passthrough:
    """Field type for values stored exactly as assigned."""

    def to_storage(self, value: Any) -> Any:
        return value

    def from_storage(self, value: Any) -> Any:
        return value

    def evolve(self, value: Any) -> Any:
        return value


class Declaration:
    """An object placed in a model body that installs itself on the model.

    The document base class calls ``contribute_to_class`` for every
    declaration, in class-body order, once the class object exists.
    """

    def contribute_to_class(self, model: type[Document], name: str) -> None:
        raise NotImplementedError


class Field(Declaration):
    """A typed attribute of a document, kept in the document body."""

    def __init__(self, type: FieldType | None = None, *, default: Any = None) -> None:  # noqa: A002
        self.type: FieldType = type if type is not None else Passthrough()
        self.default = default
        self.name = ""

    def contribute_to_class(self, model: type[Document], name: str) -> None:
        model.add_field(name, self)

    @overload
    def __get__(self, instance: None, owner: type[Document]) -> Field: ...

    @overload
    def __get__(self, instance: Document, owner: type[Document]) -> Any: ...

    def __get__(self, instance: Document | None, owner: type[Document]) -> Any:
        if instance is None:
            return self
        return self.type.from_storage(instance[self.name])

    def __set__(self, instance: Document, value: Any) -> None:
        instance.write_attribute(self.name, value)

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, type={type(self.type).__name__})"
