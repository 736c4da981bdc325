"""Document base class — fields, dirty tracking, validation and persistence."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar, Self

from docweave_core.documents.criteria import Criteria
from docweave_core.documents.encoding import encode_attributes, encode_value, same_value
from docweave_core.documents.fields import Declaration, Field, FieldType
from docweave_core.documents.identifiers import CollectionName, DocumentId, new_document_id
from docweave_core.documents.members import (
    GeneratedMember,
    GeneratedMembers,
    MemberKind,
    MemberRegistry,
    member_kind,
)
from docweave_core.documents.store import ID_FIELD, Condition, DocumentStore
from docweave_core.documents.validation import Errors, Validator
from docweave_core.exceptions import (
    DefinitionError,
    DocumentError,
    DocumentInvalidError,
    DocumentNotFoundError,
    StoreNotConfiguredError,
    UnknownAttributeError,
)
from docweave_core.strings import pluralize, underscore

logger = logging.getLogger(__name__)

# Instance state and names the document layer forbids models to redefine.
RESERVED_NAMES = frozenset(
    {
        "id",
        "_id",
        "_attributes",
        "_before_type_cast",
        "_original",
        "_errors",
        "_new_record",
    }
)
RESERVED_CLASS_NAMES = frozenset({"mro"})


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


class Document:
    """Base class for persisted documents.

    Subclasses declare fields in their body; declarations are installed in
    body order when the class is created::

        class Book(Document):
            title = Field()
            format = Field(default="paperback")

    Every per-class registry (fields, validators, member names, generated
    members) is replaced rather than mutated, so a subclass starts from a
    snapshot of its parent and never leaks declarations back into it.
    """

    collection_name: ClassVar[CollectionName] = CollectionName("documents")
    fields: ClassVar[Mapping[str, Field]] = MappingProxyType({})
    generated = GeneratedMembers()

    _store: ClassVar[DocumentStore | None] = None
    _validators: ClassVar[tuple[tuple[str, Validator], ...]] = ()
    _members: ClassVar[MemberRegistry] = MemberRegistry()
    _generated: ClassVar[Mapping[str, GeneratedMember]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "collection_name" not in cls.__dict__:
            cls.collection_name = CollectionName(pluralize(underscore(cls.__name__)))
        # Mixins never pass through this hook, so their members are taken in here.
        for base in cls.__mro__[1:]:
            if base is object or issubclass(base, Document):
                continue
            for name, value in base.__dict__.items():
                if not _is_dunder(name):
                    cls.declare_member(name, member_kind(value))
        for name, value in list(cls.__dict__.items()):
            if _is_dunder(name):
                continue
            if isinstance(value, Declaration):
                value.contribute_to_class(cls, name)
            else:
                cls.declare_member(name, member_kind(value))

    # -- Declaration primitives ---------------------------------------------

    @classmethod
    def members(cls) -> MemberRegistry:
        """Names this model already answers to."""
        return cls._members

    @classmethod
    def declare_member(cls, name: str, kind: MemberKind) -> None:
        cls._members = cls._members.with_member(name, kind)

    @classmethod
    def add_field(cls, name: str, field: Field) -> None:
        """Install ``field`` under ``name``. Redeclaring an inherited field is allowed."""
        if name not in cls.fields and cls._members.resolves(name):
            msg = f"Field {name!r} on {cls.__name__} conflicts with an existing member"
            raise DefinitionError(msg)
        field.name = name
        cls.fields = MappingProxyType({**cls.fields, name: field})
        setattr(cls, name, field)
        cls.declare_member(name, "instance")

    @classmethod
    def field(cls, name: str, type: FieldType | None = None, *, default: Any = None) -> Field:  # noqa: A002
        """Declare a field after the class body has run."""
        declared = Field(type, default=default)
        cls.add_field(name, declared)
        return declared

    @classmethod
    def validates(cls, name: str, *validators: Validator) -> None:
        cls._validators = (*cls._validators, *((name, validator) for validator in validators))

    @classmethod
    def declare_generated(
        cls, name: str, function: Callable[..., Any], *, kind: MemberKind = "instance"
    ) -> None:
        """Register a generated member and install it on the class.

        A same-named member defined later in the class body is an override:
        it stays on the class and the generated function is only reachable
        through ``generated``.
        """
        if cls._members.resolves(name):
            msg = f"{cls.__name__} already defines {name!r}"
            raise DefinitionError(msg)
        cls._generated = MappingProxyType(
            {**cls._generated, name: GeneratedMember(kind=kind, function=function)}
        )
        if name not in cls.__dict__:
            setattr(cls, name, classmethod(function) if kind == "class" else function)
        cls.declare_member(name, kind)

    @classmethod
    def generated_members(cls) -> Mapping[str, GeneratedMember]:
        return cls._generated

    @classmethod
    def scope(cls, name: str, builder: Callable[..., Criteria[Any]]) -> None:
        """Register a named query; ``builder`` receives the model class."""
        cls.declare_generated(name, builder, kind="class")

    # -- Store binding and class-level queries --------------------------------

    @classmethod
    def use_store(cls, store: DocumentStore | None) -> None:
        cls._store = store

    @classmethod
    def store(cls) -> DocumentStore:
        if cls._store is None:
            raise StoreNotConfiguredError(cls.__name__)
        return cls._store

    @classmethod
    def where(cls, **criteria: Any) -> Criteria[Self]:
        return Criteria(cls).where(**criteria)

    @classmethod
    def all(cls) -> Criteria[Self]:
        return Criteria(cls)

    @classmethod
    def order_by(cls, *fields: str) -> Criteria[Self]:
        return Criteria(cls).order_by(*fields)

    @classmethod
    def count(cls) -> int:
        return Criteria(cls).count()

    @classmethod
    def delete_all(cls) -> int:
        return Criteria(cls).delete_all()

    @classmethod
    def create(cls, **attributes: Any) -> Self:
        document = cls(**attributes)
        document.save_or_raise()
        return document

    @classmethod
    def find(cls, document_id: DocumentId | str) -> Self:
        body = cls.store().get(cls.collection_name, DocumentId(str(document_id)))
        if body is None:
            raise DocumentNotFoundError(cls.collection_name, str(document_id))
        return cls.instantiate(DocumentId(str(document_id)), body)

    @classmethod
    def instantiate(cls, document_id: DocumentId, body: dict[str, Any]) -> Self:
        """Rebuild a persisted document from its stored body."""
        document = cls.__new__(cls)
        document._reset(document_id, dict(body), new_record=False)
        return document

    # -- Instance state -------------------------------------------------------

    def __init__(self, id: DocumentId | str | None = None, **attributes: Any) -> None:  # noqa: A002
        self._reset(DocumentId(str(id)) if id is not None else new_document_id(), {}, new_record=True)
        for name, field in self.fields.items():
            if name not in attributes and field.default is not None:
                self.write_attribute(name, field.default)
        self.assign_attributes(**attributes)

    def _reset(self, document_id: DocumentId, body: dict[str, Any], *, new_record: bool) -> None:
        self._id = document_id
        self._attributes: dict[str, Any] = body
        self._before_type_cast: dict[str, Any] = {}
        self._original: dict[str, Any] = {} if new_record else dict(body)
        self._errors = Errors()
        self._new_record = new_record

    @property
    def id(self) -> DocumentId:
        return self._id

    @property
    def is_new_record(self) -> bool:
        return self._new_record

    @property
    def is_persisted(self) -> bool:
        return not self._new_record

    @property
    def attributes(self) -> Mapping[str, Any]:
        """A read-only snapshot of the stored values."""
        return MappingProxyType(dict(self._attributes))

    def __getitem__(self, name: str) -> Any:
        """The stored value of ``name``, without read-side conversion."""
        return self._attributes.get(name)

    def write_attribute(self, name: str, value: Any) -> None:
        field = self.fields.get(name)
        if field is None:
            raise UnknownAttributeError(type(self).__name__, name)
        self._before_type_cast[name] = value
        self._attributes[name] = field.type.to_storage(value)

    def assign_attributes(self, **attributes: Any) -> None:
        for name, value in attributes.items():
            if name not in self.fields:
                raise UnknownAttributeError(type(self).__name__, name)
            setattr(self, name, value)

    def read_attribute_before_type_cast(self, name: str) -> Any:
        """The value as last assigned, before coercion; the stored value otherwise."""
        if name in self._before_type_cast:
            return self._before_type_cast[name]
        return self._attributes.get(name)

    def _read(self, name: str, stored: Any) -> Any:
        field = self.fields.get(name)
        return field.type.from_storage(stored) if field is not None else stored

    # -- Dirty tracking -------------------------------------------------------

    def _changed_names(self) -> list[str]:
        names = dict.fromkeys([*self._original, *self._attributes])
        return [
            name
            for name in names
            if not same_value(self._original.get(name), self._attributes.get(name))
        ]

    @property
    def is_changed(self) -> bool:
        return bool(self._changed_names())

    @property
    def changed_attributes(self) -> dict[str, Any]:
        """Stored values, before the pending changes, of every changed attribute."""
        return {name: self._original.get(name) for name in self._changed_names()}

    @property
    def changes(self) -> dict[str, tuple[Any, Any]]:
        """``(old, new)`` read values of every changed attribute."""
        return {
            name: (self._read(name, self._original.get(name)), self._read(name, self._attributes.get(name)))
            for name in self._changed_names()
        }

    def attribute_changed(self, name: str) -> bool:
        return not same_value(self._original.get(name), self._attributes.get(name))

    def attribute_change(self, name: str) -> tuple[Any, Any] | None:
        return self.changes.get(name)

    # -- Validation -----------------------------------------------------------

    @property
    def errors(self) -> Errors:
        return self._errors

    def is_valid(self) -> bool:
        self._errors.clear()
        for name, validator in self._validators:
            validator.validate(self, name)
        return not self._errors

    # -- Persistence ----------------------------------------------------------

    def _id_criteria(self) -> list[Condition]:
        return [Condition(field=ID_FIELD, value=str(self._id))]

    def _mark_clean(self) -> None:
        self._original = dict(self._attributes)
        self._before_type_cast.clear()
        self._new_record = False

    def save(self, *, validate: bool = True) -> bool:
        """Persist the document. Returns False when validation fails.

        With ``validate=False`` the body is still encoded, so values that
        have no storage form raise instead of being written.
        """
        if validate and not self.is_valid():
            logger.debug("Not saving %s %s: %s", type(self).__name__, self._id, self._errors)
            return False
        body = encode_attributes(self._attributes)
        store = self.store()
        if self._new_record:
            store.insert(self.collection_name, self._id, body)
        elif not store.replace(self.collection_name, self._id, body):
            raise DocumentNotFoundError(self.collection_name, self._id)
        self._mark_clean()
        return True

    def save_or_raise(self, *, validate: bool = True) -> None:
        if not self.save(validate=validate):
            raise DocumentInvalidError(type(self).__name__, self._errors)

    def update_and_save(self, **attributes: Any) -> None:
        """Assign ``attributes`` and save, raising DocumentInvalidError when invalid."""
        self.assign_attributes(**attributes)
        self.save_or_raise()

    def set(self, **attributes: Any) -> None:
        """Assign and write only ``attributes`` to the stored document, without validation."""
        if self._new_record:
            msg = f"Cannot set attributes on unsaved {type(self).__name__}; save it first"
            raise DocumentError(msg)
        self.assign_attributes(**attributes)
        values = {name: encode_value(name, self._attributes[name]) for name in attributes}
        updated = self.store().update_fields(self.collection_name, self._id_criteria(), values)
        if not updated:
            raise DocumentNotFoundError(self.collection_name, self._id)
        for name in attributes:
            self._original[name] = self._attributes[name]
            self._before_type_cast.pop(name, None)

    def reload(self) -> Self:
        body = self.store().get(self.collection_name, self._id)
        if body is None:
            raise DocumentNotFoundError(self.collection_name, self._id)
        self._reset(self._id, body, new_record=False)
        return self

    def delete(self) -> None:
        if not self.store().delete(self.collection_name, self._id_criteria()):
            raise DocumentNotFoundError(self.collection_name, self._id)
        self._new_record = True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return type(self) is type(other) and self._id == other._id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r}, {dict(self._attributes)!r})"


Document._members = MemberRegistry.seed(
    Document, reserved=RESERVED_NAMES, reserved_class=RESERVED_CLASS_NAMES
)
