"""Chainable, immutable query criteria bound to a document model."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from docweave_core.documents.encoding import encode_value
from docweave_core.documents.store import ID_FIELD, Condition, SortKey

if TYPE_CHECKING:
    from docweave_core.documents.document import Document

D = TypeVar("D", bound="Document")

_OPERATORS = frozenset({"eq", "ne", "in"})


class Criteria(Generic[D]):
    """A lazily evaluated query against one model's collection.

    Keyword criteria take the form ``field=value``, ``field__ne=value`` or
    ``field__in=[...]``. Values are evolved through the field's type, so an
    enum field accepts either labels or stored values.
    """

    def __init__(
        self,
        model: type[D],
        conditions: tuple[Condition, ...] = (),
        order: tuple[SortKey, ...] = (),
    ) -> None:
        self.model = model
        self.conditions = conditions
        self.order = order

    def _evolve(self, name: str, value: Any) -> Any:
        field = self.model.fields.get(name)
        evolved = field.type.evolve(value) if field is not None else value
        return encode_value(name, evolved)

    def where(self, **criteria: Any) -> Criteria[D]:
        conditions = list(self.conditions)
        for key, value in criteria.items():
            name, _, op = key.partition("__")
            op = op or "eq"
            if op not in _OPERATORS:
                msg = f"Unsupported query operator {op!r} in {key!r}"
                raise ValueError(msg)
            if op == "in":
                evolved: Any = [self._evolve(name, item) for item in value]
            else:
                evolved = self._evolve(name, value)
            conditions.append(Condition(field=name, op=op, value=evolved))  # type: ignore[arg-type]
        return Criteria(self.model, tuple(conditions), self.order)

    def order_by(self, *fields: str) -> Criteria[D]:
        """Sort by the given fields; a leading ``-`` sorts descending."""
        keys = [
            SortKey(field=name.lstrip("-"), descending=name.startswith("-")) for name in fields
        ]
        return Criteria(self.model, self.conditions, (*self.order, *keys))

    # -- Evaluation -----------------------------------------------------------

    def _fetch(self, limit: int | None = None) -> list[D]:
        store = self.model.store()
        rows = store.find(
            self.model.collection_name, self.conditions, order=self.order, limit=limit
        )
        return [self.model.instantiate(document_id, body) for document_id, body in rows]

    def to_list(self) -> list[D]:
        return self._fetch()

    def __iter__(self) -> Iterator[D]:
        return iter(self._fetch())

    def first(self) -> D | None:
        found = self._fetch(limit=1)
        return found[0] if found else None

    def count(self) -> int:
        return self.model.store().count(self.model.collection_name, self.conditions)

    def exists(self) -> bool:
        return self.count() > 0

    # -- Building and bulk writes ---------------------------------------------

    def scope_attributes(self) -> dict[str, Any]:
        """Field values implied by the equality criteria."""
        return {
            condition.field: condition.value
            for condition in self.conditions
            if condition.op == "eq" and condition.field != ID_FIELD
        }

    def build(self, **attributes: Any) -> D:
        """Instantiate a new, unsaved document that satisfies the criteria."""
        return self.model(**{**self.scope_attributes(), **attributes})

    def create(self, **attributes: Any) -> D:
        document = self.build(**attributes)
        document.save_or_raise()
        return document

    def set(self, **values: Any) -> int:
        """Write raw stored values into every matching document.

        Values bypass field coercion and validation; they are only encoded.
        """
        encoded = {name: encode_value(name, value) for name, value in values.items()}
        return self.model.store().update_fields(
            self.model.collection_name, self.conditions, encoded
        )

    def delete_all(self) -> int:
        return self.model.store().delete(self.model.collection_name, self.conditions)

    def __repr__(self) -> str:
        return f"Criteria({self.model.__name__}, conditions={list(self.conditions)!r})"
