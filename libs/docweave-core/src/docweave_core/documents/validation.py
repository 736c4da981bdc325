"""Validation rules and the per-document error collection."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, Protocol

from docweave_core.documents.encoding import same_value
from docweave_core.strings import humanize

if TYPE_CHECKING:
    from docweave_core.documents.document import Document


class Errors:
    """Validation messages keyed by attribute name."""

    def __init__(self) -> None:
        self._messages: dict[str, list[str]] = {}

    def add(self, attribute: str, message: str) -> None:
        self._messages.setdefault(attribute, []).append(message)

    def clear(self) -> None:
        self._messages.clear()

    def __getitem__(self, attribute: str) -> list[str]:
        return list(self._messages.get(attribute, []))

    def __contains__(self, attribute: object) -> bool:
        return attribute in self._messages

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for attribute, messages in self._messages.items():
            for message in messages:
                yield attribute, message

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __bool__(self) -> bool:
        return bool(self._messages)

    def full_messages(self) -> list[str]:
        """Messages prefixed with the humanized attribute (``"Status is invalid"``)."""
        return [f"{humanize(attribute)} {message}" for attribute, message in self]

    def to_dict(self) -> dict[str, list[str]]:
        return {attribute: list(messages) for attribute, messages in self._messages.items()}

    def __repr__(self) -> str:
        return f"Errors({self.to_dict()!r})"


class Validator(Protocol):
    """A rule run against one attribute of a document."""

    def validate(self, document: Document, attribute: str) -> None: ...


def is_blank(value: Any) -> bool:
    """True for None and for strings, lists and dicts with no content."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return not value
    return False


class InclusionValidator:
    """The attribute's read value must be one of ``choices``."""

    def __init__(
        self,
        choices: Iterable[Any],
        *,
        allow_none: bool = False,
        message: str = "is not included in the list",
    ) -> None:
        self.choices = tuple(choices)
        self.allow_none = allow_none
        self.message = message

    def validate(self, document: Document, attribute: str) -> None:
        value = getattr(document, attribute)
        if value is None and self.allow_none:
            return
        if not any(same_value(value, choice) for choice in self.choices):
            document.errors.add(attribute, self.message)


class PresenceValidator:
    """The attribute must not be blank."""

    def __init__(self, *, message: str = "can't be blank") -> None:
        self.message = message

    def validate(self, document: Document, attribute: str) -> None:
        if is_blank(getattr(document, attribute)):
            document.errors.add(attribute, self.message)


class UniquenessValidator:
    """No other document in the collection may store the same value.

    Skipped when an earlier rule already rejected the attribute, since an
    unrecognised value cannot be used as a query criterion.
    """

    def __init__(self, *, message: str = "has already been taken") -> None:
        self.message = message

    def validate(self, document: Document, attribute: str) -> None:
        if attribute in document.errors:
            return
        criteria = type(document).where(**{attribute: document[attribute]})
        if document.is_persisted:
            criteria = criteria.where(id__ne=document.id)
        if criteria.exists():
            document.errors.add(attribute, self.message)
