"""Public ways to declare enum fields on a document model."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from docweave_core.documents.fields import Declaration
from docweave_core.enumfield.mapping import MappingTable
from docweave_core.enumfield.synthesizer import EnumOptions, synthesize
from docweave_core.exceptions import InvalidDefinitionError

if TYPE_CHECKING:
    from docweave_core.documents.document import Document


class EnumField(Declaration):
    """Declare an enum field in a model body.

    Example::

        class Conversation(Document):
            status = EnumField(["active", "archived"])
            priority = EnumField({"low": 0, "high": 1}, suffix=True, default="low")

            def set_archived_and_save(self) -> None:
                self.generated.set_archived_and_save()
                notify_archived(self)

        conversation.set_active_and_save()
        conversation.is_active()          # True
        conversation.status               # "active"
        conversation["status"]            # "active" (the stored value)
        Conversation.archived()           # Criteria on status == "archived"
        Conversation.PRIORITIES["high"]   # 1

    Methods defined after the declaration override the generated ones and
    reach them through ``self.generated``.
    """

    def __init__(
        self,
        definition: Any,
        *,
        prefix: bool | str | None = None,
        suffix: bool | str | None = None,
        default: str | None = None,
    ) -> None:
        self.definition = definition
        self.options = EnumOptions(prefix=prefix, suffix=suffix, default=default)
        self.table: MappingTable | None = None

    def contribute_to_class(self, model: type[Document], name: str) -> None:
        self.table = synthesize(model, name, self.definition, self.options)


def enum(
    model: type[Document],
    /,
    *,
    prefix: bool | str | None = None,
    suffix: bool | str | None = None,
    default: str | None = None,
    **definitions: Any,
) -> dict[str, MappingTable]:
    """Declare one or more enum fields on an existing model.

    Each keyword names a field and gives its labels (a list) or its
    ``label -> stored value`` mapping. ``prefix``, ``suffix`` and ``default``
    apply to every field of the call::

        enum(Part, quality_control={"pending": None, "passed": True, "failed": False}, prefix="qc")
        Part.qc_pending().first()

    Fields are declared in order; a failure leaves the earlier ones in place.

    ``prefix``, ``suffix`` and ``default`` are options here, so fields with
    those names must be declared with EnumField in the class body.
    """
    for option, value in (("prefix", prefix), ("suffix", suffix), ("default", default)):
        if not isinstance(value, (bool, str, type(None))) or (option == "default" and isinstance(value, bool)):
            msg = (
                f"enum() option {option!r} got {value!r}; to declare a field named {option!r}, "
                f"use {option} = EnumField(...) in the model body"
            )
            raise InvalidDefinitionError(msg)
    if not definitions:
        msg = "enum() needs at least one field definition"
        raise InvalidDefinitionError(msg)
    options = EnumOptions(prefix=prefix, suffix=suffix, default=default)
    return {
        name: synthesize(model, name, definition, options)
        for name, definition in definitions.items()
    }
