"""Typed identifiers — NewType wrappers over str to prevent stringly-typed bugs."""

import uuid
from typing import NewType

DocumentId = NewType("DocumentId", str)
CollectionName = NewType("CollectionName", str)


def new_document_id() -> DocumentId:
    """Generate a fresh, globally unique document id."""
    return DocumentId(uuid.uuid4().hex)
