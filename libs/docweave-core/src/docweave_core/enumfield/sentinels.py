"""Wrappers that carry unrecognised enum data instead of raising."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from docweave_core.exceptions import UnsafeSerializationError


class InvalidKey(BaseModel):
    """A value assigned to an enum field that is neither a label nor a stored value.

    The getter hands ``original_key`` back so a form can redisplay what was
    typed; validation rejects it. It refuses to be encoded for storage.
    """

    model_config = ConfigDict(frozen=True)

    original_key: Any

    def __init__(self, original_key: Any) -> None:
        super().__init__(original_key=original_key)

    def __storage_encode__(self, field_name: str) -> Any:
        raise UnsafeSerializationError(self.original_key, field_name)

    def __str__(self) -> str:
        return str(self.original_key)


class InvalidValue(BaseModel):
    """A stored value read back from the database that maps to no label."""

    model_config = ConfigDict(frozen=True)

    # The value exactly as it was loaded.
    database_value: Any

    def __init__(self, database_value: Any) -> None:
        super().__init__(database_value=database_value)

    def __storage_encode__(self, field_name: str) -> Any:
        return self.database_value

    def __str__(self) -> str:
        return str(self.database_value)
