"""Explicit per-model registry of member names and generated members."""

from __future__ import annotations

import types
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from docweave_core.documents.document import Document

MemberKind = Literal["instance", "class"]


class MemberRegistry(BaseModel):
    """Names a model already answers to, split by where they live.

    Instances resolve class attributes too, so a candidate name is taken when
    it appears in either set.
    """

    model_config = ConfigDict(frozen=True)

    instance: frozenset[str] = frozenset()
    klass: frozenset[str] = frozenset()

    def resolves(self, name: str) -> bool:
        return name in self.instance or name in self.klass

    def with_member(self, name: str, kind: MemberKind) -> MemberRegistry:
        if kind == "class":
            return self.model_copy(update={"klass": self.klass | {name}})
        return self.model_copy(update={"instance": self.instance | {name}})

    @classmethod
    def seed(
        cls,
        model: type,
        *,
        reserved: Iterable[str] = (),
        reserved_class: Iterable[str] = (),
    ) -> MemberRegistry:
        """Build the starting registry from a base class's own public API."""
        instance: set[str] = set(reserved)
        klass: set[str] = set(reserved_class)
        for name in dir(model):
            if name.startswith("__") and name.endswith("__"):
                continue
            if member_kind(_static_lookup(model, name)) == "class":
                klass.add(name)
            else:
                instance.add(name)
        return cls(instance=frozenset(instance), klass=frozenset(klass))


def _static_lookup(model: type, name: str) -> Any:
    for base in model.__mro__:
        if name in base.__dict__:
            return base.__dict__[name]
    return None


def member_kind(value: Any) -> MemberKind:
    """Classify a raw class-body value as a class-level or instance-level member."""
    if isinstance(value, (classmethod, staticmethod)):
        return "class"
    return "instance"


class GeneratedMember(BaseModel):
    """A declaration-generated function and the level it is bound at."""

    model_config = ConfigDict(frozen=True)

    kind: MemberKind
    function: Callable[..., Any]


class GeneratedMembers:
    """Descriptor exposing a model's generated members, bypassing overrides.

    A method defined in the class body after the declaration that generated
    a member of the same name replaces it on the class; the generated
    implementation stays reachable as ``self.generated.<name>()``.
    """

    def __get__(self, instance: Document | None, owner: type[Document]) -> _BoundGenerated:
        return _BoundGenerated(owner, instance)


class _BoundGenerated:
    def __init__(self, model: type[Document], instance: Document | None) -> None:
        self._model = model
        self._instance = instance

    def __getattr__(self, name: str) -> Callable[..., Any]:
        member = self._model.generated_members().get(name)
        if member is None:
            msg = f"{self._model.__name__} has no generated member {name!r}"
            raise AttributeError(msg)
        if member.kind == "class":
            return types.MethodType(member.function, self._model)
        if self._instance is None:
            return member.function
        return types.MethodType(member.function, self._instance)

    def __dir__(self) -> list[str]:
        return sorted(self._model.generated_members())
