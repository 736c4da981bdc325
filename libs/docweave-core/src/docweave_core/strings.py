"""Inflection helpers for generated names and error messages."""

from __future__ import annotations

import re

_IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "datum": "data",
    "medium": "media",
    "criterion": "criteria",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
}

_UNCOUNTABLE = frozenset({"information", "equipment", "rice", "money", "series", "species"})


def _pluralize_word(word: str) -> str:
    lower_word = word.lower()

    if lower_word in _UNCOUNTABLE:
        return word
    if lower_word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[lower_word]

    if lower_word.endswith(("s", "x", "z", "ch", "sh")):
        # status -> statuses, box -> boxes
        return word + "es"
    if lower_word.endswith("y"):
        if len(word) > 1 and lower_word[-2] in "aeiou":
            return word + "s"
        return word[:-1] + "ies"
    if lower_word.endswith("fe"):
        return word[:-2] + "ves"
    if lower_word.endswith(("elf", "alf", "olf", "eaf", "oaf", "arf")):
        return word[:-1] + "ves"
    if lower_word.endswith(("hero", "potato", "tomato", "echo", "veto")):
        return word + "es"
    return word + "s"


def pluralize(name: str) -> str:
    """Pluralize the last segment of a snake_case name.

    Examples:
        >>> pluralize("status")
        'statuses'
        >>> pluralize("read_status")
        'read_statuses'
        >>> pluralize("quality_control")
        'quality_controls'
    """
    if not name:
        return name
    head, sep, last = name.rpartition("_")
    if not last:
        return name
    return f"{head}{sep}{_pluralize_word(last)}"


def underscore(name: str) -> str:
    """Convert a CamelCase class name to snake_case (``BookReview`` -> ``book_review``)."""
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.lower()


def humanize(name: str) -> str:
    """Turn an attribute name into a sentence prefix (``read_status`` -> ``Read status``)."""
    text = name.strip("_").replace("_", " ")
    return text[:1].upper() + text[1:]
