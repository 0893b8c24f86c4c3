#!/usr/bin/env python3

"""Custom attribute model for metadata entities."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CustomAttribute:
    """An attribute instance attached to a type, field, method or parameter."""

    type_name: str
    arguments: tuple[Any, ...] = field(default_factory=tuple)


def find_attribute(attributes: list[CustomAttribute], type_name: str) -> CustomAttribute | None:
    """Return the first attribute of the given type, or None."""
    for attribute in attributes:
        if attribute.type_name == type_name:
            return attribute
    return None


def has_attribute(attributes: list[CustomAttribute], type_name: str) -> bool:
    return find_attribute(attributes, type_name) is not None
