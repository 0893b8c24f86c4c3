#!/usr/bin/env python3

"""Field definition model for metadata parsing."""

from dataclasses import dataclass, field

from .custom_attribute import CustomAttribute
from .type_reference import TypeReference


@dataclass(frozen=True)
class ConstantValue:
    """A literal attached to a field, tagged with its primitive element type."""

    element_type: str
    value: int | float


@dataclass
class FieldDefinition:
    """A field of a struct, union, enum or globals container."""

    name: str
    type: TypeReference
    constant: ConstantValue | None = None
    is_special_name: bool = False
    attributes: list[CustomAttribute] = field(default_factory=list)
