#!/usr/bin/env python3

"""Struct, union and field descriptor models."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..metadata import TypeReference


@dataclass(frozen=True)
class BitfieldInfo:
    """A named bit group carved out of a backing integer field."""

    name: str
    offset: int
    length: int


@dataclass
class FieldDescriptor:
    """A field of a struct or union.

    Exactly one of the shapes applies: a plain field, a fixed-size array
    (``array_length`` set, ``type`` is the element type), a bitfield backing
    field (``bitfields`` non-empty) or an anonymous nested aggregate
    (``nested`` set).
    """

    name: str
    type: TypeReference
    array_length: int | None = None
    bitfields: list[BitfieldInfo] = field(default_factory=list)
    nested: StructDescriptor | None = None

    @property
    def is_array(self) -> bool:
        return self.array_length is not None

    @property
    def is_nested(self) -> bool:
        return self.nested is not None


@dataclass
class StructDescriptor:
    """A value aggregate; field order is layout order."""

    name: str
    full_name: str
    fields: list[FieldDescriptor]
    is_union: bool = False

    @property
    def keyword(self) -> str:
        return "union" if self.is_union else "struct"
