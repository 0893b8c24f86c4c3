#!/usr/bin/env python3

"""Type definition model for metadata parsing."""

from __future__ import annotations

from dataclasses import dataclass, field

from .custom_attribute import CustomAttribute
from .field_definition import FieldDefinition
from .metadata_constants import (
    ENUM_BASE_TYPE,
    MULTICAST_DELEGATE_BASE_TYPE,
    VALUE_TYPE_BASE_TYPE,
)
from .method_definition import MethodDefinition
from .type_reference import TypeReference


@dataclass
class TypeDefinition:
    """A type definition as stored in the metadata set.

    The entity kind is not stored directly; it follows from the interface
    flag and the base type, the same way the runtime decides it.
    """

    namespace: str
    name: str
    is_interface: bool = False
    base_type: str | None = None
    declaring_type: str | None = None
    explicit_layout: bool = False
    interfaces: list[TypeReference] = field(default_factory=list)
    fields: list[FieldDefinition] = field(default_factory=list)
    methods: list[MethodDefinition] = field(default_factory=list)
    attributes: list[CustomAttribute] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        if self.declaring_type:
            return f"{self.declaring_type}/{self.name}"
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    @property
    def is_nested(self) -> bool:
        return self.declaring_type is not None

    @property
    def is_class(self) -> bool:
        return not self.is_interface

    @property
    def is_enum(self) -> bool:
        return self.base_type == ENUM_BASE_TYPE

    @property
    def is_value_type(self) -> bool:
        return self.base_type in (VALUE_TYPE_BASE_TYPE, ENUM_BASE_TYPE)

    @property
    def is_delegate(self) -> bool:
        return self.base_type == MULTICAST_DELEGATE_BASE_TYPE

    def find_method(self, name: str) -> MethodDefinition | None:
        for method in self.methods:
            if method.name == name:
                return method
        return None
