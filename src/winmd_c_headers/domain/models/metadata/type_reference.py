#!/usr/bin/env python3

"""Type reference model for metadata signatures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TypeKind(Enum):
    """Shapes a type reference can take in a signature."""

    VOID = "void"
    PRIMITIVE = "primitive"
    POINTER = "pointer"
    ARRAY = "array"
    NAMED = "named"


@dataclass(frozen=True)
class TypeReference:
    """A reference to a type as it appears in a field or method signature.

    Primitive references store the primitive kind in ``name`` (``Int32``,
    ``Single``...). Pointer and array references wrap an ``element``; arrays
    also carry their fixed ``length``. Named references identify a type
    definition by namespace and name, plus the enclosing type for nested
    definitions.
    """

    kind: TypeKind
    name: str = ""
    namespace: str = ""
    element: TypeReference | None = None
    length: int | None = None
    declaring_type: str | None = None
    is_value_type: bool = False

    @classmethod
    def void(cls) -> TypeReference:
        return cls(TypeKind.VOID, name="Void", namespace="System")

    @classmethod
    def primitive(cls, name: str) -> TypeReference:
        return cls(TypeKind.PRIMITIVE, name=name, namespace="System", is_value_type=True)

    @classmethod
    def pointer(cls, element: TypeReference) -> TypeReference:
        return cls(TypeKind.POINTER, element=element)

    @classmethod
    def array(cls, element: TypeReference, length: int) -> TypeReference:
        return cls(TypeKind.ARRAY, element=element, length=length)

    @classmethod
    def named(
        cls,
        namespace: str,
        name: str,
        is_value_type: bool = False,
        declaring_type: str | None = None,
    ) -> TypeReference:
        return cls(
            TypeKind.NAMED,
            name=name,
            namespace=namespace,
            declaring_type=declaring_type,
            is_value_type=is_value_type,
        )

    @property
    def full_name(self) -> str:
        """Full name in metadata notation (nested types use ``Outer/Inner``)."""
        if self.kind in (TypeKind.POINTER, TypeKind.ARRAY):
            assert self.element is not None
            suffix = "*" if self.kind is TypeKind.POINTER else "[]"
            return self.element.full_name + suffix
        if self.declaring_type:
            return f"{self.declaring_type}/{self.name}"
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    @property
    def is_void(self) -> bool:
        return self.kind is TypeKind.VOID

    @property
    def is_primitive(self) -> bool:
        return self.kind is TypeKind.PRIMITIVE

    @property
    def is_pointer(self) -> bool:
        return self.kind is TypeKind.POINTER

    @property
    def is_array(self) -> bool:
        return self.kind is TypeKind.ARRAY

    @property
    def is_named(self) -> bool:
        return self.kind is TypeKind.NAMED

    def innermost_element(self) -> TypeReference:
        """Strip every pointer and array layer."""
        ref = self
        while ref.element is not None:
            ref = ref.element
        return ref

    def __str__(self) -> str:
        return self.full_name
