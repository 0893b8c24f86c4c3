#!/usr/bin/env python3

"""Mapping of metadata type references to C declaration names.

Rules are applied in a fixed order:

1. pointers resolve to the element's name followed by ``*``
2. ``void``
3. ``System.Guid`` becomes ``GUID``
4. ``PWSTR`` becomes ``WCHAR*``
5. primitives map to fixed-width aliases (``INT32``, ``FLOAT``...)
6. enums with a non-default underlying type are referenced as ``enum NAME``
7. interfaces are always referenced through a pointer (``NAME*``)
8. everything else uses its own name
"""

from ....infrastructure.logging import get_logger
from ...errors import UnsupportedPrimitive
from ...models.metadata import TypeReference
from ...models.metadata.metadata_constants import (
    GUID_TYPE,
    PRIMITIVE_ALIASES,
    PRIMITIVE_INT_BITS,
    SCALAR_HANDLE_TYPES,
    WIDE_STRING_TYPE_NAME,
)
from ...models.namespace_profile import ENUM_TAG_TYPES
from ...repositories import MetadataRepository

logger = get_logger(__name__)

VOID_NAME = "void"
GUID_NAME = "GUID"
WIDE_STRING_NAME = "WCHAR*"


class TypeNameResolver:
    """Resolves type references to the names used in the header.

    Results are cached per reference; the resolver is deterministic, so the
    cache never needs invalidation within a pass.

    Attributes:
        repository: Metadata used to tell interfaces and enums apart
        enum_tag_types: Enum names referenced with an explicit ``enum`` tag
    """

    def __init__(
        self,
        repository: MetadataRepository,
        enum_tag_types: frozenset[str] = ENUM_TAG_TYPES,
    ) -> None:
        self.repository = repository
        self.enum_tag_types = enum_tag_types
        self._cache: dict[TypeReference, str] = {}

    def resolve(self, type_ref: TypeReference) -> str:
        """Resolve a type reference to its declaration name.

        Args:
            type_ref: Reference from a field, parameter or return type

        Returns:
            Non-empty C type name

        Raises:
            UnsupportedPrimitive: For primitives outside the fixed-width set
        """
        cached = self._cache.get(type_ref)
        if cached is not None:
            return cached

        name = self._resolve_uncached(type_ref)
        self._cache[type_ref] = name
        return name

    def _resolve_uncached(self, type_ref: TypeReference) -> str:
        if type_ref.is_pointer:
            assert type_ref.element is not None
            return self.resolve(type_ref.element) + "*"

        if type_ref.is_array:
            # The extent belongs to the declarator, not the type name
            assert type_ref.element is not None
            return self.resolve(type_ref.element)

        if type_ref.is_void:
            return VOID_NAME

        if type_ref.full_name == GUID_TYPE:
            return GUID_NAME

        if type_ref.name == WIDE_STRING_TYPE_NAME:
            return WIDE_STRING_NAME

        if type_ref.is_primitive:
            alias = PRIMITIVE_ALIASES.get(type_ref.name)
            if alias is None:
                raise UnsupportedPrimitive(type_ref.name)
            return alias

        if type_ref.name in self.enum_tag_types:
            return f"enum {type_ref.name}"

        definition = self.repository.resolve(type_ref)
        if definition is None:
            logger.debug(f"No definition for {type_ref.full_name}, using its name verbatim")
        elif definition.is_interface:
            return f"{type_ref.name}*"

        return type_ref.name

    def resolve_parameter(self, type_ref: TypeReference, is_const: bool) -> str:
        """Resolve a parameter type, adding the ``const`` qualifier when marked."""
        name = self.resolve(type_ref)
        return f"const {name}" if is_const else name

    def is_enum(self, type_ref: TypeReference) -> bool:
        if not type_ref.is_named:
            return False
        definition = self.repository.resolve(type_ref)
        return definition is not None and definition.is_enum

    def needs_aggregate_return(self, return_type: TypeReference) -> bool:
        """Check whether a return type is a value aggregate.

        Such returns go through a hidden output pointer in the native calling
        convention. Void, primitives, pointers, enums and the scalar handle
        types (``HRESULT``, ``BOOL``, ``HWND``...) are returned directly.
        """
        if return_type.is_void or return_type.is_primitive or return_type.is_pointer:
            return False
        if not return_type.is_value_type:
            return False
        if self.resolve(return_type) in SCALAR_HANDLE_TYPES:
            return False
        return not self.is_enum(return_type)


def integer_bit_width(type_ref: TypeReference) -> int | None:
    """Bit width of a primitive integer reference, None for any other type."""
    if not type_ref.is_primitive:
        return None
    return PRIMITIVE_INT_BITS.get(type_ref.name)
