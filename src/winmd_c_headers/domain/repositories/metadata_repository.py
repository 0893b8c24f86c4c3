#!/usr/bin/env python3

"""Read-only query interface over the metadata type graph."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from ...infrastructure.logging import get_logger
from ..models.metadata import TypeDefinition, TypeReference

logger = get_logger(__name__)


class MetadataRepository(ABC):
    """Query interface the classifier and resolvers depend on.

    Implementations hold the metadata immutably; every method is a pure
    lookup.
    """

    @abstractmethod
    def iter_types(self, namespace: str) -> Iterator[TypeDefinition]:
        """Yield the top-level type definitions of a namespace in source order."""

    @abstractmethod
    def find_type(self, full_name: str) -> TypeDefinition | None:
        """Look up a definition by full name (``Ns.Name`` or ``Ns.Outer/Inner``).

        Returns None for types that live outside the metadata set, such as
        ``System.Guid``.
        """

    @abstractmethod
    def namespaces(self) -> list[str]:
        """Return the sorted list of namespaces present."""

    def resolve(self, type_ref: TypeReference) -> TypeDefinition | None:
        """Resolve a reference to its definition.

        Pointer and array references resolve to their innermost element's
        definition. Void and primitive references have no definition.
        """
        element = type_ref.innermost_element()
        if not element.is_named:
            return None
        return self.find_type(element.full_name)


class InMemoryMetadataRepository(MetadataRepository):
    """Metadata repository over an in-memory list of definitions."""

    def __init__(self, types: Iterable[TypeDefinition]) -> None:
        self._types: list[TypeDefinition] = list(types)
        self._by_full_name: dict[str, TypeDefinition] = {}
        for type_def in self._types:
            if type_def.full_name in self._by_full_name:
                logger.warning(f"Duplicate type definition ignored: {type_def.full_name}")
                continue
            self._by_full_name[type_def.full_name] = type_def
        logger.debug(f"Indexed {len(self._by_full_name)} type definitions")

    def iter_types(self, namespace: str) -> Iterator[TypeDefinition]:
        for type_def in self._types:
            if type_def.namespace == namespace and not type_def.is_nested:
                yield type_def

    def find_type(self, full_name: str) -> TypeDefinition | None:
        return self._by_full_name.get(full_name)

    def namespaces(self) -> list[str]:
        return sorted({t.namespace for t in self._types if not t.is_nested})

    def __len__(self) -> int:
        return len(self._types)
