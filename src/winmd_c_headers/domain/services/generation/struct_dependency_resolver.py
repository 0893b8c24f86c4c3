#!/usr/bin/env python3

"""Definition ordering for structs and unions.

C requires a by-value field's type to be complete before the enclosing
aggregate is declared. Structs are ordered depth-first: candidates are
taken by name, and every aggregate referenced from a field is emitted
before the aggregate that references it.
"""

from ....infrastructure.logging import get_logger, log_timing
from ...errors import UnexpectedAggregateArray
from ...models.declarations import FieldDescriptor, StructDescriptor

logger = get_logger(__name__)


class StructDependencyResolver:
    """Orders the structs of a namespace module for emission.

    Pointer fields count as references too, so a struct pointing at another
    struct of the module is emitted after it. A struct is removed from the
    remaining set before its fields are visited, which keeps reference
    cycles from recursing forever.
    """

    def __init__(self, structs: dict[str, StructDescriptor]) -> None:
        """Initialize resolver.

        Args:
            structs: Module structs keyed by name
        """
        self.structs = structs

    @log_timing
    def resolve_order(self) -> list[StructDescriptor]:
        """Compute the emission order.

        Returns:
            Every struct exactly once, dependencies first

        Raises:
            UnexpectedAggregateArray: If an array field has a non-primitive element
        """
        remaining = {name: self.structs[name] for name in sorted(self.structs)}
        order: list[StructDescriptor] = []

        while remaining:
            first = next(iter(remaining))
            self._visit(first, remaining, order)

        logger.debug(f"Struct order: {[s.name for s in order]}")
        return order

    def _visit(
        self,
        name: str,
        remaining: dict[str, StructDescriptor],
        order: list[StructDescriptor],
    ) -> None:
        struct = remaining.pop(name)
        self._visit_fields(struct, struct.fields, remaining, order)
        order.append(struct)

    def _visit_fields(
        self,
        owner: StructDescriptor,
        fields: list[FieldDescriptor],
        remaining: dict[str, StructDescriptor],
        order: list[StructDescriptor],
    ) -> None:
        for field in fields:
            if field.is_array:
                if not field.type.is_primitive:
                    raise UnexpectedAggregateArray(owner.name, field.name, field.type.full_name)
                continue

            if field.nested is not None:
                self._visit_fields(owner, field.nested.fields, remaining, order)
                continue

            target = field.type.innermost_element()
            if target.is_named and target.name in remaining:
                logger.debug(f"{owner.name}.{field.name} requires {target.name} first")
                self._visit(target.name, remaining, order)
