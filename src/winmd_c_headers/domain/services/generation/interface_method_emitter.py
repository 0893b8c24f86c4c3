#!/usr/bin/env python3

"""Dispatch wrappers for COM interface methods.

Each interface gets one ``static inline`` wrapper per method, covering its
whole base chain. The wrapper casts the dispatch-table entry at the method's
slot to a function pointer of the exact signature and calls it:

    static inline HRESULT IFoo_Set(IFoo* this, INT32 value) {
        return ((HRESULT (WINAPI*)(IFoo*, INT32))this->v->tbl[1])(this, value); }

Slots are assigned base-first in declaration order. Methods whose names
were already used further up the chain get the smallest free numeric
suffix. Methods returning a value aggregate are called through a hidden
output pointer, which is how the native convention returns them.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from ....infrastructure.logging import get_logger
from ...errors import UnsupportedAggregateReturnSignature, UnsupportedEntityShape
from ...models.declarations import InterfaceDescriptor, MethodDescriptor
from ..parsing.type_name_resolver import VOID_NAME, TypeNameResolver

logger = get_logger(__name__)

InterfaceLookup = Callable[[str], InterfaceDescriptor]


@dataclass
class DispatchWrapper:
    """One emitted wrapper and the dispatch slot it calls."""

    interface_name: str
    method_name: str
    wrapper_name: str
    slot: int
    lines: list[str]


@dataclass
class _ChainState:
    """Accumulators shared by one walk over an interface chain."""

    next_slot: int = 0
    names: set[str] = field(default_factory=set)
    visited: set[str] = field(default_factory=set)


class InterfaceMethodEmitter:
    """Emits dispatch wrappers for an interface and all of its bases."""

    def __init__(
        self,
        resolver: TypeNameResolver,
        lookup: InterfaceLookup,
        return_width: int = 33,
        name_width: int = 61,
        generalize_aggregate_returns: bool = False,
    ) -> None:
        """Initialize emitter.

        Args:
            resolver: Type name resolver for signatures
            lookup: Finds a base interface by full name
            return_width: Column width of the return type
            name_width: Column width of the wrapper name
            generalize_aggregate_returns: Allow aggregate returns on methods
                with parameters instead of rejecting them
        """
        self.resolver = resolver
        self.lookup = lookup
        self.return_width = return_width
        self.name_width = name_width
        self.generalize_aggregate_returns = generalize_aggregate_returns

    def emit(self, interface: InterfaceDescriptor) -> list[DispatchWrapper]:
        """Emit the wrappers of one interface, base methods first.

        Slot counter and name set start fresh for every call.

        Raises:
            UnsupportedAggregateReturnSignature: Aggregate return with parameters
            UnsupportedEntityShape: If the base chain loops back on itself
        """
        state = _ChainState()
        wrappers: list[DispatchWrapper] = []
        self._emit_chain(interface.name, interface, state, wrappers)
        logger.debug(f"{interface.name}: {len(wrappers)} dispatch slots")
        return wrappers

    def emit_lines(self, interface: InterfaceDescriptor) -> list[str]:
        lines: list[str] = []
        for wrapper in self.emit(interface):
            lines.extend(wrapper.lines)
        return lines

    def _emit_chain(
        self,
        receiver: str,
        interface: InterfaceDescriptor,
        state: _ChainState,
        wrappers: list[DispatchWrapper],
    ) -> None:
        if interface.full_name in state.visited:
            raise UnsupportedEntityShape(interface.full_name, "base interface chain is cyclic")
        state.visited.add(interface.full_name)

        if interface.base is not None:
            self._emit_chain(receiver, self.lookup(interface.base), state, wrappers)

        for method in interface.methods:
            member_name = self._unique_name(receiver, method.name, state.names)
            wrapper_name = f"{receiver}_{member_name}"
            lines = self._render(receiver, wrapper_name, method, state.next_slot)
            wrappers.append(
                DispatchWrapper(
                    interface_name=interface.name,
                    method_name=method.name,
                    wrapper_name=wrapper_name,
                    slot=state.next_slot,
                    lines=lines,
                )
            )
            state.next_slot += 1

    @staticmethod
    def _unique_name(receiver: str, name: str, names: set[str]) -> str:
        """Return ``name`` or its smallest free numeric variant, and reserve it."""
        unique = name
        if unique in names:
            suffix = 1
            while f"{name}{suffix}" in names:
                suffix += 1
            unique = f"{name}{suffix}"
            logger.info(f"Renaming {receiver}_{name} to {receiver}_{unique}")
        names.add(unique)
        return unique

    def _render(
        self, receiver: str, wrapper_name: str, method: MethodDescriptor, slot: int
    ) -> list[str]:
        ret = self.resolver.resolve(method.return_type)
        param_types = [self.resolver.resolve_parameter(p.type, p.is_const) for p in method.parameters]
        param_names = [p.name for p in method.parameters]

        declared = ", ".join(f"{t} {n}" for t, n in zip(param_types, param_names))
        signature = (
            f"static inline {ret:<{self.return_width}} {wrapper_name:<{self.name_width}}"
            f"({receiver}* this{_joined(declared)}) {{"
        )

        if self.resolver.needs_aggregate_return(method.return_type):
            if method.parameters and not self.generalize_aggregate_returns:
                raise UnsupportedAggregateReturnSignature(
                    receiver, method.name, len(method.parameters)
                )
            cast_params = ", ".join([f"{receiver}*", f"{ret}*", *param_types])
            call_args = ", ".join(["this", "&_return", *param_names])
            body = (
                f" {ret} _return;"
                f" ((void (WINAPI*)({cast_params}))this->v->tbl[{slot}])({call_args});"
                f" return _return;"
            )
        else:
            cast_params = ", ".join([f"{receiver}*", *param_types])
            call_args = ", ".join(["this", *param_names])
            keyword = "" if ret == VOID_NAME else " return"
            body = f"{keyword} (({ret} (WINAPI*)({cast_params}))this->v->tbl[{slot}])({call_args});"

        lines = []
        if method.deprecation is not None:
            lines.append(f'__declspec(deprecated("{method.deprecation}"))')
        lines.append(f"{signature}{body} }}")
        return lines


def _joined(text: str) -> str:
    return f", {text}" if text else ""
