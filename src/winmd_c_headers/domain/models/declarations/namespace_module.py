#!/usr/bin/env python3

"""Namespace module: everything emitted into one header."""

from dataclasses import dataclass, field

from .constant_descriptor import ConstantDescriptor
from .delegate_descriptor import DelegateDescriptor
from .enum_descriptor import EnumDescriptor
from .interface_descriptor import InterfaceDescriptor
from .method_descriptor import MethodDescriptor
from .struct_descriptor import StructDescriptor


@dataclass
class NamespaceModule:
    """Classified entities of one namespace, keyed by name.

    A module is built fresh for every namespace pass and dropped once the
    header has been written.
    """

    namespace: str
    constants: dict[str, ConstantDescriptor] = field(default_factory=dict)
    delegates: dict[str, DelegateDescriptor] = field(default_factory=dict)
    enums: dict[str, EnumDescriptor] = field(default_factory=dict)
    structs: dict[str, StructDescriptor] = field(default_factory=dict)
    interfaces: dict[str, InterfaceDescriptor] = field(default_factory=dict)
    functions: dict[str, MethodDescriptor] = field(default_factory=dict)

    def entity_count(self) -> int:
        return (
            len(self.constants)
            + len(self.delegates)
            + len(self.enums)
            + len(self.structs)
            + len(self.interfaces)
            + len(self.functions)
        )
