#!/usr/bin/env python3

"""Assembly of a complete C header from a namespace module.

Sections are written in a fixed order:

1. preamble (includes, linkage pragma, forward aliases)
2. opaque interface stubs
3. constants
4. function-pointer typedefs
5. enums
6. structs and unions, dependencies first
7. interface method wrappers
8. interface GUIDs
9. function prototypes

Apart from the struct section every section is ordered by name, so the
output only depends on the metadata and never on iteration order.
"""

from typing import Any

from ....infrastructure.logging import get_logger, log_timing
from ...errors import MissingMetadataError
from ...models.declarations import (
    ConstantKind,
    FieldDescriptor,
    NamespaceModule,
    StructDescriptor,
)
from ...models.namespace_profile import NamespaceProfile
from ..parsing.type_name_resolver import TypeNameResolver
from .interface_method_emitter import InterfaceLookup, InterfaceMethodEmitter
from .struct_dependency_resolver import StructDependencyResolver
from .value_formatter import format_constant, format_enum_value, format_guid_define

logger = get_logger(__name__)

IID_PREFIX = "IID_"


def _longest(values) -> int:
    return max((len(value) for value in values), default=0)


class DeclarationEmitter:
    """Renders one namespace module into header text."""

    def __init__(
        self,
        resolver: TypeNameResolver,
        lookup: InterfaceLookup,
        settings: dict[str, Any],
    ) -> None:
        """Initialize emitter.

        Args:
            resolver: Type name resolver shared by all sections
            lookup: Base interface lookup for method chains
            settings: Generation settings (see ``get_generation_config``)
        """
        self.resolver = resolver
        self.settings = settings
        self.indent_width: int = settings["INDENT_WIDTH"]
        self.method_emitter = InterfaceMethodEmitter(
            resolver,
            lookup,
            return_width=settings["RETURN_TYPE_WIDTH"],
            name_width=settings["METHOD_NAME_WIDTH"],
            generalize_aggregate_returns=settings["GENERALIZE_AGGREGATE_RETURNS"],
        )

    @log_timing
    def emit(self, module: NamespaceModule, profile: NamespaceProfile) -> str:
        """Render the complete header.

        Args:
            module: Classified entities of the namespace
            profile: Static template for the preamble

        Returns:
            Header text, newline terminated
        """
        lines: list[str] = []
        lines.extend(self.emit_preamble(profile))
        lines.extend(self.emit_interface_stubs(module))
        lines.extend(self.emit_constants(module))
        lines.extend(self.emit_typedefs(module))
        lines.extend(self.emit_enums(module))
        lines.extend(self.emit_structs(module))
        lines.extend(self.emit_methods(module))
        lines.extend(self.emit_guids(module))
        lines.extend(self.emit_functions(module))
        return "\n".join(lines) + "\n"

    def emit_preamble(self, profile: NamespaceProfile) -> list[str]:
        lines = ["#pragma once", "", f"// {self.settings['BANNER']}", ""]
        lines.extend(f"#include <{include}>" for include in profile.includes)
        lines.extend(["", f'#pragma comment (lib, "{profile.library}")'])

        if profile.type_aliases:
            lines.append("")
            lines.extend(profile.type_aliases)

        if profile.forward_interfaces:
            lines.append("")
            width = _longest(target for target, _ in profile.forward_interfaces)
            for target, alias in profile.forward_interfaces:
                lines.append(f"typedef interface {target:<{width}} {alias};")
        return lines

    def emit_interface_stubs(self, module: NamespaceModule) -> list[str]:
        lines = ["", "// interfaces", ""]
        width = _longest(module.interfaces)
        for name in sorted(module.interfaces):
            lines.append(f"typedef struct {name:<{width}} {{ struct {{ void* tbl[]; }}* v; }} {name};")
        return lines

    def emit_constants(self, module: NamespaceModule) -> list[str]:
        """Emit GUID constants by name, then scalar constants by name."""
        lines = ["", "// constants", ""]
        constants = sorted(module.constants.values(), key=lambda c: c.name)
        guids = [c for c in constants if c.kind is ConstantKind.GUID]
        scalars = [c for c in constants if c.kind is not ConstantKind.GUID]

        guid_width = _longest(c.name for c in guids) + 1
        for constant in guids + scalars:
            lines.extend(format_constant(constant, guid_width))
        return lines

    def emit_typedefs(self, module: NamespaceModule) -> list[str]:
        if not module.delegates:
            return []

        lines = ["", "// typedefs", ""]
        for name in sorted(module.delegates):
            signature = module.delegates[name].signature
            ret = self.resolver.resolve(signature.return_type)
            lines.append(f"typedef {ret} (CALLBACK* {name})({self._parameter_list(signature)});")
        return lines

    def emit_enums(self, module: NamespaceModule) -> list[str]:
        lines = ["", "// enums"]
        for name in sorted(module.enums):
            enum = module.enums[name]
            width = _longest(member.name for member in enum.members)
            lines.append("")
            lines.append(f"typedef enum {name} {{")
            for member in enum.members:
                lines.append(f"    {member.name:<{width}} = {format_enum_value(member)},")
            lines.append(f"}} {name};")
        return lines

    def emit_structs(self, module: NamespaceModule) -> list[str]:
        lines = ["", "// structs"]
        for struct in StructDependencyResolver(module.structs).resolve_order():
            lines.append("")
            lines.append(f"typedef {struct.keyword} {struct.name} {{")
            lines.extend(self._emit_fields(struct, level=1))
            lines.append(f"}} {struct.name};")
        return lines

    def _emit_fields(self, struct: StructDescriptor, level: int) -> list[str]:
        indent = " " * (self.indent_width * level)
        width = _longest(self._field_type(f) for f in struct.fields if not f.is_nested)

        lines = []
        for field in struct.fields:
            if field.nested is not None:
                lines.append(f"{indent}{field.nested.keyword} {{")
                lines.extend(self._emit_fields(field.nested, level + 1))
                lines.append(f"{indent}}} {field.name};")
                continue

            type_name = self._field_type(field)
            if field.is_array:
                lines.append(f"{indent}{type_name:<{width}} {field.name}[{field.array_length}];")
            elif field.bitfields:
                for bitfield in field.bitfields:
                    lines.append(f"{indent}{type_name:<{width}} {bitfield.name} : {bitfield.length};")
            else:
                lines.append(f"{indent}{type_name:<{width}} {field.name};")
        return lines

    def _field_type(self, field: FieldDescriptor) -> str:
        return self.resolver.resolve(field.type)

    def emit_methods(self, module: NamespaceModule) -> list[str]:
        lines = ["", "// methods"]
        for name in sorted(module.interfaces):
            lines.append("")
            lines.extend(self.method_emitter.emit_lines(module.interfaces[name]))
        return lines

    def emit_guids(self, module: NamespaceModule) -> list[str]:
        """Emit one ``IID_`` definition per interface.

        Raises:
            MissingMetadataError: If an interface has no GUID
        """
        lines = ["", "// guids", ""]
        width = _longest(module.interfaces) + len(IID_PREFIX) + 1
        for name in sorted(module.interfaces):
            guid = module.interfaces[name].guid
            if guid is None:
                raise MissingMetadataError(f"Interface {name} has no GuidAttribute")
            lines.append(format_guid_define(f"{IID_PREFIX}{name}", guid, width))
        return lines

    def emit_functions(self, module: NamespaceModule) -> list[str]:
        lines = ["", "// functions", ""]
        functions = module.functions
        ret_width = _longest(self.resolver.resolve(f.return_type) for f in functions.values())
        name_width = _longest(functions) + 1
        for name in sorted(functions):
            function = functions[name]
            ret = self.resolver.resolve(function.return_type)
            lines.append(
                f"EXTERN_C {ret:<{ret_width}} DECLSPEC_IMPORT WINAPI {name:<{name_width}}"
                f"({self._parameter_list(function)}) WIN_NOEXCEPT;"
            )
        return lines

    def _parameter_list(self, method) -> str:
        return ", ".join(
            f"{self.resolver.resolve_parameter(p.type, p.is_const)} {p.name}"
            for p in method.parameters
        )
