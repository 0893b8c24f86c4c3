#!/usr/bin/env python3

"""Generation services for C header creation."""

from .declaration_emitter import DeclarationEmitter
from .interface_method_emitter import DispatchWrapper, InterfaceMethodEmitter
from .struct_dependency_resolver import StructDependencyResolver

__all__ = [
    "DeclarationEmitter",
    "DispatchWrapper",
    "InterfaceMethodEmitter",
    "StructDependencyResolver",
]
