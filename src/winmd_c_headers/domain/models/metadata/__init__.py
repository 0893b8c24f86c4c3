#!/usr/bin/env python3

"""Metadata entity models mirroring the winmd type graph."""

from .custom_attribute import CustomAttribute, find_attribute, has_attribute
from .field_definition import ConstantValue, FieldDefinition
from .method_definition import MethodDefinition, ParameterDefinition
from .type_definition import TypeDefinition
from .type_reference import TypeKind, TypeReference

__all__ = [
    "ConstantValue",
    "CustomAttribute",
    "FieldDefinition",
    "MethodDefinition",
    "ParameterDefinition",
    "TypeDefinition",
    "TypeKind",
    "TypeReference",
    "find_attribute",
    "has_attribute",
]
