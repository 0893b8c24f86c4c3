#!/usr/bin/env python3

"""Declaration descriptors produced by the type classifier."""

from .constant_descriptor import ConstantDescriptor, ConstantKind
from .delegate_descriptor import DelegateDescriptor
from .enum_descriptor import EnumDescriptor, EnumMember
from .guid_value import GuidValue
from .interface_descriptor import InterfaceDescriptor
from .method_descriptor import MethodDescriptor, ParameterDescriptor
from .namespace_module import NamespaceModule
from .struct_descriptor import BitfieldInfo, FieldDescriptor, StructDescriptor

__all__ = [
    "BitfieldInfo",
    "ConstantDescriptor",
    "ConstantKind",
    "DelegateDescriptor",
    "EnumDescriptor",
    "EnumMember",
    "FieldDescriptor",
    "GuidValue",
    "InterfaceDescriptor",
    "MethodDescriptor",
    "NamespaceModule",
    "ParameterDescriptor",
    "StructDescriptor",
]
