#!/usr/bin/env python3

"""Well-known metadata names and primitive classification.

Collects the attribute type names, base type names and primitive kinds the
classifier and resolvers recognise. Anything outside these sets is treated as
an unsupported shape rather than silently dropped.
"""

METADATA_NAMESPACE = "Windows.Win32.Foundation.Metadata"

# Custom attributes
GUID_ATTRIBUTE = f"{METADATA_NAMESPACE}.GuidAttribute"
CONST_ATTRIBUTE = f"{METADATA_NAMESPACE}.ConstAttribute"
NATIVE_BITFIELD_ATTRIBUTE = f"{METADATA_NAMESPACE}.NativeBitfieldAttribute"
OBSOLETE_ATTRIBUTE = "System.ObsoleteAttribute"

# Base types that decide the entity kind
ENUM_BASE_TYPE = "System.Enum"
VALUE_TYPE_BASE_TYPE = "System.ValueType"
MULTICAST_DELEGATE_BASE_TYPE = "System.MulticastDelegate"

# Well-known named types
GUID_TYPE = "System.Guid"
WIDE_STRING_TYPE_NAME = "PWSTR"
RESULT_CODE_TYPE_NAME = "HRESULT"

# Container class holding a namespace's constants and free functions
GLOBALS_CONTAINER_NAME = "Apis"

# Name of the method carrying a delegate's signature
DELEGATE_INVOKE_METHOD = "Invoke"

# Backing field name used for bitfield groups
BITFIELD_BACKING_FIELD = "_bitfield"

# Primitive kind -> C alias
PRIMITIVE_ALIASES: dict[str, str] = {
    "SByte": "INT8",
    "Byte": "UINT8",
    "Int16": "INT16",
    "UInt16": "UINT16",
    "Int32": "INT32",
    "UInt32": "UINT32",
    "Int64": "INT64",
    "UInt64": "UINT64",
    "Single": "FLOAT",
    "Double": "DOUBLE",
}

# Primitive integer kind -> bit width
PRIMITIVE_INT_BITS: dict[str, int] = {
    "SByte": 8,
    "Byte": 8,
    "Int16": 16,
    "UInt16": 16,
    "Int32": 32,
    "UInt32": 32,
    "Int64": 64,
    "UInt64": 64,
}

# Scalar return types that never take the aggregate-return path, even
# though the metadata describes them as value structs
SCALAR_HANDLE_TYPES = frozenset({"HRESULT", "HANDLE", "HDC", "HWND", "BOOL"})
