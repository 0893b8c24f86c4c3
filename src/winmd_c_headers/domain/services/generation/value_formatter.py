#!/usr/bin/env python3

"""Literal formatting for constants, enum members and GUIDs.

Values are printed exactly as stored: signedness is never reinterpreted,
only the spelling changes (negative signed enum members become their 32-bit
pattern, large unsigned values become hex).
"""

import math
import struct

from ...errors import MissingMetadataError, UnsupportedConstantKind
from ...models.declarations import ConstantDescriptor, ConstantKind, EnumMember, GuidValue

UINT32_MASK = 0xFFFFFFFF
SIGNED_LIMIT = 0x80000000

# Enough significant digits to round-trip any single-precision value
MAX_SINGLE_DIGITS = 9


def _to_single(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def format_float(value: float) -> str:
    """Format a single-precision value as the shortest round-trip C literal.

    >>> format_float(1.0)
    '1.f'
    >>> format_float(0.5)
    '0.5f'

    Raises:
        UnsupportedConstantKind: If the value has no finite single-precision form
    """
    try:
        single = _to_single(value)
    except OverflowError as e:
        raise UnsupportedConstantKind(f"Float constant {value!r} overflows single precision") from e
    if not math.isfinite(single):
        raise UnsupportedConstantKind(f"Float constant {value!r} has no C literal form")

    text = repr(single)
    for digits in range(1, MAX_SINGLE_DIGITS + 1):
        candidate = f"{single:.{digits}g}"
        if _to_single(float(candidate)) == single:
            text = repr(float(candidate))
            break

    if text.endswith(".0"):
        return text[:-1] + "f"
    return text + "f"


def format_guid_define(name: str, guid: GuidValue, name_width: int) -> str:
    """Format one ``DEFINE_GUID`` line; ``name_width`` includes the trailing comma."""
    label = f"{name},"
    return f"DEFINE_GUID({label:<{name_width}} {guid.define_arguments()});"


def format_constant(constant: ConstantDescriptor, guid_width: int = 0) -> list[str]:
    """Format a constant as one or more preprocessor lines.

    Args:
        constant: Constant to format
        guid_width: Column width of the GUID name field (longest GUID name + 1)

    Returns:
        Lines of the definition

    Raises:
        MissingMetadataError: If the descriptor lacks its value
        UnsupportedConstantKind: For an unknown kind
    """
    name = constant.name

    if constant.kind is ConstantKind.GUID:
        if constant.guid is None:
            raise MissingMetadataError(f"GUID constant {name} has no value")
        return [format_guid_define(name, constant.guid, guid_width)]

    if constant.value is None:
        raise MissingMetadataError(f"Constant {name} has no value")

    if constant.kind is ConstantKind.RESULT_CODE:
        code = int(constant.value) & UINT32_MASK
        return [
            f"#ifndef {name}",
            f"#define {name} ((HRESULT)0x{code:08x}L)",
            "#endif",
        ]
    if constant.kind is ConstantKind.SIGNED:
        return [f"#define {name} {int(constant.value)}"]
    if constant.kind is ConstantKind.UNSIGNED:
        value = int(constant.value)
        if value < SIGNED_LIMIT:
            return [f"#define {name} {value}"]
        return [f"#define {name} 0x{value:08x}"]
    if constant.kind is ConstantKind.FLOAT:
        return [f"#define {name} {format_float(float(constant.value))}"]

    raise UnsupportedConstantKind(f"Constant {name} has unsupported kind {constant.kind}")


def format_enum_value(member: EnumMember) -> str:
    if member.is_unsigned:
        return f"0x{member.value & UINT32_MASK:08x}"
    if member.value < 0:
        return f"0x{member.value & UINT32_MASK:08x}L"
    return str(member.value)
