#!/usr/bin/env python3

"""Enum descriptor model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EnumMember:
    """An enum member with its stored value and signedness."""

    name: str
    value: int
    is_unsigned: bool = False


@dataclass
class EnumDescriptor:
    """An enumeration; member order is emission order."""

    name: str
    members: list[EnumMember]
