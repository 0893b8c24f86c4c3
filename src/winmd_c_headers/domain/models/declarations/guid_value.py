#!/usr/bin/env python3

"""GUID value model."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GuidValue:
    """A GUID split the way ``DEFINE_GUID`` expects it."""

    data1: int
    data2: int
    data3: int
    data4: tuple[int, ...]

    @classmethod
    def from_attribute_arguments(cls, arguments: Sequence[Any]) -> GuidValue:
        """Build a GUID from the eleven positional GuidAttribute arguments.

        Raises:
            ValueError: If the argument count is not eleven
        """
        if len(arguments) != 11:
            raise ValueError(f"GuidAttribute expects 11 arguments, got {len(arguments)}")
        values = [int(arg) for arg in arguments]
        return cls(values[0], values[1], values[2], tuple(values[3:]))

    def define_arguments(self) -> str:
        """Format the value part of a ``DEFINE_GUID`` invocation."""
        tail = ", ".join(f"0x{byte:02x}" for byte in self.data4)
        return f"0x{self.data1:08x}, 0x{self.data2:04x}, 0x{self.data3:04x}, {tail}"
