#!/usr/bin/env python3

"""Constant descriptor model."""

from dataclasses import dataclass
from enum import Enum

from .guid_value import GuidValue


class ConstantKind(Enum):
    """How a constant is rendered."""

    GUID = "guid"
    SIGNED = "signed"
    UNSIGNED = "unsigned"
    FLOAT = "float"
    RESULT_CODE = "result_code"


@dataclass(frozen=True)
class ConstantDescriptor:
    """A named constant from a namespace's globals container."""

    name: str
    kind: ConstantKind
    value: int | float | None = None
    guid: GuidValue | None = None
