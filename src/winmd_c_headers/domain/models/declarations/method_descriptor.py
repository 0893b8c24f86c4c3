#!/usr/bin/env python3

"""Method and parameter descriptor models."""

from dataclasses import dataclass, field

from ..metadata import TypeReference


@dataclass(frozen=True)
class ParameterDescriptor:
    """A method parameter with its const qualifier."""

    name: str
    type: TypeReference
    is_const: bool = False


@dataclass
class MethodDescriptor:
    """A callable signature: interface method, delegate or free function."""

    name: str
    return_type: TypeReference
    parameters: list[ParameterDescriptor] = field(default_factory=list)
    deprecation: str | None = None
