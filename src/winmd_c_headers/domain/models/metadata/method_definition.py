#!/usr/bin/env python3

"""Method and parameter definition models for metadata parsing."""

from dataclasses import dataclass, field

from .custom_attribute import CustomAttribute
from .type_reference import TypeReference


@dataclass
class ParameterDefinition:
    """A method parameter."""

    name: str
    type: TypeReference
    attributes: list[CustomAttribute] = field(default_factory=list)


@dataclass
class MethodDefinition:
    """An interface method, delegate signature or free function."""

    name: str
    return_type: TypeReference
    parameters: list[ParameterDefinition] = field(default_factory=list)
    attributes: list[CustomAttribute] = field(default_factory=list)
