#!/usr/bin/env python3

"""Function-pointer typedef descriptor model."""

from dataclasses import dataclass

from .method_descriptor import MethodDescriptor


@dataclass
class DelegateDescriptor:
    """A function-pointer typedef, described by its Invoke signature."""

    name: str
    signature: MethodDescriptor
