#!/usr/bin/env python3

"""Interface descriptor model."""

from dataclasses import dataclass

from .guid_value import GuidValue
from .method_descriptor import MethodDescriptor


@dataclass
class InterfaceDescriptor:
    """A COM interface.

    ``base`` holds the full name of the base interface rather than the
    descriptor itself; the chain is walked through a named lookup.
    """

    name: str
    full_name: str
    methods: list[MethodDescriptor]
    base: str | None = None
    guid: GuidValue | None = None
