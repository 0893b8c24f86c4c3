#!/usr/bin/env python3

"""Domain models for the header generator."""

from . import declarations, metadata
from .namespace_profile import (
    BUILTIN_PROFILES,
    DIRECT2D_PROFILE,
    DIRECTWRITE_PROFILE,
    NamespaceProfile,
    get_profile,
)

__all__ = [
    "BUILTIN_PROFILES",
    "DIRECT2D_PROFILE",
    "DIRECTWRITE_PROFILE",
    "NamespaceProfile",
    "declarations",
    "get_profile",
    "metadata",
]
