#!/usr/bin/env python3

"""Parsing services for winmd metadata."""

from .type_classifier import TypeClassifier
from .type_name_resolver import TypeNameResolver, integer_bit_width

__all__ = [
    "TypeClassifier",
    "TypeNameResolver",
    "integer_bit_width",
]
