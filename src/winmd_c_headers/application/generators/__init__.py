#!/usr/bin/env python3

"""Header generator orchestrators."""

from .header_generator import HeaderGenerator

__all__ = ["HeaderGenerator"]
