#!/usr/bin/env python3

"""Application layer wiring the domain services together."""

from .generators import HeaderGenerator

__all__ = ["HeaderGenerator"]
