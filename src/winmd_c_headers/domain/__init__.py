#!/usr/bin/env python3

"""Domain layer containing the transpiler logic and models."""

from . import errors, models, repositories, services

__all__ = [
    "errors",
    "models",
    "repositories",
    "services",
]
