#!/usr/bin/env python3

"""Metadata document loading."""

from .metadata_loader import MetadataLoader

__all__ = ["MetadataLoader"]
