#!/usr/bin/env python3

"""Repositories exposing the metadata type graph."""

from .metadata_repository import InMemoryMetadataRepository, MetadataRepository

__all__ = [
    "InMemoryMetadataRepository",
    "MetadataRepository",
]
