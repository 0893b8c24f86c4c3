#!/usr/bin/env python3

"""Loading of metadata dumps into an in-memory repository.

The Windows metadata ships as a gzip-compressed winmd. The generator reads a
JSON dump of the same entities, optionally gzip-compressed, with one object
per type definition::

    {"types": [
        {"namespace": "Windows.Win32.Graphics.DirectWrite",
         "name": "IDWriteFactory",
         "interface": true,
         "interfaces": [{"kind": "named", "namespace": "Windows.Win32.System.Com",
                         "name": "IUnknown"}],
         "methods": [{"name": "GetSystemFontCollection",
                      "return_type": {"kind": "named", "namespace": "Windows.Win32.Foundation",
                                      "name": "HRESULT", "value_type": true},
                      "parameters": [...]}],
         "attributes": [{"type": "Windows.Win32.Foundation.Metadata.GuidAttribute",
                         "args": [3093950042, 55352, 19291, 162, 232, 26, 220, 125, 147, 219, 72]}]}
    ]}

Type references are objects with a ``kind`` of ``void``, ``primitive``
(``name`` holds the primitive kind), ``pointer`` / ``array`` (``element``, plus
``length`` for arrays) or ``named`` (``namespace``, ``name``, ``value_type``
and ``declaring_type`` for nested types).
"""

import gzip
import json
from pathlib import Path
from typing import Any

from ...domain.errors import MetadataFormatError
from ...domain.models.metadata import (
    ConstantValue,
    CustomAttribute,
    FieldDefinition,
    MethodDefinition,
    ParameterDefinition,
    TypeDefinition,
    TypeKind,
    TypeReference,
)
from ...domain.repositories import InMemoryMetadataRepository
from ..logging import get_logger, log_timing

logger = get_logger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


class MetadataLoader:
    """Decodes metadata documents into type definitions."""

    @classmethod
    @log_timing
    def load(cls, path: Path) -> InMemoryMetadataRepository:
        """Read a metadata dump from disk.

        Gzip compression is detected from the file's magic bytes.

        Args:
            path: Path to a ``.json`` or ``.json.gz`` metadata dump

        Returns:
            Repository holding every type definition of the dump

        Raises:
            MetadataFormatError: If the file is not a valid metadata document
        """
        raw = path.read_bytes()
        if raw.startswith(GZIP_MAGIC):
            logger.debug(f"Decompressing {path} ({len(raw)} bytes)")
            raw = gzip.decompress(raw)

        try:
            document = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MetadataFormatError(f"{path} is not a JSON metadata document: {e}") from e

        repository = cls.from_document(document)
        logger.info(f"Loaded {len(repository)} type definitions from {path}")
        return repository

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> InMemoryMetadataRepository:
        """Build a repository from an already parsed metadata document."""
        if not isinstance(document, dict) or not isinstance(document.get("types"), list):
            raise MetadataFormatError("Metadata document must be an object with a 'types' list")
        return InMemoryMetadataRepository(cls.decode_type(entry) for entry in document["types"])

    @classmethod
    def decode_type(cls, entry: dict[str, Any]) -> TypeDefinition:
        """Decode one type definition object."""
        label = f"{entry.get('namespace', '?')}.{entry.get('name', '?')}"
        try:
            return TypeDefinition(
                namespace=entry.get("namespace", ""),
                name=entry["name"],
                is_interface=bool(entry.get("interface", False)),
                base_type=entry.get("base_type"),
                declaring_type=entry.get("declaring_type"),
                explicit_layout=bool(entry.get("explicit_layout", False)),
                interfaces=[cls.decode_type_reference(i) for i in entry.get("interfaces", [])],
                fields=[cls._decode_field(f) for f in entry.get("fields", [])],
                methods=[cls._decode_method(m) for m in entry.get("methods", [])],
                attributes=cls._decode_attributes(entry),
            )
        except MetadataFormatError as e:
            raise MetadataFormatError(f"In type {label}: {e}") from e
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MetadataFormatError(f"Malformed type {label}: {e!r}") from e

    @classmethod
    def decode_type_reference(cls, entry: dict[str, Any]) -> TypeReference:
        """Decode a type reference object."""
        try:
            kind = TypeKind(entry["kind"])
        except (KeyError, ValueError, TypeError) as e:
            raise MetadataFormatError(f"Invalid type reference: {entry!r}") from e

        if kind is TypeKind.VOID:
            return TypeReference.void()
        if kind is TypeKind.PRIMITIVE:
            return TypeReference.primitive(entry["name"])
        if kind is TypeKind.POINTER:
            return TypeReference.pointer(cls.decode_type_reference(entry["element"]))
        if kind is TypeKind.ARRAY:
            return TypeReference.array(
                cls.decode_type_reference(entry["element"]), int(entry["length"])
            )
        return TypeReference.named(
            namespace=entry.get("namespace", ""),
            name=entry["name"],
            is_value_type=bool(entry.get("value_type", False)),
            declaring_type=entry.get("declaring_type"),
        )

    @classmethod
    def _decode_field(cls, entry: dict[str, Any]) -> FieldDefinition:
        constant = None
        if entry.get("constant") is not None:
            constant = ConstantValue(
                element_type=entry["constant"]["type"],
                value=entry["constant"]["value"],
            )
        return FieldDefinition(
            name=entry["name"],
            type=cls.decode_type_reference(entry["type"]),
            constant=constant,
            is_special_name=bool(entry.get("special_name", False)),
            attributes=cls._decode_attributes(entry),
        )

    @classmethod
    def _decode_method(cls, entry: dict[str, Any]) -> MethodDefinition:
        return MethodDefinition(
            name=entry["name"],
            return_type=cls.decode_type_reference(entry["return_type"]),
            parameters=[
                ParameterDefinition(
                    name=param["name"],
                    type=cls.decode_type_reference(param["type"]),
                    attributes=cls._decode_attributes(param),
                )
                for param in entry.get("parameters", [])
            ],
            attributes=cls._decode_attributes(entry),
        )

    @staticmethod
    def _decode_attributes(entry: dict[str, Any]) -> list[CustomAttribute]:
        return [
            CustomAttribute(type_name=attr["type"], arguments=tuple(attr.get("args", ())))
            for attr in entry.get("attributes", [])
        ]
