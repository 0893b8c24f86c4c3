#!/usr/bin/env python3

"""Fatal error types raised while translating metadata into C headers.

Every error aborts the run. The generator produces build inputs, so a
metadata assumption that does not hold is surfaced immediately instead of
being papered over with a malformed header.
"""


class HeaderGenerationError(Exception):
    """Base class for all header generation failures."""


class MetadataFormatError(HeaderGenerationError):
    """A metadata document could not be decoded."""


class UnknownTypeError(HeaderGenerationError):
    """A named type lookup did not find a definition in the metadata set."""


class UnsupportedEntityShape(HeaderGenerationError):
    """A metadata entity does not match any of the recognised kinds."""

    def __init__(self, entity: str, reason: str) -> None:
        super().__init__(f"Unsupported entity shape for {entity}: {reason}")
        self.entity = entity
        self.reason = reason


class UnsupportedPrimitive(HeaderGenerationError):
    """A primitive kind outside the fixed-width integer and float set."""

    def __init__(self, primitive: str) -> None:
        super().__init__(f"Unsupported primitive type: {primitive}")
        self.primitive = primitive


class UnexpectedAggregateArray(HeaderGenerationError):
    """A fixed-size array field has a non-primitive element type."""

    def __init__(self, struct_name: str, field_name: str, element: str) -> None:
        super().__init__(
            f"Array field {struct_name}.{field_name} has non-primitive element type {element}"
        )
        self.struct_name = struct_name
        self.field_name = field_name


class UnsupportedAggregateReturnSignature(HeaderGenerationError):
    """A method returning an aggregate by value also takes explicit parameters."""

    def __init__(self, interface_name: str, method_name: str, parameter_count: int) -> None:
        super().__init__(
            f"{interface_name}::{method_name} returns an aggregate by value and takes "
            f"{parameter_count} parameter(s); only parameterless aggregate returns are supported"
        )
        self.interface_name = interface_name
        self.method_name = method_name
        self.parameter_count = parameter_count


class InvalidBitfieldLayout(HeaderGenerationError):
    """Bitfield groups sharing a backing field are not contiguous or overflow it."""


class MissingMetadataError(HeaderGenerationError):
    """An entity lacks an attribute or constant the domain guarantees."""


class UnsupportedConstantKind(HeaderGenerationError):
    """A constant or enum member value has an unsupported element type."""
