#!/usr/bin/env python3

"""Classification of metadata entities into declaration descriptors.

A namespace's type definitions are partitioned by structural inspection:

- the globals container (``Apis``) yields constants and free functions
- enums (base ``System.Enum``)
- interfaces (interface flag set)
- value structs and unions (classes deriving from ``System.ValueType``)
- function-pointer typedefs (classes deriving from ``System.MulticastDelegate``)

Anything else is an unsupported shape and aborts the run; the classifier
never drops an entity it does not understand.
"""

from ....infrastructure.logging import get_logger, log_timing
from ...errors import (
    InvalidBitfieldLayout,
    MissingMetadataError,
    UnknownTypeError,
    UnsupportedConstantKind,
    UnsupportedEntityShape,
)
from ...models.declarations import (
    BitfieldInfo,
    ConstantDescriptor,
    ConstantKind,
    DelegateDescriptor,
    EnumDescriptor,
    EnumMember,
    FieldDescriptor,
    GuidValue,
    InterfaceDescriptor,
    MethodDescriptor,
    NamespaceModule,
    ParameterDescriptor,
    StructDescriptor,
)
from ...models.metadata import (
    FieldDefinition,
    MethodDefinition,
    TypeDefinition,
    find_attribute,
    has_attribute,
)
from ...models.metadata.metadata_constants import (
    BITFIELD_BACKING_FIELD,
    CONST_ATTRIBUTE,
    DELEGATE_INVOKE_METHOD,
    GLOBALS_CONTAINER_NAME,
    GUID_ATTRIBUTE,
    GUID_TYPE,
    NATIVE_BITFIELD_ATTRIBUTE,
    OBSOLETE_ATTRIBUTE,
    RESULT_CODE_TYPE_NAME,
)
from ...models.namespace_profile import NamespaceProfile
from ...repositories import MetadataRepository
from .type_name_resolver import integer_bit_width

logger = get_logger(__name__)

SIGNED_CONSTANT_TYPES = frozenset({"Int32"})
UNSIGNED_CONSTANT_TYPES = frozenset({"UInt32"})
FLOAT_CONSTANT_TYPES = frozenset({"Single"})


class TypeClassifier:
    """Builds the namespace module for one header.

    A classifier is created per namespace pass. Its interface cache is the
    named lookup table used to walk base-interface chains, which may leave
    the namespace (every chain ends at ``IUnknown``).
    """

    def __init__(self, repository: MetadataRepository, profile: NamespaceProfile) -> None:
        """Initialize classifier.

        Args:
            repository: Metadata to classify
            profile: Template naming the namespace and its include/exclude lists
        """
        self.repository = repository
        self.profile = profile
        self._interfaces: dict[str, InterfaceDescriptor] = {}

    @log_timing
    def classify(self) -> NamespaceModule:
        """Partition the profile's namespace into a fresh module.

        Returns:
            NamespaceModule holding every emitted entity

        Raises:
            UnsupportedEntityShape: If a type matches none of the known kinds
        """
        namespace = self.profile.namespace
        module = NamespaceModule(namespace)

        for type_def in self.repository.iter_types(namespace):
            if type_def.name == GLOBALS_CONTAINER_NAME:
                self._add_globals(module, type_def)
            elif type_def.is_enum:
                if type_def.name in self.profile.excluded_types:
                    logger.debug(f"Skipping {type_def.name}: declared by an included header")
                    continue
                module.enums[type_def.name] = self.describe_enum(type_def)
            elif type_def.is_interface:
                module.interfaces[type_def.name] = self.describe_interface(type_def)
            elif type_def.is_class and type_def.is_value_type:
                module.structs[type_def.name] = self.describe_struct(type_def)
            elif type_def.is_delegate:
                module.delegates[type_def.name] = self.describe_delegate(type_def)
            else:
                raise UnsupportedEntityShape(
                    type_def.full_name, f"base type {type_def.base_type!r} is not recognised"
                )

        if self.profile.shared_namespace:
            self._add_shared_entities(module, self.profile.shared_namespace)

        logger.info(
            f"Classified {namespace}: {len(module.constants)} constants, "
            f"{len(module.delegates)} typedefs, {len(module.enums)} enums, "
            f"{len(module.structs)} structs, {len(module.interfaces)} interfaces, "
            f"{len(module.functions)} functions"
        )
        return module

    def _add_globals(self, module: NamespaceModule, container: TypeDefinition) -> None:
        for field in container.fields:
            module.constants[field.name] = self.describe_constant(field)
        for method in container.methods:
            module.functions[method.name] = self.describe_method(method)

    def _add_shared_entities(self, module: NamespaceModule, shared_namespace: str) -> None:
        """Import allow-listed entities from the shared sub-namespace."""
        allow_list = self.profile.shared_allow_list
        for type_def in self.repository.iter_types(shared_namespace):
            if type_def.name not in allow_list:
                continue

            logger.debug(f"Importing {type_def.full_name} from shared namespace")
            if type_def.is_enum:
                module.enums[type_def.name] = self.describe_enum(type_def)
            elif type_def.is_interface:
                module.interfaces[type_def.name] = self.describe_interface(type_def)
            elif type_def.is_class and type_def.is_value_type:
                module.structs[type_def.name] = self.describe_struct(type_def)
            else:
                raise UnsupportedEntityShape(
                    type_def.full_name, "shared entities must be enums, interfaces or structs"
                )

    # ------------------------------------------------------------------ constants

    def describe_constant(self, field: FieldDefinition) -> ConstantDescriptor:
        """Describe a constant field of the globals container.

        Raises:
            MissingMetadataError: GUID without GuidAttribute, scalar without value
            UnsupportedConstantKind: Scalar of an unsupported element type
        """
        if field.type.full_name == GUID_TYPE:
            guid = self._read_guid(field.attributes, field.name)
            if guid is None:
                raise MissingMetadataError(f"GUID constant {field.name} has no GuidAttribute")
            return ConstantDescriptor(field.name, ConstantKind.GUID, guid=guid)

        if field.constant is None:
            raise MissingMetadataError(f"Constant {field.name} has no value")

        element_type = field.constant.element_type
        value = field.constant.value

        if field.type.is_named and field.type.name == RESULT_CODE_TYPE_NAME:
            return ConstantDescriptor(field.name, ConstantKind.RESULT_CODE, int(value) & 0xFFFFFFFF)
        if element_type in SIGNED_CONSTANT_TYPES:
            return ConstantDescriptor(field.name, ConstantKind.SIGNED, int(value))
        if element_type in UNSIGNED_CONSTANT_TYPES:
            return ConstantDescriptor(field.name, ConstantKind.UNSIGNED, int(value))
        if element_type in FLOAT_CONSTANT_TYPES:
            return ConstantDescriptor(field.name, ConstantKind.FLOAT, float(value))

        raise UnsupportedConstantKind(
            f"Constant {field.name} has unsupported element type {element_type}"
        )

    # ---------------------------------------------------------------------- enums

    def describe_enum(self, type_def: TypeDefinition) -> EnumDescriptor:
        """Describe an enum; member order follows the metadata.

        Raises:
            MissingMetadataError: A member without a value
            UnsupportedConstantKind: A member that is neither Int32 nor UInt32
        """
        members = []
        for field in type_def.fields:
            if field.is_special_name:
                continue
            if field.constant is None:
                raise MissingMetadataError(f"Enum member {type_def.name}.{field.name} has no value")

            element_type = field.constant.element_type
            if element_type not in SIGNED_CONSTANT_TYPES | UNSIGNED_CONSTANT_TYPES:
                raise UnsupportedConstantKind(
                    f"Enum member {type_def.name}.{field.name} has element type {element_type}"
                )
            members.append(
                EnumMember(
                    name=field.name,
                    value=int(field.constant.value),
                    is_unsigned=element_type in UNSIGNED_CONSTANT_TYPES,
                )
            )
        return EnumDescriptor(type_def.name, members)

    # -------------------------------------------------------------------- structs

    def describe_struct(self, type_def: TypeDefinition) -> StructDescriptor:
        """Describe a struct or union, including anonymous nested aggregates."""
        fields = [self._describe_field(type_def, field) for field in type_def.fields]
        return StructDescriptor(
            name=type_def.name,
            full_name=type_def.full_name,
            fields=fields,
            is_union=type_def.explicit_layout,
        )

    def _describe_field(self, owner: TypeDefinition, field: FieldDefinition) -> FieldDescriptor:
        if field.type.is_array:
            assert field.type.element is not None
            return FieldDescriptor(field.name, field.type.element, array_length=field.type.length)

        if field.type.is_named:
            definition = self.repository.resolve(field.type)
            if definition is not None and definition.is_nested:
                return FieldDescriptor(field.name, field.type, nested=self.describe_struct(definition))

        bitfields = self._read_bitfields(owner, field)
        return FieldDescriptor(field.name, field.type, bitfields=bitfields)

    def _read_bitfields(self, owner: TypeDefinition, field: FieldDefinition) -> list[BitfieldInfo]:
        """Read and validate the bit groups packed into a backing field.

        Groups must start at bit 0, follow each other without gaps and fit
        into the backing integer.

        Raises:
            InvalidBitfieldLayout: If any of these conditions does not hold
        """
        groups = sorted(
            (
                BitfieldInfo(name=str(attr.arguments[0]), offset=int(attr.arguments[1]),
                             length=int(attr.arguments[2]))
                for attr in field.attributes
                if attr.type_name == NATIVE_BITFIELD_ATTRIBUTE
            ),
            key=lambda group: group.offset,
        )
        if not groups:
            return []

        location = f"{owner.name}.{field.name}"
        if field.name != BITFIELD_BACKING_FIELD:
            raise InvalidBitfieldLayout(
                f"Bitfield groups on {location}; expected backing field {BITFIELD_BACKING_FIELD}"
            )

        total_bits = integer_bit_width(field.type)
        if total_bits is None:
            raise InvalidBitfieldLayout(
                f"Bitfield backing field {location} has non-integer type {field.type.full_name}"
            )

        next_offset = 0
        for group in groups:
            if group.offset != next_offset:
                raise InvalidBitfieldLayout(
                    f"Bitfield {location}.{group.name} starts at bit {group.offset}, "
                    f"expected {next_offset}"
                )
            if group.length <= 0 or group.offset + group.length > total_bits:
                raise InvalidBitfieldLayout(
                    f"Bitfield {location}.{group.name} ({group.offset}+{group.length}) "
                    f"does not fit into {total_bits} bits"
                )
            next_offset = group.offset + group.length

        return groups

    # ----------------------------------------------------------------- interfaces

    def describe_interface(self, type_def: TypeDefinition) -> InterfaceDescriptor:
        """Describe an interface; its base is kept as a name, not a descriptor.

        Raises:
            UnsupportedEntityShape: If the interface has more than one base
        """
        cached = self._interfaces.get(type_def.full_name)
        if cached is not None:
            return cached

        if len(type_def.interfaces) > 1:
            raise UnsupportedEntityShape(
                type_def.full_name,
                f"{len(type_def.interfaces)} base interfaces; only single inheritance is supported",
            )

        base = type_def.interfaces[0].full_name if type_def.interfaces else None
        descriptor = InterfaceDescriptor(
            name=type_def.name,
            full_name=type_def.full_name,
            methods=[self.describe_method(method) for method in type_def.methods],
            base=base,
            guid=self._read_guid(type_def.attributes, type_def.name),
        )
        self._interfaces[type_def.full_name] = descriptor
        return descriptor

    def lookup_interface(self, full_name: str) -> InterfaceDescriptor:
        """Find an interface by full name, inside or outside the namespace.

        Raises:
            UnknownTypeError: If the name does not denote an interface
        """
        cached = self._interfaces.get(full_name)
        if cached is not None:
            return cached

        type_def = self.repository.find_type(full_name)
        if type_def is None or not type_def.is_interface:
            raise UnknownTypeError(f"Base interface not found: {full_name}")
        return self.describe_interface(type_def)

    # ------------------------------------------------------------------ callables

    def describe_delegate(self, type_def: TypeDefinition) -> DelegateDescriptor:
        invoke = type_def.find_method(DELEGATE_INVOKE_METHOD)
        if invoke is None:
            raise UnsupportedEntityShape(type_def.full_name, "delegate has no Invoke method")
        return DelegateDescriptor(type_def.name, self.describe_method(invoke))

    def describe_method(self, method: MethodDefinition) -> MethodDescriptor:
        parameters = [
            ParameterDescriptor(
                name=param.name,
                type=param.type,
                is_const=has_attribute(param.attributes, CONST_ATTRIBUTE),
            )
            for param in method.parameters
        ]

        deprecation = None
        obsolete = find_attribute(method.attributes, OBSOLETE_ATTRIBUTE)
        if obsolete is not None:
            deprecation = str(obsolete.arguments[0]) if obsolete.arguments else ""

        return MethodDescriptor(
            name=method.name,
            return_type=method.return_type,
            parameters=parameters,
            deprecation=deprecation,
        )

    @staticmethod
    def _read_guid(attributes: list, owner: str) -> GuidValue | None:
        attribute = find_attribute(attributes, GUID_ATTRIBUTE)
        if attribute is None:
            return None
        try:
            return GuidValue.from_attribute_arguments(attribute.arguments)
        except (TypeError, ValueError) as e:
            raise MissingMetadataError(f"Malformed GuidAttribute on {owner}: {e}") from e
