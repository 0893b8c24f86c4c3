#!/usr/bin/env python3

"""Unit tests for TypeClassifier.

Tests entity partitioning, descriptor construction, bitfield validation and
the shared-namespace allow-list.
"""

import pytest

from winmd_c_headers.domain.errors import (
    InvalidBitfieldLayout,
    MissingMetadataError,
    UnknownTypeError,
    UnsupportedConstantKind,
    UnsupportedEntityShape,
)
from winmd_c_headers.domain.models import DIRECT2D_PROFILE, NamespaceProfile
from winmd_c_headers.domain.models.declarations import ConstantKind
from winmd_c_headers.domain.models.namespace_profile import (
    DIRECT2D_COMMON_NAMESPACE,
    DIRECT2D_NAMESPACE,
)
from winmd_c_headers.domain.services.parsing import TypeClassifier

from metadata_builders import (
    COM_NAMESPACE,
    TEST_NAMESPACE,
    apis,
    arr,
    bitfield_attr,
    delegate,
    enum,
    field,
    guid_attr,
    hresult,
    interface,
    iunknown,
    method,
    named,
    param,
    prim,
    ptr,
    repository,
    struct,
    void,
)


def classify(profile: NamespaceProfile, *types):
    return TypeClassifier(repository(*types), profile).classify()


class TestEntityPartitioning:
    """Each top-level type lands in exactly one bucket."""

    @pytest.mark.unit
    def test_all_kinds(self, test_profile):
        module = classify(
            test_profile,
            apis(
                fields=[field("WIDGET_MAX", prim("Int32"), constant=("Int32", 8))],
                methods=[method("CreateWidget", params=[param("widget", ptr(named("IWidget"), 2))])],
            ),
            enum("WIDGET_KIND", [("WIDGET_KIND_A", 0), ("WIDGET_KIND_B", 1)]),
            struct("WIDGET_SIZE", [field("width", prim("Single"))]),
            interface("IWidget", [method("Draw")]),
            delegate("PFN_WIDGET_CALLBACK", void(), [param("context", ptr(void()))]),
        )

        assert list(module.constants) == ["WIDGET_MAX"]
        assert list(module.functions) == ["CreateWidget"]
        assert list(module.enums) == ["WIDGET_KIND"]
        assert list(module.structs) == ["WIDGET_SIZE"]
        assert list(module.interfaces) == ["IWidget"]
        assert list(module.delegates) == ["PFN_WIDGET_CALLBACK"]
        assert module.entity_count() == 6

    @pytest.mark.unit
    def test_other_namespaces_are_ignored(self, test_profile):
        module = classify(test_profile, iunknown(), interface("IWidget"))
        assert list(module.interfaces) == ["IWidget"]

    @pytest.mark.unit
    def test_unrecognized_shape_is_fatal(self, test_profile):
        plain_class = {"namespace": TEST_NAMESPACE, "name": "WidgetHelper", "base_type": "System.Object"}

        with pytest.raises(UnsupportedEntityShape) as exc_info:
            classify(test_profile, plain_class)
        assert exc_info.value.entity == f"{TEST_NAMESPACE}.WidgetHelper"

    @pytest.mark.unit
    def test_excluded_enums_are_skipped(self, test_profile):
        module = classify(
            test_profile,
            enum("DWRITE_MEASURING_MODE", [("DWRITE_MEASURING_MODE_NATURAL", 0)]),
            enum("WIDGET_KIND", [("WIDGET_KIND_A", 0)]),
        )
        assert list(module.enums) == ["WIDGET_KIND"]

    @pytest.mark.unit
    def test_nested_types_are_not_top_level_entities(self, test_profile):
        outer = f"{TEST_NAMESPACE}.WIDGET_VALUE"
        module = classify(
            test_profile,
            struct("WIDGET_VALUE", [field("Anonymous", named("_Anonymous_e__Union", "", True, outer))]),
            struct("_Anonymous_e__Union", [field("asInt", prim("Int32"))], union=True,
                   declaring_type=outer),
        )
        assert list(module.structs) == ["WIDGET_VALUE"]


class TestConstants:
    """Constant descriptors from the globals container."""

    @pytest.mark.unit
    def test_scalar_kinds(self, test_profile):
        module = classify(
            test_profile,
            apis(fields=[
                field("SIGNED", prim("Int32"), constant=("Int32", -3)),
                field("UNSIGNED", prim("UInt32"), constant=("UInt32", 0x80000000)),
                field("SCALE", prim("Single"), constant=("Single", 0.5)),
                field("E_WIDGET", hresult(), constant=("Int32", -2003283964)),
            ]),
        )

        constants = module.constants
        assert constants["SIGNED"].kind is ConstantKind.SIGNED
        assert constants["SIGNED"].value == -3
        assert constants["UNSIGNED"].kind is ConstantKind.UNSIGNED
        assert constants["SCALE"].kind is ConstantKind.FLOAT
        assert constants["E_WIDGET"].kind is ConstantKind.RESULT_CODE
        assert constants["E_WIDGET"].value == 0x88985004

    @pytest.mark.unit
    def test_guid_constant(self, test_profile):
        module = classify(
            test_profile,
            apis(fields=[
                field("CLSID_Widget", named("Guid", "System", True), attributes=[guid_attr()]),
            ]),
        )

        constant = module.constants["CLSID_Widget"]
        assert constant.kind is ConstantKind.GUID
        assert constant.guid is not None
        assert constant.guid.data1 == 0xB859EE5A

    @pytest.mark.unit
    def test_guid_constant_without_attribute_is_fatal(self, test_profile):
        with pytest.raises(MissingMetadataError):
            classify(test_profile, apis(fields=[field("CLSID_Widget", named("Guid", "System", True))]))

    @pytest.mark.unit
    def test_scalar_without_value_is_fatal(self, test_profile):
        with pytest.raises(MissingMetadataError):
            classify(test_profile, apis(fields=[field("WIDGET_MAX", prim("Int32"))]))

    @pytest.mark.unit
    def test_unsupported_element_type(self, test_profile):
        with pytest.raises(UnsupportedConstantKind):
            classify(test_profile, apis(fields=[field("BIG", prim("Int64"), constant=("Int64", 1))]))


class TestEnums:
    """Enum descriptors."""

    @pytest.mark.unit
    def test_members_keep_order_and_skip_special_names(self, test_profile):
        module = classify(test_profile, enum("WIDGET_KIND", [("B", 1), ("A", 0), ("NEG", -1)]))

        members = module.enums["WIDGET_KIND"].members
        assert [m.name for m in members] == ["B", "A", "NEG"]
        assert [m.value for m in members] == [1, 0, -1]
        assert not any(m.is_unsigned for m in members)

    @pytest.mark.unit
    def test_unsigned_enum(self, test_profile):
        module = classify(test_profile, enum("WIDGET_FLAGS", [("ALL", 0xFFFFFFFF)], element_type="UInt32"))
        assert module.enums["WIDGET_FLAGS"].members[0].is_unsigned

    @pytest.mark.unit
    def test_other_underlying_type_is_rejected(self, test_profile):
        with pytest.raises(UnsupportedConstantKind):
            classify(test_profile, enum("WIDGET_BYTE", [("ONE", 1)], element_type="Byte"))


class TestStructs:
    """Struct descriptors: arrays, nested aggregates and bitfields."""

    @pytest.mark.unit
    def test_fields_keep_layout_order(self, test_profile):
        module = classify(
            test_profile,
            struct("WIDGET_RECT", [
                field("left", prim("Single")),
                field("top", prim("Single")),
                field("matrix", arr(prim("Single"), 6)),
            ]),
        )

        rect = module.structs["WIDGET_RECT"]
        assert [f.name for f in rect.fields] == ["left", "top", "matrix"]
        assert rect.fields[2].is_array
        assert rect.fields[2].array_length == 6
        assert rect.fields[2].type.name == "Single"
        assert not rect.is_union

    @pytest.mark.unit
    def test_explicit_layout_is_union(self, test_profile):
        module = classify(test_profile, struct("WIDGET_VALUE", [field("i", prim("Int32"))], union=True))
        assert module.structs["WIDGET_VALUE"].keyword == "union"

    @pytest.mark.unit
    def test_nested_aggregate(self, test_profile):
        outer = f"{TEST_NAMESPACE}.WIDGET_VALUE"
        module = classify(
            test_profile,
            struct("WIDGET_VALUE", [
                field("kind", prim("UInt32")),
                field("Anonymous", named("_Anonymous_e__Union", "", True, outer)),
            ]),
            struct("_Anonymous_e__Union", [
                field("asInt", prim("Int32")),
                field("asFloat", prim("Single")),
            ], union=True, declaring_type=outer),
        )

        nested_field = module.structs["WIDGET_VALUE"].fields[1]
        assert nested_field.is_nested
        assert nested_field.nested.is_union
        assert [f.name for f in nested_field.nested.fields] == ["asInt", "asFloat"]

    @pytest.mark.unit
    def test_contiguous_bitfields_are_accepted(self, test_profile):
        module = classify(
            test_profile,
            struct("WIDGET_FLAGS", [
                field("_bitfield", prim("UInt32"), attributes=[
                    bitfield_attr("isRightToLeft", 1, 1),
                    bitfield_attr("isSideways", 0, 1),
                    bitfield_attr("reserved", 2, 30),
                ]),
            ]),
        )

        groups = module.structs["WIDGET_FLAGS"].fields[0].bitfields
        assert [(g.name, g.offset, g.length) for g in groups] == [
            ("isSideways", 0, 1),
            ("isRightToLeft", 1, 1),
            ("reserved", 2, 30),
        ]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "offsets",
        [(1, 2, 3), (0, 2, 3), (0, 1, 1), (0, 0, 2)],
        ids=["not-from-zero", "gap", "overlap", "duplicate"],
    )
    def test_non_contiguous_bitfields_are_rejected(self, test_profile, offsets):
        attributes = [
            bitfield_attr(name, offset, length)
            for name, offset, length in zip(("a", "b", "c"), offsets, (1, 1, 30))
        ]

        with pytest.raises(InvalidBitfieldLayout):
            classify(test_profile, struct("WIDGET_FLAGS", [
                field("_bitfield", prim("UInt32"), attributes=attributes),
            ]))

    @pytest.mark.unit
    def test_bitfields_overflowing_backing_field_are_rejected(self, test_profile):
        with pytest.raises(InvalidBitfieldLayout):
            classify(test_profile, struct("WIDGET_FLAGS", [
                field("_bitfield", prim("Byte"), attributes=[
                    bitfield_attr("low", 0, 4),
                    bitfield_attr("high", 4, 5),
                ]),
            ]))

    @pytest.mark.unit
    def test_bitfields_on_other_field_are_rejected(self, test_profile):
        with pytest.raises(InvalidBitfieldLayout):
            classify(test_profile, struct("WIDGET_FLAGS", [
                field("flags", prim("UInt32"), attributes=[bitfield_attr("low", 0, 4)]),
            ]))


class TestInterfacesAndCallables:
    """Interface, delegate and function descriptors."""

    @pytest.mark.unit
    def test_interface_descriptor(self, test_profile):
        module = classify(
            test_profile,
            iunknown(),
            interface("IWidget", [
                method("Draw", params=[param("rect", ptr(named("WIDGET_RECT", value_type=True)), const=True)]),
                method("Resize", deprecated="Use SetSize instead"),
            ], base=f"{COM_NAMESPACE}.IUnknown"),
        )

        widget = module.interfaces["IWidget"]
        assert widget.base == f"{COM_NAMESPACE}.IUnknown"
        assert widget.guid is not None
        assert [m.name for m in widget.methods] == ["Draw", "Resize"]
        assert widget.methods[0].parameters[0].is_const
        assert widget.methods[0].deprecation is None
        assert widget.methods[1].deprecation == "Use SetSize instead"

    @pytest.mark.unit
    def test_multiple_bases_are_rejected(self, test_profile):
        bases = [named("IUnknown", COM_NAMESPACE), named("IOther")]
        with pytest.raises(UnsupportedEntityShape):
            classify(test_profile, interface("IWidget", bases=bases))

    @pytest.mark.unit
    def test_lookup_interface_leaves_the_namespace(self, test_profile):
        classifier = TypeClassifier(repository(iunknown()), test_profile)

        unknown = classifier.lookup_interface(f"{COM_NAMESPACE}.IUnknown")
        assert unknown.name == "IUnknown"
        assert unknown.base is None
        assert classifier.lookup_interface(f"{COM_NAMESPACE}.IUnknown") is unknown

    @pytest.mark.unit
    def test_lookup_of_missing_interface_fails(self, test_profile):
        classifier = TypeClassifier(repository(), test_profile)
        with pytest.raises(UnknownTypeError):
            classifier.lookup_interface(f"{COM_NAMESPACE}.IMissing")

    @pytest.mark.unit
    def test_delegate_uses_invoke_signature(self, test_profile):
        module = classify(
            test_profile,
            delegate("PFN_WIDGET_CALLBACK", prim("Int32"), [param("context", ptr(void()))]),
        )

        signature = module.delegates["PFN_WIDGET_CALLBACK"].signature
        assert signature.name == "Invoke"
        assert [p.name for p in signature.parameters] == ["context"]

    @pytest.mark.unit
    def test_delegate_without_invoke_is_rejected(self, test_profile):
        entry = delegate("PFN_WIDGET_CALLBACK", void(), [])
        entry["methods"] = entry["methods"][:1]
        with pytest.raises(UnsupportedEntityShape):
            classify(test_profile, entry)


class TestSharedNamespace:
    """Allow-listed imports from the shared sub-namespace."""

    @pytest.mark.unit
    def test_only_allow_listed_entities_are_imported(self):
        module = classify(
            DIRECT2D_PROFILE,
            interface("ID2D1Resource", namespace=DIRECT2D_NAMESPACE),
            enum("D2D1_FILL_MODE", [("D2D1_FILL_MODE_ALTERNATE", 0)], namespace=DIRECT2D_COMMON_NAMESPACE),
            enum("D2D1_ALPHA_MODE", [("D2D1_ALPHA_MODE_UNKNOWN", 0)], namespace=DIRECT2D_COMMON_NAMESPACE),
            struct("D2D1_BEZIER_SEGMENT", [field("point1", prim("Single"))], namespace=DIRECT2D_COMMON_NAMESPACE),
            struct("D2D_POINT_2F", [field("x", prim("Single"))], namespace=DIRECT2D_COMMON_NAMESPACE),
            interface("ID2D1SimplifiedGeometrySink", namespace=DIRECT2D_COMMON_NAMESPACE),
        )

        assert sorted(module.interfaces) == ["ID2D1Resource", "ID2D1SimplifiedGeometrySink"]
        assert list(module.enums) == ["D2D1_FILL_MODE"]
        assert list(module.structs) == ["D2D1_BEZIER_SEGMENT"]

    @pytest.mark.unit
    def test_shared_delegate_is_rejected(self):
        profile = NamespaceProfile(
            namespace=TEST_NAMESPACE,
            output_file="ctest.h",
            library="test",
            includes=(),
            shared_namespace="Test.Shared",
            shared_allow_list=frozenset({"PFN_SHARED"}),
        )
        with pytest.raises(UnsupportedEntityShape):
            classify(profile, delegate("PFN_SHARED", void(), [], namespace="Test.Shared"))

    @pytest.mark.unit
    def test_fresh_module_per_pass(self, test_profile):
        classifier = TypeClassifier(repository(interface("IWidget")), test_profile)
        first = classifier.classify()
        second = classifier.classify()
        assert first is not second
        assert first.interfaces.keys() == second.interfaces.keys()
