#!/usr/bin/env python3

"""Static per-namespace output templates.

Each profile describes the fixed parts of one header: where it goes, what it
includes, which native library it links, which types the other header owns
and which entities are borrowed from a shared sub-namespace. These are
templates, not computed data.
"""

from dataclasses import dataclass, field

DIRECTWRITE_NAMESPACE = "Windows.Win32.Graphics.DirectWrite"
DIRECT2D_NAMESPACE = "Windows.Win32.Graphics.Direct2D"
DIRECT2D_COMMON_NAMESPACE = "Windows.Win32.Graphics.Direct2D.Common"

# Declared by dcommon.h, which both headers include
DCOMMON_TYPES = frozenset({"DWRITE_MEASURING_MODE", "DWRITE_GLYPH_IMAGE_FORMATS"})

# Enums whose alias has a non-default underlying type in dcommon.h
ENUM_TAG_TYPES = frozenset({"DWRITE_GLYPH_IMAGE_FORMATS"})


@dataclass(frozen=True)
class NamespaceProfile:
    """Fixed template for one generated header."""

    namespace: str
    output_file: str
    library: str
    includes: tuple[str, ...]
    type_aliases: tuple[str, ...] = ()
    forward_interfaces: tuple[tuple[str, str], ...] = ()
    excluded_types: frozenset[str] = DCOMMON_TYPES
    enum_tag_types: frozenset[str] = ENUM_TAG_TYPES
    shared_namespace: str | None = None
    shared_allow_list: frozenset[str] = field(default_factory=frozenset)


DIRECTWRITE_PROFILE = NamespaceProfile(
    namespace=DIRECTWRITE_NAMESPACE,
    output_file="cdwrite.h",
    library="dwrite",
    includes=("combaseapi.h", "dcommon.h"),
    forward_interfaces=(
        ("ID2D1SimplifiedGeometrySink", "ID2D1SimplifiedGeometrySink"),
        ("ID2D1SimplifiedGeometrySink", "IDWriteGeometrySink"),
    ),
)

DIRECT2D_PROFILE = NamespaceProfile(
    namespace=DIRECT2D_NAMESPACE,
    output_file="cd2d.h",
    library="d2d1",
    includes=("combaseapi.h", "dxgicommon.h", "d3dcommon.h", "d2dbasetypes.h", "dcommon.h"),
    type_aliases=(
        "typedef D2D_COLOR_F D2D1_COLOR_F;",
        "typedef struct DWRITE_GLYPH_RUN DWRITE_GLYPH_RUN;",
        "typedef struct DWRITE_GLYPH_RUN_DESCRIPTION DWRITE_GLYPH_RUN_DESCRIPTION;",
    ),
    forward_interfaces=tuple(
        (name, name)
        for name in (
            "IDXGIDevice",
            "IDXGISurface",
            "IWICImagingFactory",
            "IDWriteTextFormat",
            "IDWriteTextLayout",
            "IDWriteRenderingParams",
            "IDWriteFontFace",
            "IWICBitmapSource",
            "IWICBitmap",
            "IWICColorContext",
            "IPrintDocumentPackageTarget",
        )
    ),
    shared_namespace=DIRECT2D_COMMON_NAMESPACE,
    # Only what dcommon.h does not already declare
    shared_allow_list=frozenset(
        {
            "D2D1_COMPOSITE_MODE",
            "D2D1_BLEND_MODE",
            "D2D1_FILL_MODE",
            "D2D1_PATH_SEGMENT",
            "D2D1_FIGURE_BEGIN",
            "D2D1_FIGURE_END",
            "D2D1_BEZIER_SEGMENT",
            "ID2D1SimplifiedGeometrySink",
        }
    ),
)

BUILTIN_PROFILES: tuple[NamespaceProfile, ...] = (DIRECTWRITE_PROFILE, DIRECT2D_PROFILE)


def get_profile(namespace: str) -> NamespaceProfile:
    """Look up a built-in profile by namespace.

    Raises:
        KeyError: If no built-in profile covers the namespace
    """
    for profile in BUILTIN_PROFILES:
        if profile.namespace == namespace:
            return profile
    raise KeyError(f"No header profile for namespace: {namespace}")
