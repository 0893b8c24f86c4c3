"""Pytest configuration and shared fixtures."""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from winmd_c_headers.domain.models import NamespaceProfile
from winmd_c_headers.domain.repositories import InMemoryMetadataRepository
from winmd_c_headers.infrastructure.config import get_generation_config
from winmd_c_headers.infrastructure.logging import LoggerSetup

from metadata_builders import (
    TEST_NAMESPACE,
    interface,
    method,
    param,
    prim,
    ptr,
    repository,
)


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def test_profile() -> NamespaceProfile:
    """Minimal profile for the test namespace."""
    return NamespaceProfile(
        namespace=TEST_NAMESPACE,
        output_file="ctest.h",
        library="test",
        includes=("combaseapi.h",),
    )


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> dict:
    """Generation settings with no environment overrides."""
    for key in ("RETURN_TYPE_WIDTH", "METHOD_NAME_WIDTH", "INDENT_WIDTH",
                "GENERALIZE_AGGREGATE_RETURNS", "BANNER"):
        monkeypatch.delenv(f"WINMD_{key}", raising=False)
    return get_generation_config()


@pytest.fixture
def foo_bar_repository() -> InMemoryMetadataRepository:
    """
    IFoo (no base) with Get/Set and IBar deriving from IFoo with its own Get.

    IBar's Get collides with the inherited one and must be renamed.
    """
    return repository(
        interface(
            "IFoo",
            [
                method("Get", params=[param("value", ptr(prim("Int32")))]),
                method("Set", params=[param("value", prim("Int32"))]),
            ],
        ),
        interface(
            "IBar",
            [
                method("Get", params=[
                    param("first", ptr(prim("Int32"))),
                    param("second", ptr(prim("Int32"))),
                ]),
            ],
            base=f"{TEST_NAMESPACE}.IFoo",
        ),
    )


@pytest.fixture
def com_chain_repository() -> InMemoryMetadataRepository:
    """IRoot -> IMid -> ILeaf with method counts 2, 1, 3."""
    return repository(
        interface("IRoot", [method("Acquire"), method("Release", prim("UInt32"))]),
        interface("IMid", [method("Flush")], base=f"{TEST_NAMESPACE}.IRoot"),
        interface(
            "ILeaf",
            [method("Open"), method("Read"), method("Close")],
            base=f"{TEST_NAMESPACE}.IMid",
        ),
    )


@pytest.fixture
def clean_logging() -> Generator[None, None, None]:
    """Undo LoggerSetup handlers installed by a test."""
    LoggerSetup.reset()
    yield
    LoggerSetup.reset()
