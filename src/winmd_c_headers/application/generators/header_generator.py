#!/usr/bin/env python3

"""Metadata-to-C-header generator orchestrator (Application Layer).

Drives one pass per namespace through the modular components:
- TypeClassifier: partitions the namespace into declaration descriptors
- TypeNameResolver: maps type references to C names
- DeclarationEmitter: renders the header, delegating struct ordering and
  interface wrappers to their own services

Nothing survives a pass except the read-only repository; every header is
rendered completely in memory before it is written.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ...domain.models import NamespaceProfile, get_profile
from ...domain.repositories import MetadataRepository
from ...domain.services.generation import DeclarationEmitter
from ...domain.services.parsing import TypeClassifier, TypeNameResolver
from ...infrastructure.config import get_generation_config
from ...infrastructure.logging import ProgressTracker, get_logger, log_timing
from ...infrastructure.metadata import MetadataLoader

logger = get_logger(__name__)


class HeaderGenerator:
    """Generates C headers for COM namespaces of a metadata set.

    Usable as a context manager: the metadata dump is loaded on entry unless
    a repository was handed in directly.
    """

    def __init__(
        self,
        metadata_path: Path | None = None,
        repository: MetadataRepository | None = None,
        settings: dict[str, Any] | None = None,
    ) -> None:
        """Initialize generator.

        Args:
            metadata_path: Metadata dump to load on entry
            repository: Already loaded metadata, takes precedence over the path
            settings: Generation settings, defaults to ``get_generation_config()``

        Raises:
            ValueError: If neither a path nor a repository is given
        """
        if metadata_path is None and repository is None:
            raise ValueError("Either metadata_path or repository is required")

        self.metadata_path = metadata_path
        self.repository = repository
        self.settings = settings if settings is not None else get_generation_config()
        self.progress = ProgressTracker(logger)

    def __enter__(self) -> "HeaderGenerator":
        """Context manager entry - loads the metadata dump if needed."""
        if self.repository is None:
            assert self.metadata_path is not None
            self.repository = MetadataLoader.load(self.metadata_path)
            logger.info(f"Metadata loaded from {self.metadata_path}")
        self.progress.log_memory_usage()
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: Exception | None, exc_tb: object | None
    ) -> None:
        """Context manager exit - reports statistics of the run."""
        if exc_type is None:
            self.progress.report_summary()
        self.progress.log_memory_usage()

    def namespaces(self) -> list[str]:
        """List the namespaces present in the metadata."""
        assert self.repository is not None
        return self.repository.namespaces()

    def generate(self, namespace: str) -> str:
        """Generate the header text for a namespace with a built-in profile.

        Args:
            namespace: Namespace to generate, e.g. ``Windows.Win32.Graphics.Direct2D``

        Returns:
            Complete header text

        Raises:
            KeyError: If no built-in profile covers the namespace
            HeaderGenerationError: If the metadata violates a generation assumption
        """
        return self.generate_profile(get_profile(namespace))

    @log_timing
    def generate_profile(self, profile: NamespaceProfile) -> str:
        """Run one namespace pass for an explicit profile."""
        assert self.repository is not None, "Use HeaderGenerator as a context manager"
        logger.info(f"Generating header for: {profile.namespace}")

        classifier = TypeClassifier(self.repository, profile)
        resolver = TypeNameResolver(self.repository, profile.enum_tag_types)
        emitter = DeclarationEmitter(resolver, classifier.lookup_interface, self.settings)

        module = classifier.classify()
        header = emitter.emit(module, profile)

        self.progress.count_entities("constants", len(module.constants))
        self.progress.count_entities("typedefs", len(module.delegates))
        self.progress.count_entities("enums", len(module.enums))
        self.progress.count_entities("structs", len(module.structs))
        self.progress.count_entities("interfaces", len(module.interfaces))
        self.progress.count_entities("functions", len(module.functions))

        logger.info(
            f"Header generated for {profile.namespace}: "
            f"{module.entity_count()} entities, {len(header)} bytes"
        )
        return header

    def write_headers(self, profiles: Iterable[NamespaceProfile], output_dir: Path) -> list[Path]:
        """Generate and write one header per profile.

        Every namespace pass runs before the first file is written, so a
        failing pass leaves the output directory untouched.

        Args:
            profiles: Profiles to generate
            output_dir: Directory receiving the header files

        Returns:
            Paths of the written headers in profile order
        """
        rendered: list[tuple[Path, str]] = []
        for profile in profiles:
            with self.progress.track_namespace(profile.namespace):
                rendered.append((output_dir / profile.output_file, self.generate_profile(profile)))

        for output_file, header in rendered:
            output_file.write_text(header, encoding="utf-8")
            logger.info(f"[SUCCESS] Generated: {output_file}")
        return [output_file for output_file, _ in rendered]
