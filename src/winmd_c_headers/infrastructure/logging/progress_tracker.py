#!/usr/bin/env python3

"""Progress tracking for namespace generation passes."""

import logging
from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from time import time

import psutil


class ProgressTracker:
    """
    Track and report generation progress with per-namespace statistics.

    Times each namespace pass, counts the entities emitted per kind and
    reports a summary at the end of the run.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize progress tracker.

        Args:
            logger: Logger instance for progress reporting
        """
        self.logger = logger
        self.start_time = time()
        self.namespace_count = 0
        self.entity_counts: Counter[str] = Counter()

    @contextmanager
    def track_operation(self, operation_name: str) -> Iterator[None]:
        """
        Track a named operation with timing.

        Args:
            operation_name: Name of the operation being tracked
        """
        start_time = time()
        self.logger.debug(f"Starting operation: {operation_name}")

        try:
            yield
            elapsed = time() - start_time
            self.logger.debug(f"Completed operation: {operation_name} in {elapsed:.3f}s")
        except Exception as e:
            elapsed = time() - start_time
            self.logger.error(f"Failed operation: {operation_name} after {elapsed:.3f}s: {e}")
            raise

    @contextmanager
    def track_namespace(self, namespace: str) -> Iterator[None]:
        """
        Track one namespace pass.

        Args:
            namespace: Namespace being emitted
        """
        self.namespace_count += 1
        start_time = time()
        self.logger.debug(f"Processing namespace #{self.namespace_count}: {namespace}")

        try:
            with self.track_operation(namespace):
                yield
        except Exception as e:
            elapsed = time() - start_time
            self.logger.error(f"Namespace {namespace} failed after {elapsed:.3f}s: {e}")
            raise

        elapsed = time() - start_time
        self.logger.debug(f"Namespace {namespace} completed in {elapsed:.3f}s")

    def count_entities(self, kind: str, count: int = 1) -> None:
        """Add emitted entities of one kind to the statistics."""
        self.entity_counts[kind] += count

    def report_summary(self) -> None:
        """Report final processing statistics."""
        total_time = time() - self.start_time
        total_entities = sum(self.entity_counts.values())
        breakdown = ", ".join(
            f"{count} {kind}" for kind, count in sorted(self.entity_counts.items())
        )

        self.logger.info(
            f"Processing complete: {self.namespace_count} namespace(s), "
            f"{total_entities} entities in {total_time:.2f}s"
        )
        if breakdown:
            self.logger.debug(f"Entity breakdown: {breakdown}")

    def log_memory_usage(self) -> None:
        """Log the resident memory of the current process."""
        memory_mb = psutil.Process().memory_info().rss / 1024 / 1024
        self.logger.debug(f"Memory usage: {memory_mb:.1f} MB")

