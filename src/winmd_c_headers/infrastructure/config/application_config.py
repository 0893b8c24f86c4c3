#!/usr/bin/env python3

"""Run configuration for the header generator."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_METADATA_FILE = "resources/Windows.Win32.winmd.json.gz"
DEFAULT_OUTPUT_DIR = "output"


@dataclass
class Config:
    """Configuration for one generator run."""

    metadata_file_path: Path
    output_dir: Path
    verbose: bool = False
    log_dir: Path = Path("logs")

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from environment variables or a .env file.

        Args:
            env_path: Optional path to .env file (defaults to .env in current directory)

        Returns:
            Config object
        """
        if env_path is None:
            env_path = Path.cwd() / ".env"

        if env_path.exists():
            load_dotenv(env_path)

        metadata_file_path = Path(os.getenv("METADATA_FILE_PATH", DEFAULT_METADATA_FILE))
        output_dir = Path(os.getenv("OUTPUT_DIR", DEFAULT_OUTPUT_DIR))
        verbose = os.getenv("VERBOSE", "false").lower() in ("true", "1", "yes")

        return cls(metadata_file_path=metadata_file_path, output_dir=output_dir, verbose=verbose)

    @classmethod
    def from_args(
        cls,
        metadata_file_path: Optional[Path] = None,
        output_dir: Optional[Path] = None,
        verbose: Optional[bool] = None,
    ) -> "Config":
        """
        Create configuration from explicit arguments, falling back to environment.

        Args:
            metadata_file_path: Metadata dump to read (overrides env)
            output_dir: Output directory (overrides env)
            verbose: Enable verbose output (overrides env)

        Returns:
            Config object
        """
        config = cls.from_env()

        if metadata_file_path is not None:
            config.metadata_file_path = metadata_file_path
        if output_dir is not None:
            config.output_dir = output_dir
        if verbose:
            config.verbose = verbose

        return config

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.metadata_file_path.exists():
            raise ValueError(f"Metadata file not found: {self.metadata_file_path}")

        if not self.metadata_file_path.is_file():
            raise ValueError(f"Not a file: {self.metadata_file_path}")

    def ensure_output_dir(self) -> None:
        """Create the output directory if it doesn't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
