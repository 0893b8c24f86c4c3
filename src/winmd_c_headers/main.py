"""Main entry point for the winmd C header generator."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from .application.generators import HeaderGenerator
from .domain.errors import HeaderGenerationError
from .domain.models import BUILTIN_PROFILES, NamespaceProfile, get_profile
from .infrastructure.config import Config
from .infrastructure.logging import LoggerSetup, get_logger, log_banner, log_timing


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate C headers for the Direct2D and DirectWrite COM interfaces "
        "from Windows metadata",
        epilog="""
Examples:
  # Generate cdwrite.h and cd2d.h into ./output
  winmd-c-headers resources/Windows.Win32.winmd.json.gz

  # Generate only the DirectWrite header
  winmd-c-headers resources/Windows.Win32.winmd.json.gz --namespace Windows.Win32.Graphics.DirectWrite

  # Custom output directory with debug logs
  winmd-c-headers resources/Windows.Win32.winmd.json.gz -o include/ --verbose

  # Show which namespaces the metadata contains
  winmd-c-headers resources/Windows.Win32.winmd.json.gz --list-namespaces

  # Using .env file for configuration
  echo 'METADATA_FILE_PATH=resources/Windows.Win32.winmd.json.gz' > .env
  winmd-c-headers
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "metadata_file",
        type=Path,
        nargs="?",
        help="Path to the metadata dump (.json or .json.gz, optional if using .env)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output directory for generated headers (default: ./output)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output with debug logs",
    )
    parser.add_argument(
        "--namespace",
        action="append",
        metavar="NAME",
        help="Generate only this namespace (repeatable). Defaults to all built-in headers",
    )
    parser.add_argument(
        "--list-namespaces",
        action="store_true",
        help="Print the namespaces present in the metadata and exit",
    )
    return parser.parse_args(argv)


def select_profiles(namespaces: list[str] | None) -> list[NamespaceProfile]:
    """Map requested namespaces to profiles, all built-in ones when none are given.

    Raises:
        KeyError: If a namespace has no built-in profile
    """
    if not namespaces:
        return list(BUILTIN_PROFILES)
    return [get_profile(namespace) for namespace in namespaces]


@log_timing
def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for metadata-to-C header generation."""
    args = parse_args(argv)

    # Load configuration
    try:
        config = Config.from_args(
            metadata_file_path=args.metadata_file,
            output_dir=args.output,
            verbose=args.verbose,
        )
        config.validate()
    except Exception as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    LoggerSetup.initialize(config.log_dir, verbose=config.verbose)
    logger = get_logger(__name__)

    logger.debug(f"Metadata file: {config.metadata_file_path}")
    logger.debug(f"Output directory: {config.output_dir}")

    if args.list_namespaces:
        try:
            with HeaderGenerator(config.metadata_file_path) as generator:
                for namespace in generator.namespaces():
                    print(namespace)
        except HeaderGenerationError as e:
            logger.error(f"Could not read metadata: {e}")
            sys.exit(1)
        sys.exit(0)

    try:
        profiles = select_profiles(args.namespace)
    except KeyError as e:
        logger.error(e.args[0])
        sys.exit(1)

    config.ensure_output_dir()
    logger.info(f"Generating {len(profiles)} header(s)")

    try:
        with HeaderGenerator(config.metadata_file_path) as generator:
            written = generator.write_headers(profiles, config.output_dir)
    except HeaderGenerationError as e:
        logger.error(f"[FAILED] {type(e).__name__}: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error during generation: {e}")
        if config.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    log_banner(logger, "GENERATION SUMMARY")
    logger.info(f"Headers written: {len(written)}")
    for path in written:
        logger.info(f"  - {path}")

    sys.exit(0)


if __name__ == "__main__":
    main()
