"""Test suite for the winmd C header generator.

Test Structure:
- config/: Tests for run and generation configuration
- domain/services/parsing/: Tests for classification and type name resolution
- domain/services/generation/: Tests for header text emission
- infrastructure/: Tests for metadata loading and logging
- generators/: End-to-end header generation tests
- test_cli.py: Command line entry point

Run tests with pytest:
    pytest                    # Run all tests
    pytest -m unit            # Run unit tests only
    pytest -m integration     # Run integration tests only
"""

# Individual test modules are discovered automatically by pytest
__version__ = "0.1.0"
