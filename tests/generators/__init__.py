"""Header generation tests."""
