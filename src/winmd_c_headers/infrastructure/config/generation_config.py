#!/usr/bin/env python3

"""Formatting and emission settings with environment overrides."""

import os
from typing import Any

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    # Column widths of interface method wrappers
    "RETURN_TYPE_WIDTH": 33,
    "METHOD_NAME_WIDTH": 61,
    # Spaces per nesting level inside aggregates
    "INDENT_WIDTH": 4,
    # Rewrite aggregate-returning methods that take parameters instead of failing
    "GENERALIZE_AGGREGATE_RETURNS": False,
    # First comment line of every header
    "BANNER": "generated by winmd-c-headers",
}

ENV_PREFIX = "WINMD_"


def get_generation_config() -> dict[str, Any]:
    """Get generation settings with environment variable overrides.

    Every key can be overridden through ``WINMD_<KEY>``; values that do not
    parse as the default's type are ignored.

    Returns:
        Configuration dictionary
    """
    config = DEFAULT_CONFIG.copy()

    for key in config:
        env_value = os.getenv(f"{ENV_PREFIX}{key}")
        if env_value is None:
            continue
        if isinstance(config[key], bool):
            config[key] = env_value.lower() in ("true", "1", "yes", "on")
        elif isinstance(config[key], int):
            try:
                config[key] = int(env_value)
            except ValueError:
                pass
        else:
            config[key] = env_value

    return config
