"""Infrastructure configuration module."""

from .application_config import Config
from .generation_config import get_generation_config

__all__ = ["Config", "get_generation_config"]
