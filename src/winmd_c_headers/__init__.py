"""winmd-c-headers - C headers for COM interfaces generated from Windows metadata."""

from .application.generators import HeaderGenerator
from .infrastructure.config import Config
from .main import main

__all__ = ["Config", "HeaderGenerator", "main"]
