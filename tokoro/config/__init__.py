"""Configuration module: exports Settings and load_config."""

from tokoro.config.loader import load_config
from tokoro.config.settings import Settings

__all__ = ["Settings", "load_config"]
