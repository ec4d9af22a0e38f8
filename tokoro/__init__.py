"""Tokoro: places, blogs, reviews and AI tag search over a MongoDB document store."""

__version__ = "0.1.0"
