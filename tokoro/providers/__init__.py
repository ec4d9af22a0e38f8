"""Concrete adapters for the interfaces in ``tokoro.interfaces``."""
