# aeroperf/exceptions.py

"""
Error types raised by the parameter provider and the performance models.
All failures come from static aircraft/engine data, none are retriable.
"""


class AeroPerfError(Exception):
    """Base class for all aeroperf errors."""


class ResolutionError(AeroPerfError, LookupError):
    """An aircraft, engine or table code cannot be resolved, directly or via synonym."""


class ConfigurationError(AeroPerfError, ValueError):
    """A resolved record lacks a field the requested operation needs."""


class CompatibilityError(AeroPerfError, ValueError):
    """The engine is not among the options listed for the aircraft."""
