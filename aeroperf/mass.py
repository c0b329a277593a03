# aeroperf/mass.py

"""
Take-off mass estimate from mission range.
"""

from .aircraft_loader import get_default_provider
from .constants import (
    DEFAULT_LOAD_FACTOR,
    FUEL_DENSITY_KG_L,
    RANGE_FRACTION_MAX,
    RANGE_FRACTION_MIN,
)
from .exceptions import ConfigurationError


def from_range(ac, distance_km, load_factor=DEFAULT_LOAD_FACTOR, fraction=False,
               use_synonym=False, provider=None):
    """
    Estimate the take-off mass for a mission distance.

    Fuel is the range fraction (distance over the aircraft's cruise range,
    clamped to [0.2, 1.0]) of the maximum fuel weight; payload is the load
    factor times what MTOW leaves after full fuel and OEW.

    Args:
        ac: ICAO aircraft type code.
        distance_km: Mission distance in km.
        load_factor: Payload load factor, 0 to 1.
        fraction: Return mass as a fraction of MTOW instead of kg.

    Returns:
        Mass in kg, or the MTOW fraction.

    Raises:
        ConfigurationError: Cruise range, MTOW or OEW missing from the record.
    """
    provider = provider or get_default_provider()
    spec = provider.aircraft(ac, use_synonym)
    code = spec.code

    if spec.cruise is None or not spec.cruise.range:
        raise ConfigurationError(f"Cruise range not specified for aircraft {code}.")
    limits = spec.limits
    if not limits.mtow:
        raise ConfigurationError(f"MTOW not specified for aircraft {code}.")
    if limits.oew is None:
        raise ConfigurationError(f"OEW not specified for aircraft {code}.")

    range_fraction = distance_km / spec.cruise.range
    range_fraction = min(max(range_fraction, RANGE_FRACTION_MIN), RANGE_FRACTION_MAX)

    # mfc is in liters
    max_fuel_weight = (limits.mfc or 0.0) * FUEL_DENSITY_KG_L
    fuel_weight = range_fraction * max_fuel_weight

    payload_weight = (limits.mtow - max_fuel_weight - limits.oew) * load_factor

    mass = limits.oew + fuel_weight + payload_weight

    if fraction:
        return mass / limits.mtow
    return mass
