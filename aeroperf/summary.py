# aeroperf/summary.py

"""
Single flight-state performance summary, used by the explorer front-end.
"""

from . import aero
from .aircraft_loader import get_default_provider
from .emission import Emission
from .fuel import FuelFlow


def performance_summary(ac, eng=None, mass_kg=None, tas_kts=None, alt_ft=0, vs_fpm=0,
                        flap_angle_deg=0, landing_gear=False, use_synonym=False, provider=None):
    """
    Evaluate atmosphere, speeds, thrust, drag, fuel flow and emissions for
    one flight state.

    Drag is the clean value unless flaps are deflected or the gear is down.

    Returns:
        Dict of scalar results, SI units except where the key says otherwise.
    """
    if mass_kg is None or tas_kts is None:
        raise ValueError("Mass and TAS are required for a performance summary")

    provider = provider or get_default_provider()
    fuelflow = FuelFlow(ac, eng, use_synonym=use_synonym, provider=provider)
    emission = Emission(ac, fuelflow.engine.name, use_synonym=use_synonym, provider=provider)
    thrust = fuelflow.thrust
    drag = fuelflow.drag

    atmos = aero.compute_atmosphere(alt_ft * aero.FT)

    if flap_angle_deg or landing_gear:
        D = drag.nonclean(mass_kg, tas_kts, alt_ft, flap_angle_deg, vs_fpm, landing_gear)
    else:
        D = drag.clean(mass_kg, tas_kts, alt_ft, vs_fpm)

    ff = fuelflow.enroute(mass_kg, tas_kts, alt_ft, vs_fpm)

    return {
        "aircraft": fuelflow.aircraft.code,
        "engine": fuelflow.engine.name,
        "pressure": atmos.pressure,
        "density": atmos.density,
        "temperature": atmos.temperature,
        "cas_kts": aero.tas_to_cas_kts(tas_kts, alt_ft),
        "mach": aero.tas_to_mach_kts(tas_kts, alt_ft),
        "thrust_takeoff": thrust.takeoff(tas_kts, alt_ft),
        "thrust_climb": thrust.climb(tas_kts, alt_ft, vs_fpm),
        "thrust_idle": thrust.descent_idle(tas_kts, alt_ft),
        "drag": D,
        "fuel_flow": ff,
        "co2": emission.co2(ff),
        "h2o": emission.h2o(ff),
        "soot": emission.soot(ff),
        "sox": emission.sox(ff),
        "nox": emission.nox(ff, tas_kts, alt_ft),
        "co": emission.co(ff, tas_kts, alt_ft),
        "hc": emission.hc(ff, tas_kts, alt_ft),
    }
