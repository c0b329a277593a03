# aeroperf/fuel.py

"""
Fuel flow model.

Fuel flow is a fitted function of the thrust ratio (thrust over maximum
static thrust of all engines), scaled to the take-off fuel flow of the
engine actually fitted. Enroute fuel flow derives the required thrust from
drag, flight path angle and acceleration.
"""

import math

import numpy as np

from . import aero
from .aircraft_loader import dprint, get_default_provider
from .constants import (
    ACC_LIMIT_MS2,
    DEFAULT_FUEL_MODEL,
    GAMMA_LIMIT_RAD,
    IDLE_THRUST_FACTOR,
    MAX_THRUST_FACTOR,
    THRUST_RATIO_FLOOR,
    THRUST_RATIO_SHARPNESS,
)
from .drag import Drag
from .exceptions import ConfigurationError
from .thrust import Thrust


def fuel_curve(c1, c2, c3, scale=1.0):
    """
    Fitted fuel-flow curve of the thrust ratio x,
    ff(x) = (c1 - exp(-c2 * (x * exp(c3 * x) - ln(c1) / c2))) * scale
    """
    def func(x):
        return (c1 - math.exp(-c2 * (x * math.exp(c3 * x) - math.log(c1) / c2))) * scale
    return func


def soft_thrust_ratio(ratio):
    """Softplus floor at ~0.03, smooth so fuel flow stays differentiable near idle."""
    k = THRUST_RATIO_SHARPNESS
    z = k * (ratio - THRUST_RATIO_FLOOR)
    if z > 30.0:
        # log(1 + e^z) == z to double precision
        return ratio
    return math.log1p(math.exp(z)) / k + THRUST_RATIO_FLOOR


class FuelFlow:
    """
    Fuel flow model for one aircraft/engine combination.

    Args:
        ac: ICAO aircraft type code.
        eng: Engine name or prefix. Defaults to the aircraft's default engine.
        use_synonym: Allow one synonym hop for aircraft and drag polar records.
        provider: ParameterProvider to resolve records with.
    """

    def __init__(self, ac, eng=None, use_synonym=False, provider=None):
        provider = provider or get_default_provider()
        self.aircraft_code = ac.upper()

        self.thrust = Thrust(ac, eng, use_synonym=use_synonym, provider=provider)
        self.drag = Drag(ac, wave_drag=False, use_synonym=use_synonym, provider=provider)

        self.aircraft = self.thrust.aircraft
        self.engine = self.thrust.engine
        self.eng_number = self.thrust.eng_number

        self.fuel_model = provider.fuel_model(ac, self.aircraft.code)
        self.scale = self._engine_scale(provider)
        model = self.fuel_model
        self.func_fuel = fuel_curve(model.c1, model.c2, model.c3, self.scale)

        dprint(
            f"[FUEL] {self.aircraft_code}/{self.engine.name}: "
            f"model '{model.typecode}', scale {self.scale:.4f}"
        )

    def _engine_scale(self, provider):
        """
        Scale of the fitted curve to the fitted engine.

        The default curve is normalized, so it scales with the engine's
        take-off fuel flow. A type-specific curve is in kg/s of its reference
        engine and scales by the ratio of take-off fuel flows.
        """
        model = self.fuel_model
        if model.typecode == DEFAULT_FUEL_MODEL:
            return self.engine.ff_to

        if not model.engine_type:
            raise ConfigurationError(f"Fuel model for {model.typecode.upper()} has no reference engine.")
        ref_engine = provider.engine(model.engine_type)
        if ref_engine.name == self.engine.name:
            return 1.0
        return self.engine.ff_to / ref_engine.ff_to

    def at_thrust(self, total_thrust_n, limit=True):
        """
        Fuel flow (kg/s) at a given total thrust of all engines (N).

        With limit set, the thrust ratio is capped at 1.
        """
        ratio = total_thrust_n / (self.engine.max_thrust * self.eng_number)
        ratio = soft_thrust_ratio(ratio)

        if limit:
            ratio = min(ratio, 1.0)

        return self.func_fuel(ratio)

    def takeoff(self, tas_kts, alt_ft=0, throttle=1):
        """Fuel flow (kg/s) at take-off for a throttle setting between 0 and 1."""
        Tmax = self.thrust.takeoff(tas_kts, alt_ft)
        return self.at_thrust(Tmax * throttle)

    def enroute(self, mass_kg, tas_kts, alt_ft, vs_fpm=0, acc_ms2=0, limit=True):
        """
        Fuel flow (kg/s) during climb, cruise or descent.

        Required thrust is drag plus the weight component along the flight
        path plus the inertial term. With limit set, the flight path angle
        and acceleration are clamped and the thrust is kept between 80% of
        descent idle and 120% of level climb thrust.
        """
        D = self.drag.clean(mass_kg, tas_kts, alt_ft, vs_fpm)

        gamma = aero.compute_flight_path_angle(vs_fpm * aero.FPM, tas_kts * aero.KTS)

        if limit:
            gamma = float(np.clip(gamma, -GAMMA_LIMIT_RAD, GAMMA_LIMIT_RAD))
            acc_ms2 = float(np.clip(acc_ms2, -ACC_LIMIT_MS2, ACC_LIMIT_MS2))

        T = D + mass_kg * aero.G0 * math.sin(gamma) + mass_kg * acc_ms2

        if limit:
            T_max = self.thrust.climb(tas_kts, alt_ft, 0)
            T_idle = self.thrust.descent_idle(tas_kts, alt_ft)
            T = float(np.clip(T, IDLE_THRUST_FACTOR * T_idle, MAX_THRUST_FACTOR * T_max))

        return self.at_thrust(T, limit)
