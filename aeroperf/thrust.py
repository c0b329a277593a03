# aeroperf/thrust.py

"""
Simplified two-shaft turbofan thrust model.

Take-off thrust follows the Bartel & Young (2008) pressure-ratio fits.
Climb and cruise thrust is anchored at a cruise reference point and uses
three altitude segments (<= 10,000 ft, 10,000-30,000 ft, > 30,000 ft).

Inputs: TAS in knots, altitude in feet, rate of climb in ft/min.
Output: total thrust of all engines (N).
"""

import math

from . import aero
from .aircraft_loader import dprint, engine_matches_options, get_default_provider
from .base import ThrustBase
from .constants import CRUISE_THRUST_FRACTION, CRUISE_THRUST_OFFSET, MIN_CLIMB_TAS
from .exceptions import CompatibilityError, ConfigurationError

SEGMENT_1_CEILING_FT = 10000.0
SEGMENT_2_CEILING_FT = 30000.0


class Thrust(ThrustBase):
    """
    Thrust model for one aircraft/engine combination.

    Args:
        ac: ICAO aircraft type code (e.g. "A320").
        eng: Engine name or prefix. Defaults to the aircraft's default engine.
        force_engine: Skip the check that the engine is among the aircraft's options.
        use_synonym: Allow one synonym hop when the aircraft code has no record.
        provider: ParameterProvider to resolve records with.

    Raises:
        ResolutionError: Aircraft or engine cannot be resolved.
        ConfigurationError: No engine installation, default engine or cruise reference.
        CompatibilityError: Engine not permitted on the aircraft.
    """

    def __init__(self, ac, eng=None, force_engine=False, use_synonym=False, provider=None):
        super().__init__(ac)
        provider = provider or get_default_provider()

        self.aircraft = provider.aircraft(ac, use_synonym)
        installation = self.aircraft.engine
        if installation is None:
            raise ConfigurationError(f"Aircraft {self.aircraft_code} has no engine installation data.")

        if not eng:
            eng = installation.default
            if not eng:
                raise ConfigurationError(f"Default engine not specified for aircraft {self.aircraft_code}.")

        self.engine = provider.engine(eng)

        if not force_engine and not engine_matches_options(self.engine.name, installation.options):
            raise CompatibilityError(
                f"Engine {eng} and aircraft {self.aircraft_code} mismatch. "
                f"Available engines for {self.aircraft_code} are {list(installation.options)}"
            )

        self.eng_bpr = self.engine.bpr
        self.eng_max_thrust = self.engine.max_thrust
        self.eng_number = installation.number

        if self.engine.cruise_mach and self.engine.cruise_thrust:
            self.cruise_mach = self.engine.cruise_mach
            self.eng_cruise_thrust = self.engine.cruise_thrust
            self.cruise_alt = self.engine.cruise_alt or self._aircraft_cruise_alt()
        else:
            cruise = self.aircraft.cruise
            if cruise is None or not cruise.mach:
                raise ConfigurationError(f"Cruise Mach not specified for aircraft {self.aircraft_code}.")
            self.cruise_mach = cruise.mach
            self.eng_cruise_thrust = CRUISE_THRUST_FRACTION * self.eng_max_thrust + CRUISE_THRUST_OFFSET
            self.cruise_alt = self._aircraft_cruise_alt()

        dprint(
            f"[THRUST] {self.aircraft_code}/{self.engine.name}: "
            f"cruise M{self.cruise_mach} at {self.cruise_alt:.0f} ft, "
            f"Fcr {self.eng_cruise_thrust:.0f} N x {self.eng_number}"
        )

    def _aircraft_cruise_alt(self):
        """Aircraft cruise height converted to feet."""
        cruise = self.aircraft.cruise
        if cruise is None or not cruise.height:
            raise ConfigurationError(f"Cruise height not specified for aircraft {self.aircraft_code}.")
        return cruise.height / aero.FT

    def takeoff(self, tas_kts, alt_ft):
        """
        Take-off thrust (N).

        Mach is taken at sea level; the pressure ratio uses the actual altitude.
        """
        mach = aero.tas_to_mach(tas_kts * aero.KTS, 0.0)
        bpr = self.eng_bpr

        # gas generator function (fit to Fig. 5 in Bartel and Young)
        G0 = 0.0606 * bpr + 0.6337

        dP = aero.compute_pressure(alt_ft * aero.FT) / aero.P0

        # Eqs. 12-14 in Bartel and Young
        A = -0.4327 * dP ** 2 + 1.3855 * dP + 0.0472
        Z = 0.9106 * dP ** 3 - 1.7736 * dP ** 2 + 1.8697 * dP
        X = 0.1377 * dP ** 3 - 0.4374 * dP ** 2 + 1.3003 * dP

        ratio = (
            A
            - 0.377 * (1 + bpr) / math.sqrt((1 + 0.82 * bpr) * G0) * Z * mach
            + (0.23 + 0.19 * math.sqrt(bpr)) * X * mach ** 2
        )
        return ratio * self.eng_max_thrust * self.eng_number

    def climb(self, tas_kts, alt_ft, roc_fpm):
        """Maximum climb thrust (N) at TAS, altitude and rate of climb."""
        roc = abs(roc_fpm)
        h = alt_ft * aero.FT
        tas = max(MIN_CLIMB_TAS, tas_kts) * aero.KTS

        mach = aero.tas_to_mach(tas, h)
        vcas = aero.tas_to_cas(tas, h)

        p = aero.compute_pressure(h)
        p10 = aero.compute_pressure(SEGMENT_1_CEILING_FT * aero.FT)
        pcr = aero.compute_pressure(self.cruise_alt * aero.FT)

        # approximate thrust at top of climb
        Fcr = self.eng_cruise_thrust * self.eng_number
        vcas_ref = aero.mach_to_cas(self.cruise_mach, self.cruise_alt * aero.FT)
        vratio = vcas / vcas_ref

        if alt_ft > SEGMENT_2_CEILING_FT:
            # segment 3, Eqs. 15-16
            d = self._dfunc(mach / self.cruise_mach)
            b = (mach / self.cruise_mach) ** -0.11
            ratio = d * math.log(p / pcr) + b
        else:
            # segment 2, Eqs. 17-18
            a = vratio ** -0.1
            n = self._nfunc(roc)
            ratio = a * (p / pcr) ** (-0.355 * vratio + n)

            if alt_ft <= SEGMENT_1_CEILING_FT:
                # segment 1, Eq. 19, continuous with segment 2 at 10,000 ft
                F10_ratio = a * (p10 / pcr) ** (-0.355 * vratio + n)
                m = self._mfunc(vratio, roc)
                ratio = m * (p / pcr) + (F10_ratio - m * (p10 / pcr))

        return ratio * Fcr

    @staticmethod
    def _dfunc(mratio):
        return -0.4204 * mratio + 1.0824

    @staticmethod
    def _nfunc(roc):
        return 2.667e-05 * roc + 0.8633

    @staticmethod
    def _mfunc(vratio, roc):
        return -1.2043e-1 * vratio - 8.8889e-9 * roc ** 2 + 2.4444e-5 * roc + 4.7379e-1
