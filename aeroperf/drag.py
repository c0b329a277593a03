# aeroperf/drag.py

"""
Drag model based on the parabolic drag polar of each aircraft type.

Clean drag optionally includes a compressibility (wave drag) term from a
critical Mach estimate. Non-clean drag adds flap and landing gear zero-lift
increments and reduces span efficiency with flap deflection.

Inputs: mass in kg, TAS in knots, altitude in feet, vertical speed in
ft/min, flap angle in degrees. Output: total drag (N).
"""

import math

from . import aero
from .aircraft_loader import dprint, get_default_provider
from .base import DragBase
from .constants import DEFAULT_T_C, MIN_DYNAMIC_PRESSURE_AREA, SUPERCRITICAL_KAPPA
from .exceptions import ConfigurationError

# span efficiency loss per degree of flap (Obert), by engine mount
DELTA_E_FLAP_REAR = 0.0046
DELTA_E_FLAP_WING = 0.0026


class Drag(DragBase):
    """
    Drag model for one aircraft type.

    Args:
        ac: ICAO aircraft type code.
        wave_drag: Add the compressibility drag increment in clean configuration.
        use_synonym: Allow one synonym hop for the aircraft and drag polar records.
        engine_mount: Engine mount position ("rear", "wing", ...). Read from the
            aircraft's engine installation when omitted.
        provider: ParameterProvider to resolve records with.
    """

    def __init__(self, ac, wave_drag=False, use_synonym=False, engine_mount=None, provider=None):
        super().__init__(ac)
        provider = provider or get_default_provider()

        self.aircraft = provider.aircraft(ac, use_synonym)
        if self.aircraft.wing is None:
            raise ConfigurationError(f"Aircraft {self.aircraft_code} has no wing geometry.")

        self.polar = provider.drag_polar(ac, use_synonym)
        self.wave_drag = wave_drag

        if engine_mount is None and self.aircraft.engine is not None:
            engine_mount = self.aircraft.engine.mount
        self.engine_mount = engine_mount

    def _cl(self, mass_kg, tas_kts, alt_ft, vs_fpm=0):
        """Lift coefficient and q·S for the flight state."""
        v = tas_kts * aero.KTS
        h = alt_ft * aero.FT
        vs = vs_fpm * aero.FPM

        gamma = aero.compute_flight_path_angle(vs, v)
        rho = aero.compute_air_density(h)
        qS = aero.compute_dynamic_pressure(rho, v) * self.aircraft.wing.area
        # avoid zero division
        qS = max(qS, MIN_DYNAMIC_PRESSURE_AREA)

        cl = aero.compute_cl(mass_kg, gamma, qS)
        return cl, qS

    def _calc_drag(self, mass_kg, tas_kts, alt_ft, cd0, k, vs_fpm):
        cl, qS = self._cl(mass_kg, tas_kts, alt_ft, vs_fpm)
        cd = aero.compute_cd(cd0, cl, k)
        return aero.compute_drag(qS, cd)

    def wave_drag_increment(self, mass_kg, tas_kts, alt_ft, vs_fpm=0):
        """
        Compressibility drag coefficient, 20 (M - Mcrit)^4 above the critical Mach.

        Mcrit follows the Korn equation for supercritical airfoils (kappa = 0.95).
        """
        wing = self.aircraft.wing
        mach = aero.tas_to_mach_kts(tas_kts, alt_ft)
        cl, _ = self._cl(mass_kg, tas_kts, alt_ft, vs_fpm)

        cos_sweep = math.cos(math.radians(wing.sweep))
        tc = wing.t_c if wing.t_c is not None else DEFAULT_T_C

        mach_crit = (
            SUPERCRITICAL_KAPPA / cos_sweep
            - tc / cos_sweep ** 2
            - 0.1 * cl / cos_sweep ** 3
            - 0.108
        )
        dmach = max(mach - mach_crit, 0.0)
        # Eq. 15 in Gur et al.
        return 20.0 * dmach ** 4

    def clean(self, mass_kg, tas_kts, alt_ft, vs_fpm=0):
        """Drag (N) in clean configuration."""
        cd0 = self.polar.clean.cd0
        k = self.polar.clean.k

        if self.wave_drag:
            cd0 += self.wave_drag_increment(mass_kg, tas_kts, alt_ft, vs_fpm)

        return self._calc_drag(mass_kg, tas_kts, alt_ft, cd0, k, vs_fpm)

    def nonclean(self, mass_kg, tas_kts, alt_ft, flap_angle_deg, vs_fpm=0, landing_gear=False):
        """
        Drag (N) with flaps deflected and optionally the landing gear down.

        Raises:
            ConfigurationError: The engine mount position is unknown, or the
                gear is down and the aircraft has no MTOW.
        """
        wing = self.aircraft.wing
        flaps = self.polar.flaps

        # new CD0
        delta_cd_flap = (
            flaps.lambda_f
            * flaps.cf_c ** 1.38
            * flaps.sf_s
            * math.sin(math.radians(flap_angle_deg)) ** 2
        )

        if landing_gear:
            mtow = self.aircraft.limits.mtow
            if not mtow:
                raise ConfigurationError(f"MTOW not specified for aircraft {self.aircraft_code}.")
            delta_cd_gear = mtow * aero.G0 / wing.area * 3.16e-5 * mtow ** -0.215
        else:
            delta_cd_gear = 0.0

        cd0_total = self.polar.clean.cd0 + delta_cd_flap + delta_cd_gear

        # new k
        if self.engine_mount is None:
            raise ConfigurationError(
                f"Aircraft {self.aircraft_code} has no engine installation data (engine mount unknown)."
            )
        if self.engine_mount.lower() == "rear":
            delta_e_flap = DELTA_E_FLAP_REAR * flap_angle_deg
        else:
            delta_e_flap = DELTA_E_FLAP_WING * flap_angle_deg

        k_total = 1.0 / (1.0 / self.polar.clean.k + math.pi * wing.aspect_ratio * delta_e_flap)

        dprint(
            f"[DRAG] {self.aircraft_code} flaps {flap_angle_deg} deg, gear {landing_gear}: "
            f"CD0 {cd0_total:.4f}, k {k_total:.4f}"
        )
        return self._calc_drag(mass_kg, tas_kts, alt_ft, cd0_total, k_total, vs_fpm)
