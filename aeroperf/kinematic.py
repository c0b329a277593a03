# aeroperf/kinematic.py

"""
WRAP (World-wide Representative Aircraft Performance) kinematic
parameters: statistical distributions of speeds, distances, altitudes and
vertical rates per flight phase, as fitted from ADS-B data. Values are
returned as stored: speeds in m/s, distances and altitudes in km, vertical
rates in m/s, accelerations in m/s², angles in degrees.
"""

from dataclasses import dataclass
from typing import Tuple

from .aircraft_loader import get_default_provider
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class WrapParameter:
    """
    One WRAP variable: optimum (default), minimum and maximum values, and the
    fitted statistical model with its parameters.
    """
    default: float
    minimum: float
    maximum: float
    statmodel: str
    statmodel_params: Tuple[float, ...]

    def __str__(self):
        params = "|".join(str(p) for p in self.statmodel_params)
        return (
            f"Default: {self.default}\n"
            f"  Minimum: {self.minimum}\n"
            f"  Maximum: {self.maximum}\n"
            f"  Model:   {self.statmodel}\n"
            f"  Params:  {params}"
        )


class WRAP:
    """
    WRAP kinematic model for one aircraft type.

    Args:
        ac: ICAO aircraft type code.
        use_synonym: Allow one synonym hop when the code has no table.
        provider: ParameterProvider to resolve records with.
    """

    def __init__(self, ac, use_synonym=True, provider=None):
        provider = provider or get_default_provider()
        self.aircraft_code = ac.upper()
        self._rows = provider.wrap(ac, use_synonym)

    def variables(self):
        return [row.variable for row in self._rows.values()]

    def get(self, variable):
        row = self._rows.get(variable.lower())
        if row is None:
            raise ConfigurationError(f"Variable {variable} not found in WRAP data for {self.aircraft_code}.")
        return WrapParameter(
            default=row.opt,
            minimum=row.min,
            maximum=row.max,
            statmodel=row.model,
            statmodel_params=row.parameters,
        )

    # takeoff
    def takeoff_speed(self):
        return self.get("to_v_lof")

    def takeoff_distance(self):
        return self.get("to_d_tof")

    def takeoff_acceleration(self):
        return self.get("to_acc_tof")

    # initial climb
    def initclimb_vcas(self):
        return self.get("ic_va_avg")

    def initclimb_vs(self):
        return self.get("ic_vs_avg")

    # climb
    def climb_range(self):
        return self.get("cl_d_range")

    def climb_const_vcas(self):
        return self.get("cl_v_cas_const")

    def climb_const_mach(self):
        return self.get("cl_v_mach_const")

    def climb_cross_alt_concas(self):
        return self.get("cl_h_cas_const")

    def climb_cross_alt_conmach(self):
        return self.get("cl_h_mach_const")

    def climb_vs_pre_concas(self):
        return self.get("cl_vs_avg_pre_cas")

    def climb_vs_concas(self):
        return self.get("cl_vs_avg_cas_const")

    def climb_vs_conmach(self):
        return self.get("cl_vs_avg_mach_const")

    # cruise
    def cruise_range(self):
        return self.get("cr_d_range")

    def cruise_alt(self):
        return self.get("cr_h_mean")

    def cruise_init_alt(self):
        return self.get("cr_h_init")

    def cruise_max_alt(self):
        return self.get("cr_h_max")

    def cruise_mean_vcas(self):
        return self.get("cr_v_cas_mean")

    def cruise_max_vcas(self):
        return self.get("cr_v_cas_max")

    def cruise_mach(self):
        return self.get("cr_v_mach_mean")

    def cruise_max_mach(self):
        return self.get("cr_v_mach_max")

    # descent
    def descent_range(self):
        return self.get("de_d_range")

    def descent_const_mach(self):
        return self.get("de_v_mach_const")

    def descent_const_vcas(self):
        return self.get("de_v_cas_const")

    def descent_cross_alt_conmach(self):
        return self.get("de_h_mach_const")

    def descent_cross_alt_concas(self):
        return self.get("de_h_cas_const")

    def descent_vs_conmach(self):
        return self.get("de_vs_avg_mach_const")

    def descent_vs_concas(self):
        return self.get("de_vs_avg_cas_const")

    def descent_vs_post_concas(self):
        return self.get("de_vs_avg_after_cas")

    # final approach
    def finalapp_vcas(self):
        return self.get("fa_va_avg")

    def finalapp_vs(self):
        return self.get("fa_vs_avg")

    def finalapp_angle(self):
        return self.get("fa_agl")

    # landing
    def landing_speed(self):
        return self.get("ld_v_app")

    def landing_decel_distance(self):
        return self.get("ld_d_brk")

    def landing_acceleration(self):
        return self.get("ld_acc_brk")
