# aeroperf/aero.py

"""
Centralized atmosphere, airspeed and aerodynamic helper calculations.
ISA atmosphere, TAS/CAS/Mach conversions, dynamic pressure, lift and drag
coefficient math and LTO table interpolation live here.

SI functions take altitude in meters and speeds in m/s. The *_kts helpers
take altitude in feet and speeds in knots.
"""

from collections import namedtuple
import math

import numpy as np

from .constants import ISA_DELTA_T_LIMIT

# Unit conversion factors
KTS = 0.514444        # knot -> m/s
FT = 0.3048           # ft -> m
FPM = 0.00508         # ft/min -> m/s
NM = 1852.0           # nautical mile -> m

# Physical constants
G0 = 9.80665          # m/s²
R = 287.05287         # J/(kg·K), specific gas constant of air
P0 = 101325.0         # Pa, sea-level pressure
RHO0 = 1.225          # kg/m³, sea-level density
T0 = 288.15           # K, sea-level temperature
GAMMA = 1.40          # cp/cv for air
BETA = -0.0065        # K/m, ISA lapse rate below the tropopause
A0 = 340.293988       # m/s, sea-level speed of sound

H_TROPOPAUSE = 11000.0         # m
T_TROPOPAUSE = 216.65          # K
DENSITY_EXPONENT = 4.256848030018761   # -g0/(R·beta) - 1
STRAT_SCALE_HEIGHT = 6341.552161       # m

AtmosphericState = namedtuple("AtmosphericState", ["pressure", "density", "temperature"])


# =============================================================================
# ATMOSPHERE
# =============================================================================

def compute_atmosphere(h, dT=0.0):
    """
    ISA pressure, density and temperature at geopotential altitude h (m).

    dT is the ISA temperature deviation in K, clamped to ±15 K. The
    temperature follows the lapse rate down to the tropopause floor,
    density follows the barotropic relation and decays exponentially in
    the stratosphere, and pressure closes with p = rho R T.
    """
    dT = float(np.clip(dT, -ISA_DELTA_T_LIMIT, ISA_DELTA_T_LIMIT))
    T0_shift = T0 + dT

    T = max(T0_shift + BETA * h, T_TROPOPAUSE + dT)
    rho_trop = RHO0 * (T / T0_shift) ** DENSITY_EXPONENT
    dh_strat = max(0.0, h - H_TROPOPAUSE)
    rho = rho_trop * math.exp(-dh_strat / STRAT_SCALE_HEIGHT)
    p = rho * R * T
    return AtmosphericState(p, rho, T)


def compute_pressure(h, dT=0.0):
    """Static pressure (Pa) at altitude h (m)."""
    return compute_atmosphere(h, dT).pressure


def compute_air_density(h, dT=0.0):
    """Air density (kg/m³) at altitude h (m)."""
    return compute_atmosphere(h, dT).density


def compute_temperature(h, dT=0.0):
    """Static temperature (K) at altitude h (m)."""
    return compute_atmosphere(h, dT).temperature


def compute_speed_of_sound(h, dT=0.0):
    """a = sqrt(gamma R T)"""
    return math.sqrt(GAMMA * R * compute_temperature(h, dT))


# =============================================================================
# AIRSPEED CONVERSIONS
# =============================================================================

def tas_to_mach(v_tas, h, dT=0.0):
    """M = TAS / a"""
    return v_tas / compute_speed_of_sound(h, dT)


def mach_to_tas(mach, h, dT=0.0):
    """TAS = M * a"""
    return mach * compute_speed_of_sound(h, dT)


def cas_to_tas(v_cas, h, dT=0.0):
    """
    Calibrated to true airspeed (m/s) through the compressible impact pressure.
    """
    p, rho, _ = compute_atmosphere(h, dT)
    qdyn = P0 * ((1.0 + RHO0 * v_cas * v_cas / (7.0 * P0)) ** 3.5 - 1.0)
    return math.sqrt(7.0 * p / rho * ((1.0 + qdyn / p) ** (2.0 / 7.0) - 1.0))


def tas_to_cas(v_tas, h, dT=0.0):
    """
    True to calibrated airspeed (m/s), inverse of cas_to_tas.
    """
    p, rho, _ = compute_atmosphere(h, dT)
    qdyn = p * ((1.0 + rho * v_tas * v_tas / (7.0 * p)) ** 3.5 - 1.0)
    return math.sqrt(7.0 * P0 / RHO0 * ((qdyn / P0 + 1.0) ** (2.0 / 7.0) - 1.0))


def mach_to_cas(mach, h, dT=0.0):
    """CAS (m/s) for a Mach number at altitude h (m)."""
    return tas_to_cas(mach_to_tas(mach, h, dT), h, dT)


def cas_to_tas_kts(cas_kts, alt_ft, dT=0.0):
    """CAS (kts) -> TAS (kts) at pressure altitude in feet."""
    return cas_to_tas(cas_kts * KTS, alt_ft * FT, dT) / KTS


def tas_to_cas_kts(tas_kts, alt_ft, dT=0.0):
    """TAS (kts) -> CAS (kts) at altitude in feet."""
    return tas_to_cas(tas_kts * KTS, alt_ft * FT, dT) / KTS


def tas_to_mach_kts(tas_kts, alt_ft, dT=0.0):
    """TAS (kts) -> Mach at altitude in feet."""
    return tas_to_mach(tas_kts * KTS, alt_ft * FT, dT)


def mach_to_cas_kts(mach, alt_ft, dT=0.0):
    """Mach -> CAS (kts) at altitude in feet."""
    return mach_to_cas(mach, alt_ft * FT, dT) / KTS


# =============================================================================
# LIFT / DRAG
# =============================================================================

def compute_dynamic_pressure(rho, V):
    """q = 0.5 * rho * V^2"""
    return 0.5 * rho * (V ** 2)


def compute_flight_path_angle(vs, V):
    """gamma = atan2(vertical speed, TAS), both in m/s."""
    return math.atan2(vs, V)


def compute_cl(mass, gamma, qS):
    """
    CL = m g cos(gamma) / (q S), with q S already floored by the caller.
    """
    lift = mass * G0 * math.cos(gamma)
    return lift / qS


def compute_cd(CD0, CL, k):
    """CD = CD0 + k * CL^2"""
    return CD0 + k * CL ** 2


def compute_drag(qS, CD):
    """D = q S CD"""
    return qS * CD


# =============================================================================
# TABLE INTERPOLATION
# =============================================================================

def interpolate_table(x, xs, ys):
    """
    Piecewise-linear lookup in a table sorted by increasing xs.

    Values outside the table clamp to the first/last entry, there is no
    extrapolation.
    """
    if len(xs) != len(ys) or len(xs) == 0:
        raise ValueError("Interpolation table needs matching, non-empty x and y values")
    return float(np.interp(x, xs, ys))
