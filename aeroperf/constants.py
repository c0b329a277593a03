# aeroperf/constants.py

"""
Application-wide constants for the aircraft performance models.
Physics constants are in aero.py - this file is for configuration and model settings.
"""

import os

# =============================================================================
# DEBUG SETTINGS
# =============================================================================
# Use env var to control debug output (1 = on, 0 = off)
DEBUG_LOG = os.environ.get("AEROPERF_DEBUG", "0") == "1"

# =============================================================================
# DATA LOCATION
# =============================================================================
PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.environ.get("AEROPERF_DATA_DIR", os.path.join(PACKAGE_DIR, "data"))

SYNONYM_FILE = "_synonym.json"
ENGINE_TABLE_FILE = "engines.json"
FUEL_MODEL_FILE = "fuel_models.json"
DEFAULT_FUEL_MODEL = "default"

# =============================================================================
# MODEL SETTINGS
# =============================================================================
ISA_DELTA_T_LIMIT = 15.0       # K, clamp for ISA temperature deviation
DEFAULT_T_C = 0.12             # thickness-to-chord when the wing record has none
SUPERCRITICAL_KAPPA = 0.95     # Korn factor, supercritical airfoils
MIN_DYNAMIC_PRESSURE_AREA = 1e-3

DESCENT_IDLE_FRACTION = 0.07   # idle thrust as a fraction of take-off thrust
CRUISE_THRUST_FRACTION = 0.2   # default cruise thrust = 0.2 * Fmax + 890 N
CRUISE_THRUST_OFFSET = 890.0   # N
MIN_CLIMB_TAS = 10.0           # kts

THRUST_RATIO_FLOOR = 0.03      # soft lower limit of the fuel-flow thrust ratio
THRUST_RATIO_SHARPNESS = 50.0
GAMMA_LIMIT_RAD = 0.175        # ~10 deg flight path angle
ACC_LIMIT_MS2 = 5.0
IDLE_THRUST_FACTOR = 0.8       # lower enroute thrust clamp (x descent idle)
MAX_THRUST_FACTOR = 1.2        # upper enroute thrust clamp (x level climb)

DEFAULT_FUEL_CH = 6.7e-7

# =============================================================================
# EMISSION FACTORS (g per kg fuel)
# =============================================================================
EI_CO2 = 3160.0
EI_H2O = 1230.0
EI_SOOT = 0.03
EI_SOX = 1.2

# =============================================================================
# MASS ESTIMATION
# =============================================================================
DEFAULT_LOAD_FACTOR = 0.8
FUEL_DENSITY_KG_L = 0.8025     # converts max fuel capacity (L) to kg
RANGE_FRACTION_MIN = 0.2
RANGE_FRACTION_MAX = 1.0

# =============================================================================
# EXPLORER DEFAULTS
# =============================================================================
DEFAULT_AIRCRAFT = "A320"
DEFAULT_MASS = 65000   # kg
DEFAULT_TAS = 250      # kts
DEFAULT_ALTITUDE = 30000  # ft
DEFAULT_VERTICAL_SPEED = 0  # ft/min
DEFAULT_DISTANCE = 2000  # km, mission distance for the mass estimate
FLAP_ANGLE_OPTIONS = [0, 5, 10, 15, 20, 25, 30, 35, 40]

# =============================================================================
# STYLING CONSTANTS
# =============================================================================
COLORS = {
    "nox": "#d62728",
    "co": "#7f7f7f",
    "hc": "#ff7f0e",
    "sox": "#9467bd",
    "soot": "#1b1e23",
    "thrust": "green",
    "drag": "red",
}
