# aeroperf/__init__.py

"""
Aircraft performance models: ISA atmosphere and airspeed conversions,
thrust, drag, fuel flow and emissions for fixed-wing transport aircraft,
plus the parameter provider that resolves aircraft and engine records.
"""

from .constants import (
    DEBUG_LOG,
    DATA_DIR,
    DEFAULT_LOAD_FACTOR,
    EI_CO2,
    EI_H2O,
    EI_SOOT,
    EI_SOX,
)

from .aero import (
    # Unit conversions and physical constants
    KTS, FT, FPM, NM, G0, R, P0, RHO0, T0, GAMMA, A0,
    AtmosphericState,
    # Atmosphere
    compute_atmosphere,
    compute_pressure,
    compute_air_density,
    compute_temperature,
    compute_speed_of_sound,
    # Airspeed conversions
    tas_to_mach,
    mach_to_tas,
    cas_to_tas,
    tas_to_cas,
    mach_to_cas,
    cas_to_tas_kts,
    tas_to_cas_kts,
    tas_to_mach_kts,
    mach_to_cas_kts,
    # Lift/drag helpers
    compute_dynamic_pressure,
    compute_cl,
    compute_cd,
    compute_drag,
    interpolate_table,
)

from .exceptions import (
    AeroPerfError,
    ResolutionError,
    ConfigurationError,
    CompatibilityError,
)

from .aircraft_loader import (
    AircraftSpec,
    AircraftLimits,
    CruiseSpec,
    DragPolar,
    EngineInstallation,
    EngineSpec,
    FuelModel,
    ParameterProvider,
    WingSpec,
    aircraft,
    engine,
    get_default_provider,
    dprint,
)

from .base import ThrustBase, DragBase
from .thrust import Thrust
from .drag import Drag
from .fuel import FuelFlow
from .emission import Emission
from .kinematic import WRAP, WrapParameter
from .mass import from_range
from .summary import performance_summary
