# aeroperf/aircraft_loader.py

"""
Aircraft and engine parameter loading and management.
Handles loading the JSON records from the data folder, resolves aircraft
codes (directly or through one synonym hop) and engine names, and keeps the
parsed records cached per provider.
"""

import os
import re
import json
import threading
from collections import namedtuple
from dataclasses import dataclass
from typing import Optional, Tuple

from .aero import FT
from .constants import (
    DEBUG_LOG,
    DATA_DIR,
    SYNONYM_FILE,
    ENGINE_TABLE_FILE,
    FUEL_MODEL_FILE,
    DEFAULT_FUEL_MODEL,
    DEFAULT_FUEL_CH,
)
from .exceptions import ResolutionError, ConfigurationError


def dprint(*args, **kwargs):
    """Debug print that can be globally toggled."""
    if DEBUG_LOG:
        print(*args, **kwargs)


# =============================================================================
# PARAMETER RECORDS
# =============================================================================

@dataclass(frozen=True)
class WingSpec:
    """Wing geometry. Area in m², span and mean aerodynamic chord in m, sweep in degrees."""
    area: float
    span: float
    mac: Optional[float] = None
    sweep: float = 0.0
    t_c: Optional[float] = None

    @property
    def aspect_ratio(self) -> float:
        return self.span ** 2 / self.area


@dataclass(frozen=True)
class AircraftLimits:
    """Mass (kg), speed and altitude limits. mfc is the max fuel capacity in liters."""
    mtow: Optional[float] = None
    mlw: Optional[float] = None
    oew: Optional[float] = None
    mfc: Optional[float] = None
    vmo: Optional[float] = None
    mmo: Optional[float] = None
    ceiling: Optional[float] = None


@dataclass(frozen=True)
class CruiseSpec:
    """Reference cruise point: height (m), Mach, range (km)."""
    height: Optional[float] = None
    mach: Optional[float] = None
    range: Optional[float] = None


@dataclass(frozen=True)
class EngineInstallation:
    """
    How engines are fitted to the airframe.

    options holds the engine-name substrings permitted on this type; an
    empty tuple means any engine is accepted.
    """
    type: Optional[str]
    mount: Optional[str]
    number: int
    default: Optional[str]
    options: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AircraftSpec:
    code: str
    name: str
    wing: Optional[WingSpec]
    limits: AircraftLimits
    cruise: Optional[CruiseSpec] = None
    engine: Optional[EngineInstallation] = None


@dataclass(frozen=True)
class EngineSpec:
    """
    Engine performance and ICAO emission data. Fuel flows are kg/s per
    engine, emission indices g/kg fuel, thrust in N, cruise_alt in ft.
    """
    name: str
    bpr: float
    max_thrust: float
    ff_idl: float
    ff_app: float
    ff_co: float
    ff_to: float
    ei_nox_idl: float
    ei_nox_app: float
    ei_nox_co: float
    ei_nox_to: float
    ei_co_idl: float
    ei_co_app: float
    ei_co_co: float
    ei_co_to: float
    ei_hc_idl: float
    ei_hc_app: float
    ei_hc_co: float
    ei_hc_to: float
    cruise_thrust: Optional[float] = None
    cruise_sfc: Optional[float] = None
    cruise_mach: Optional[float] = None
    cruise_alt: Optional[float] = None
    fuel_ch: float = DEFAULT_FUEL_CH

    # LTO tables, ordered idle, approach, climb-out, take-off
    @property
    def lto_fuel_flow(self):
        return (self.ff_idl, self.ff_app, self.ff_co, self.ff_to)

    @property
    def ei_nox(self):
        return (self.ei_nox_idl, self.ei_nox_app, self.ei_nox_co, self.ei_nox_to)

    @property
    def ei_co(self):
        return (self.ei_co_idl, self.ei_co_app, self.ei_co_co, self.ei_co_to)

    @property
    def ei_hc(self):
        return (self.ei_hc_idl, self.ei_hc_app, self.ei_hc_co, self.ei_hc_to)


@dataclass(frozen=True)
class CleanPolar:
    cd0: float
    k: float
    e: Optional[float] = None


@dataclass(frozen=True)
class FlapPolar:
    lambda_f: float
    cf_c: float
    sf_s: float


@dataclass(frozen=True)
class DragPolar:
    clean: CleanPolar
    flaps: FlapPolar


@dataclass(frozen=True)
class FuelModel:
    """Fitted fuel-flow curve coefficients and the engine they were fitted on."""
    typecode: str
    engine_type: Optional[str]
    c1: float
    c2: float
    c3: float


WrapRow = namedtuple(
    "WrapRow",
    ["variable", "phase", "name", "opt", "min", "max", "model", "parameters"],
)


# =============================================================================
# RECORD PARSING
# =============================================================================

ENGINE_REQUIRED_FIELDS = [
    "bpr", "max_thrust",
    "ff_idl", "ff_app", "ff_co", "ff_to",
    "ei_nox_idl", "ei_nox_app", "ei_nox_co", "ei_nox_to",
    "ei_co_idl", "ei_co_app", "ei_co_co", "ei_co_to",
    "ei_hc_idl", "ei_hc_app", "ei_hc_co", "ei_hc_to",
]
ENGINE_OPTIONAL_FIELDS = ["cruise_thrust", "cruise_sfc", "cruise_mach", "cruise_alt"]


def load_json(filepath):
    """Read one JSON record, raising ResolutionError if the file is missing."""
    if not os.path.exists(filepath):
        raise ResolutionError(f"Data file not found: {filepath}")
    with open(filepath, "r") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Malformed data file {filepath}: {e}") from e


def _optional_float(value):
    if value is None:
        return None
    return float(value)


def extract_engine_options(options):
    """
    Normalize the engine options of an installation record.

    The record may hold a mapping (variant -> engine), a list of names or a
    single name; blank entries are dropped.
    """
    if options is None:
        return ()
    if isinstance(options, dict):
        values = options.values()
    elif isinstance(options, (list, tuple)):
        values = options
    else:
        values = [options]
    return tuple(str(v).strip() for v in values if v is not None and str(v).strip())


def engine_matches_options(engine_name, options):
    """True if any option is a case-insensitive substring of the engine name."""
    if not options:
        return True
    name = engine_name.upper()
    return any(opt.upper() in name for opt in options)


def build_aircraft_spec(code, data):
    """
    Convert a raw aircraft record into an AircraftSpec.

    Limits are taken from a "limits" block when the record has one, otherwise
    from the top-level mtow/mlw/oew/mfc/vmo/mmo/ceiling fields.
    """
    wing = None
    wing_data = data.get("wing")
    if wing_data:
        try:
            wing = WingSpec(
                area=float(wing_data["area"]),
                span=float(wing_data["span"]),
                mac=_optional_float(wing_data.get("mac")),
                sweep=float(wing_data.get("sweep") or 0.0),
                t_c=_optional_float(wing_data.get("t/c")),
            )
        except KeyError as e:
            raise ConfigurationError(f"Aircraft {code} wing record lacks {e}") from e

    lim = data.get("limits") or {}
    lim = {key.lower(): value for key, value in lim.items()}

    def limit(field):
        return _optional_float(lim.get(field, data.get(field)))

    limits = AircraftLimits(
        mtow=limit("mtow"),
        mlw=limit("mlw"),
        oew=limit("oew"),
        mfc=limit("mfc"),
        vmo=limit("vmo"),
        mmo=limit("mmo"),
        ceiling=limit("ceiling"),
    )

    cruise = None
    cruise_data = data.get("cruise")
    if cruise_data:
        cruise = CruiseSpec(
            height=_optional_float(cruise_data.get("height")),
            mach=_optional_float(cruise_data.get("mach")),
            range=_optional_float(cruise_data.get("range")),
        )

    engine = None
    eng_data = data.get("engine")
    if eng_data:
        engine = EngineInstallation(
            type=eng_data.get("type"),
            mount=eng_data.get("mount"),
            number=int(eng_data.get("number", 1)),
            default=eng_data.get("default"),
            options=extract_engine_options(eng_data.get("options")),
        )

    return AircraftSpec(
        code=code.upper(),
        name=data.get("aircraft", code.upper()),
        wing=wing,
        limits=limits,
        cruise=cruise,
        engine=engine,
    )


def compute_fuel_ch(row):
    """
    Fuel-flow altitude coefficient, from cruise and take-off SFC when the
    engine row has a cruise SFC.
    """
    sfc_cr = row.get("cruise_sfc")
    cruise_alt = row.get("cruise_alt")
    if sfc_cr is None or not cruise_alt:
        return DEFAULT_FUEL_CH
    sfc_to = row["ff_to"] / (row["max_thrust"] / 1000.0)
    return round((sfc_cr - sfc_to) / (cruise_alt * FT), 8)


def build_engine_spec(row):
    """Convert a raw engine table row into an EngineSpec."""
    name = row.get("name")
    if not name:
        raise ConfigurationError("Engine row without a name")

    missing = [field for field in ENGINE_REQUIRED_FIELDS if row.get(field) is None]
    if missing:
        raise ConfigurationError(f"Engine {name} lacks {', '.join(missing)}")

    values = {field: float(row[field]) for field in ENGINE_REQUIRED_FIELDS}
    values.update({field: _optional_float(row.get(field)) for field in ENGINE_OPTIONAL_FIELDS})
    return EngineSpec(name=name, fuel_ch=compute_fuel_ch(row), **values)


def build_drag_polar(code, data):
    """Convert a raw drag polar record into a DragPolar."""
    try:
        clean = data["clean"]
        flaps = data["flaps"]
        return DragPolar(
            clean=CleanPolar(
                cd0=float(clean["cd0"]),
                k=float(clean["k"]),
                e=_optional_float(clean.get("e")),
            ),
            flaps=FlapPolar(
                lambda_f=float(flaps["lambda_f"]),
                cf_c=float(flaps["cf/c"]),
                sf_s=float(flaps["Sf/S"]),
            ),
        )
    except KeyError as e:
        raise ConfigurationError(f"Drag polar for {code} lacks {e}") from e


# =============================================================================
# PARAMETER PROVIDER
# =============================================================================

class ParameterProvider:
    """
    Resolves aircraft codes and engine names to parameter records.

    Every table is read lazily on first use and cached for the lifetime of
    the provider; cached values are immutable, so repeated lookups return
    identical records.
    """

    def __init__(self, data_dir=None):
        self.data_dir = data_dir or DATA_DIR
        self._cache = {}
        self._lock = threading.Lock()

    def _cached(self, key, loader):
        try:
            return self._cache[key]
        except KeyError:
            pass
        with self._lock:
            if key not in self._cache:
                self._cache[key] = loader()
                dprint(f"[LOAD] Cached {key}")
            return self._cache[key]

    def _path(self, *parts):
        return os.path.join(self.data_dir, *parts)

    # -------------------------------------------------------------------------
    # Code resolution
    # -------------------------------------------------------------------------

    def synonyms(self, folder):
        """Synonym table of a record folder, {orig: new}, lower-cased."""
        def load():
            filepath = self._path(folder, SYNONYM_FILE)
            if not os.path.exists(filepath):
                return {}
            table = load_json(filepath)
            return {k.lower(): v.lower() for k, v in table.items()}
        return self._cached(("synonym", folder), load)

    def resolve_code(self, folder, code, use_synonym=False):
        """
        Resolve a type code to the record file name in a folder.

        Direct records win; otherwise one hop through the folder's synonym
        table is attempted when use_synonym is set.
        """
        if not code or not code.strip():
            raise ValueError("Aircraft ICAO code must be provided.")
        code = code.strip().lower()
        if not re.fullmatch(r"[a-z0-9][a-z0-9_\-]*", code):
            raise ResolutionError(f"{code.upper()} is not a valid {folder} type code.")

        if os.path.exists(self._path(folder, f"{code}.json")):
            return code

        if not use_synonym:
            raise ResolutionError(
                f"{folder} record for {code.upper()} not available. "
                "Enable 'use_synonym' to search synonyms."
            )

        target = self.synonyms(folder).get(code)
        if target is None:
            raise ResolutionError(
                f"{folder} record for {code.upper()} not available, and no synonym found."
            )
        if not os.path.exists(self._path(folder, f"{target}.json")):
            raise ResolutionError(
                f"Synonym {target.upper()} for {code.upper()} has no {folder} record."
            )
        dprint(f"[SYNONYM] {folder}: {code.upper()} -> {target.upper()}")
        return target

    # -------------------------------------------------------------------------
    # Aircraft
    # -------------------------------------------------------------------------

    def aircraft(self, code, use_synonym=False):
        """Resolve an aircraft type code to its AircraftSpec."""
        resolved = self.resolve_code("aircraft", code, use_synonym)
        return self._cached(
            ("aircraft", resolved),
            lambda: build_aircraft_spec(
                resolved, load_json(self._path("aircraft", f"{resolved}.json"))
            ),
        )

    def available_aircraft(self):
        """Sorted list of aircraft codes with a direct record."""
        folder_path = self._path("aircraft")
        if not os.path.exists(folder_path):
            print(f"[WARNING] Aircraft data folder not found: {folder_path}")
            return []
        return sorted(
            os.path.splitext(filename)[0].upper()
            for filename in os.listdir(folder_path)
            if filename.endswith(".json") and not filename.startswith("_")
        )

    # -------------------------------------------------------------------------
    # Engines
    # -------------------------------------------------------------------------

    def engine_table(self):
        """The flat engine table, in file order."""
        def load():
            rows = load_json(self._path(ENGINE_TABLE_FILE))
            return tuple(build_engine_spec(row) for row in rows)
        return self._cached(("engines",), load)

    def engine(self, name):
        """
        Resolve an engine by case-insensitive name prefix.

        When several rows match, the first one in table order is used.
        """
        if not name or not name.strip():
            raise ValueError("Engine name must be provided.")
        prefix = name.strip().upper()

        for spec in self.engine_table():
            if spec.name.upper().startswith(prefix):
                return spec
        raise ResolutionError(f"Data for engine {name} not found.")

    def available_engines(self):
        return [spec.name for spec in self.engine_table()]

    def compatible_engines(self, aircraft_spec):
        """Engine names from the table that fit the aircraft's engine options."""
        options = aircraft_spec.engine.options if aircraft_spec.engine else ()
        return [
            spec.name for spec in self.engine_table()
            if engine_matches_options(spec.name, options)
        ]

    # -------------------------------------------------------------------------
    # Drag polar, fuel models, WRAP
    # -------------------------------------------------------------------------

    def drag_polar(self, code, use_synonym=False):
        resolved = self.resolve_code("dragpolar", code, use_synonym)
        return self._cached(
            ("dragpolar", resolved),
            lambda: build_drag_polar(
                resolved, load_json(self._path("dragpolar", f"{resolved}.json"))
            ),
        )

    def fuel_models(self):
        def load():
            rows = load_json(self._path(FUEL_MODEL_FILE))
            try:
                return {
                    row["typecode"].lower(): FuelModel(
                        typecode=row["typecode"].lower(),
                        engine_type=row.get("engine_type"),
                        c1=float(row["c1"]),
                        c2=float(row["c2"]),
                        c3=float(row["c3"]),
                    )
                    for row in rows
                }
            except KeyError as e:
                raise ConfigurationError(f"Fuel model row lacks {e}") from e
        return self._cached(("fuel_models",), load)

    def fuel_model(self, *codes):
        """
        Fuel-flow curve for the first code with a row of its own, falling
        back to the generic default row.
        """
        models = self.fuel_models()
        for code in codes:
            if code and code.lower() in models:
                return models[code.lower()]
        if DEFAULT_FUEL_MODEL not in models:
            raise ConfigurationError("Fuel model table has no default row.")
        dprint(f"[LOAD] No fuel model for {codes}, using default")
        return models[DEFAULT_FUEL_MODEL]

    def wrap(self, code, use_synonym=True):
        """WRAP kinematic rows for an aircraft type, keyed by variable."""
        resolved = self.resolve_code("wrap", code, use_synonym)

        def load():
            data = load_json(self._path("wrap", f"{resolved}.json"))
            rows = {}
            for row in data.get("variables", []):
                rows[row["variable"].lower()] = WrapRow(
                    variable=row["variable"],
                    phase=row.get("phase"),
                    name=row.get("name"),
                    opt=float(row["opt"]),
                    min=float(row["min"]),
                    max=float(row["max"]),
                    model=row["model"],
                    parameters=tuple(float(p) for p in row["parameters"]),
                )
            return rows
        return self._cached(("wrap", resolved), load)


# =============================================================================
# DEFAULT PROVIDER
# =============================================================================

_default_provider = None
_default_lock = threading.Lock()


def get_default_provider():
    """Provider over the configured data directory, created on first use."""
    global _default_provider
    if _default_provider is None:
        with _default_lock:
            if _default_provider is None:
                _default_provider = ParameterProvider()
    return _default_provider


def aircraft(code, use_synonym=False):
    """Resolve an aircraft type code against the default provider."""
    return get_default_provider().aircraft(code, use_synonym)


def engine(name):
    """Resolve an engine name against the default provider."""
    return get_default_provider().engine(name)
