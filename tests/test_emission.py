# tests/test_emission.py
import sys
import os
import tempfile
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from aeroperf.aircraft_loader import ParameterProvider
from aeroperf.emission import Emission
from aeroperf.exceptions import ConfigurationError
from aeroperf.fuel import FuelFlow
from records import TEST_AIRCRAFT, write_data_dir, expect_error
import math


def test_fuel_proportional_species():
    print("\n=== TEST: CO2 / H2O / Soot / SOx ===")
    em = Emission("A320")
    assert em.co2(1.0) == 3160
    assert em.h2o(1.0) == 1230
    assert abs(em.soot(1.0) - 0.03) < 1e-12
    assert abs(em.sox(1.0) - 1.2) < 1e-12
    for ff in (0.01, 0.3, 1.0, 3.5):
        assert em.co2(ff) > em.h2o(ff) > em.soot(ff), f"Ordering broken at {ff} kg/s"
        assert em.co2(ff) > em.sox(ff)


def test_default_engine():
    print("\n=== TEST: Emission Engine Selection ===")
    em = Emission("A320")
    assert em.engine.name == "CFM56-5B4"
    assert em.n_eng == 2
    assert Emission("A320", "V2527").engine.name == "V2527-A5"


def test_sea_level_lto_points():
    print("\n=== TEST: Sea-Level LTO Points ===")
    em = Emission("A320")
    eng = em.engine

    # static sea-level conditions need no ambient correction
    ff_idle = 2 * eng.ff_idl
    co = em.co(ff_idle, 0, 0)
    hc = em.hc(ff_idle, 0, 0)
    print(f"Idle CO: {co:.3f} g/s, HC: {hc:.4f} g/s")
    assert abs(co - eng.ei_co_idl * ff_idle) < 1e-9
    assert abs(hc - eng.ei_hc_idl * ff_idle) < 1e-9

    ff_to = 2 * eng.ff_to
    nox = em.nox(ff_to, 0, 0)
    print(f"Take-off NOx: {nox:.2f} g/s")
    # only the humidity correction remains, within 0.1%
    assert abs(nox / (eng.ei_nox_to * ff_to) - 1) < 1e-3


def test_table_clamping():
    print("\n=== TEST: LTO Table Clamped Outside Range ===")
    em = Emission("A320")
    eng = em.engine
    assert abs(em.co(10.0, 0, 0) - eng.ei_co_to * 10.0) < 1e-9
    assert abs(em.co(0.01, 0, 0) - eng.ei_co_idl * 0.01) < 1e-9


def test_cruise_emissions():
    print("\n=== TEST: Cruise Emissions ===")
    fuelflow = FuelFlow("A320")
    em = Emission("A320")
    ff = fuelflow.enroute(65000, 450, 35000)
    for name, value in [
        ("nox", em.nox(ff, 450, 35000)),
        ("co", em.co(ff, 450, 35000)),
        ("hc", em.hc(ff, 450, 35000)),
    ]:
        print(f"{name}: {value:.4f} g/s")
        assert math.isfinite(value) and value > 0


def test_configuration_errors(tmp_path):
    print("\n=== TEST: Emission Configuration Errors ===")
    no_default = dict(TEST_AIRCRAFT, engine=dict(TEST_AIRCRAFT["engine"], default=None))
    no_engine = {k: v for k, v in TEST_AIRCRAFT.items() if k != "engine"}
    provider = ParameterProvider(write_data_dir(
        tmp_path, aircraft={"tst1": no_default, "tst2": no_engine}
    ))
    expect_error(ConfigurationError, Emission, "TST1", provider=provider)
    expect_error(ConfigurationError, Emission, "TST2", provider=provider)

    assert Emission("TST1", "TF-100", provider=provider).n_eng == 2
    assert Emission("TST2", "TF-100", provider=provider).n_eng == 1


if __name__ == "__main__":
    test_fuel_proportional_species()
    test_default_engine()
    test_sea_level_lto_points()
    test_table_clamping()
    test_cruise_emissions()
    test_configuration_errors(Path(tempfile.mkdtemp()))
    print("\n" + "=" * 50)
    print("ALL EMISSION TESTS PASSED!")
    print("=" * 50)
