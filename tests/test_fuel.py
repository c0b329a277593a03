# tests/test_fuel.py
import sys
import os
import tempfile
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from aeroperf.aircraft_loader import ParameterProvider
from aeroperf.exceptions import ConfigurationError, ResolutionError
from aeroperf.fuel import FuelFlow, fuel_curve, soft_thrust_ratio
from records import TEST_FUEL_MODELS, write_data_dir, expect_error


def test_fuel_curve():
    print("\n=== TEST: Fitted Fuel Curve ===")
    func = fuel_curve(2.0, 0.618, 0.115)
    print(f"ff(0): {func(0):.2e}, ff(1): {func(1):.4f}")
    assert abs(func(0)) < 1e-12, "Curve should pass through zero"
    # the generic curve is normalized to take-off fuel flow
    assert abs(func(1) - 1.0) < 1e-3
    scaled = fuel_curve(2.0, 0.618, 0.115, scale=0.5)
    assert abs(scaled(0.6) - 0.5 * func(0.6)) < 1e-12


def test_soft_thrust_ratio():
    print("\n=== TEST: Soft Thrust Ratio Floor ===")
    assert soft_thrust_ratio(0.0) > 0.03
    assert soft_thrust_ratio(-0.5) > 0.03
    assert abs(soft_thrust_ratio(0.5) - 0.5) < 1e-9
    assert soft_thrust_ratio(2.0) == 2.0
    prev = soft_thrust_ratio(-0.2)
    for i in range(1, 141):
        r = soft_thrust_ratio(-0.2 + i * 0.01)
        assert r >= prev
        prev = r


def test_a320_enroute():
    print("\n=== TEST: A320 / CFM56-5B4 Enroute Fuel Flow ===")
    ff = FuelFlow("A320", "CFM56-5B4")
    value = ff.enroute(65000, 250, 30000)
    print(f"Fuel flow @65t, 250 kts, FL300: {value:.4f} kg/s (expected: ~0.28)")
    assert value > 0
    assert 0.2 < value < 0.4
    assert ff.fuel_model.typecode == "a320"
    assert ff.scale == 1.0


def test_at_thrust_monotonic():
    print("\n=== TEST: Fuel Flow Increases With Thrust ===")
    for ac in ("A320", "CRJ9"):
        ff = FuelFlow(ac)
        T_max = ff.engine.max_thrust * ff.eng_number
        prev = ff.at_thrust(0)
        assert prev > 0, "Idle fuel flow should stay positive"
        for i in range(1, 101):
            value = ff.at_thrust(T_max * i / 100)
            assert value >= prev, f"{ac} fuel flow decreased at ratio {i / 100}"
            prev = value
        # ratio is capped at 1
        assert ff.at_thrust(2 * T_max) == ff.at_thrust(T_max)
        assert ff.at_thrust(2 * T_max, limit=False) > ff.at_thrust(T_max)
        print(f"{ac}: OK")


def test_takeoff():
    print("\n=== TEST: Take-off Fuel Flow ===")
    ff = FuelFlow("A320")
    full = ff.takeoff(0)
    print(f"Static take-off: {full:.3f} kg/s")
    assert full > ff.takeoff(0, throttle=0.5) > 0
    assert ff.takeoff(140) < full

    # throttle scales thrust ahead of the fuel curve
    T_max = ff.thrust.takeoff(0, 0)
    assert abs(ff.takeoff(0, throttle=0.5) - ff.at_thrust(0.5 * T_max)) < 1e-12


def test_engine_scale():
    print("\n=== TEST: Fuel Curve Scaling ===")
    # generic curve, scaled by take-off fuel flow
    crj = FuelFlow("CRJ9")
    assert crj.fuel_model.typecode == "default"
    assert crj.scale == 0.566
    T_max = crj.engine.max_thrust * crj.eng_number
    assert abs(crj.at_thrust(T_max) - 0.566) < 0.01

    # type curve fitted on another engine
    v25 = FuelFlow("A320", "V2527-A5")
    assert abs(v25.scale - 1.130 / 1.166) < 1e-12
    p_variant = FuelFlow("A320", "CFM56-5B4/P")
    assert p_variant.engine.name == "CFM56-5B4/P"
    assert abs(p_variant.scale - 1.155 / 1.166) < 1e-12


def test_enroute_limits():
    print("\n=== TEST: Enroute Envelope Limits ===")
    ff = FuelFlow("A320")
    steep = ff.enroute(65000, 250, 10000, vs_fpm=10000)
    raw = ff.enroute(65000, 250, 10000, vs_fpm=10000, limit=False)
    print(f"Steep climb: {steep:.3f} kg/s limited, {raw:.3f} kg/s raw")
    assert steep <= raw

    # acceleration beyond the limit is clamped
    assert ff.enroute(65000, 250, 10000, acc_ms2=50) == ff.enroute(65000, 250, 10000, acc_ms2=5)

    # thrust never drops below idle in a steep descent
    descent = ff.enroute(65000, 280, 20000, vs_fpm=-3000)
    assert descent > 0
    assert descent < ff.enroute(65000, 280, 20000)


def test_synonym():
    print("\n=== TEST: Fuel Flow via Synonym ===")
    expect_error(ResolutionError, FuelFlow, "A20N")
    ff = FuelFlow("A20N", use_synonym=True)
    assert ff.aircraft.code == "A320"
    assert ff.fuel_model.typecode == "a320"
    assert ff.enroute(65000, 250, 30000) == FuelFlow("A320").enroute(65000, 250, 30000)


def test_fuel_model_errors(tmp_path):
    print("\n=== TEST: Fuel Model Errors ===")
    no_engine = TEST_FUEL_MODELS + [{"typecode": "tst1", "engine_type": None, "c1": 2.0, "c2": 0.7, "c3": 0.1}]
    provider = ParameterProvider(write_data_dir(tmp_path / "a", fuel_models=no_engine))
    expect_error(ConfigurationError, FuelFlow, "TST1", provider=provider)

    provider = ParameterProvider(write_data_dir(tmp_path / "b", fuel_models=[]))
    expect_error(ConfigurationError, FuelFlow, "TST1", provider=provider)

    provider = ParameterProvider(write_data_dir(tmp_path / "c"))
    ff = FuelFlow("TST1", provider=provider)
    assert ff.scale == 1.0
    assert ff.enroute(60000, 250, 30000) > 0


if __name__ == "__main__":
    test_fuel_curve()
    test_soft_thrust_ratio()
    test_a320_enroute()
    test_at_thrust_monotonic()
    test_takeoff()
    test_engine_scale()
    test_enroute_limits()
    test_synonym()
    test_fuel_model_errors(Path(tempfile.mkdtemp()))
    print("\n" + "=" * 50)
    print("ALL FUEL TESTS PASSED!")
    print("=" * 50)
