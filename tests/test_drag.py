# tests/test_drag.py
import sys
import os
import tempfile
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from aeroperf.aircraft_loader import ParameterProvider
from aeroperf.base import DragBase
from aeroperf.drag import Drag
from aeroperf.exceptions import ConfigurationError, ResolutionError
from records import TEST_AIRCRAFT, TEST_POLAR, write_data_dir, expect_error


def test_clean_drag_a320():
    print("\n=== TEST: A320 Clean Drag ===")
    drag = Drag("A320")
    D = drag.clean(65000, 250, 30000)
    print(f"Drag @65t, 250 kts, FL300: {D:.0f} N (expected: ~45,000)")
    assert 40000 < D < 50000, "Clean drag out of range"

    # climbing needs slightly less lift, so slightly less induced drag
    assert drag.clean(65000, 250, 30000, vs_fpm=2000) < D


def test_drag_positive():
    print("\n=== TEST: Drag Positivity ===")
    for ac in ("A320", "CRJ9"):
        drag = Drag(ac)
        for mass in (20000, 50000, 78000):
            for tas in (60, 140, 250, 480):
                for alt in (0, 10000, 25000, 40000):
                    assert drag.clean(mass, tas, alt) > 0
                    assert drag.nonclean(mass, tas, alt, 20) > 0
                    assert drag.nonclean(mass, tas, alt, 35, landing_gear=True) > 0
        print(f"{ac}: OK")


def test_nonclean_exceeds_clean():
    print("\n=== TEST: Flaps and Gear Add Drag ===")
    cases = [("A320", 60000), ("CRJ9", 33000)]
    for ac, mass in cases:
        drag = Drag(ac)
        for tas in (160, 190, 220, 250):
            for alt in (0, 2500, 5000):
                D_clean = drag.clean(mass, tas, alt)
                for flap in (15, 20, 25, 30, 35, 40):
                    D_flap = drag.nonclean(mass, tas, alt, flap)
                    D_gear = drag.nonclean(mass, tas, alt, flap, landing_gear=True)
                    assert D_flap >= D_clean, f"{ac} flap {flap} at {tas} kts: {D_flap} < {D_clean}"
                    assert D_gear > D_flap, f"{ac} gear down should add drag"
        print(f"{ac}: OK")


def test_zero_flap_matches_clean():
    print("\n=== TEST: Zero Flap Without Gear ===")
    drag = Drag("A320")
    D_clean = drag.clean(60000, 200, 3000)
    D_zero = drag.nonclean(60000, 200, 3000, 0)
    assert abs(D_zero - D_clean) / D_clean < 1e-9


def test_wave_drag():
    print("\n=== TEST: Wave Drag ===")
    drag = Drag("A320", wave_drag=True)
    plain = Drag("A320")
    assert drag.wave_drag_increment(65000, 250, 0) == 0.0

    from aeroperf import aero
    tas_kts = aero.mach_to_tas(0.82, 35000 * aero.FT) / aero.KTS
    dcd = drag.wave_drag_increment(65000, tas_kts, 35000)
    print(f"dCD at M0.82 FL350: {dcd:.6f}")
    assert dcd > 0
    assert drag.clean(65000, tas_kts, 35000) > plain.clean(65000, tas_kts, 35000)
    # wave drag only applies to the clean polar
    assert drag.nonclean(65000, tas_kts, 35000, 10) == plain.nonclean(65000, tas_kts, 35000, 10)


def test_engine_mount():
    print("\n=== TEST: Engine Mount Position ===")
    assert Drag("CRJ9").engine_mount == "rear"
    wing = Drag("A320")
    rear = Drag("A320", engine_mount="rear")
    # rear-mounted engines lose more span efficiency, lowering k further
    assert rear.nonclean(60000, 160, 2000, 20) < wing.nonclean(60000, 160, 2000, 20)
    assert rear.clean(60000, 160, 2000) == wing.clean(60000, 160, 2000)


def test_synonym():
    print("\n=== TEST: Drag via Synonym ===")
    expect_error(ResolutionError, Drag, "A20N")
    drag = Drag("A20N", use_synonym=True)
    assert drag.aircraft.code == "A320"
    assert drag.clean(65000, 250, 30000) == Drag("A320").clean(65000, 250, 30000)


def test_configuration_errors(tmp_path):
    print("\n=== TEST: Drag Configuration Errors ===")
    no_engine = {k: v for k, v in TEST_AIRCRAFT.items() if k != "engine"}
    no_wing = {k: v for k, v in TEST_AIRCRAFT.items() if k != "wing"}
    no_mtow = {k: v for k, v in TEST_AIRCRAFT.items() if k != "mtow"}
    data_dir = write_data_dir(
        tmp_path,
        aircraft={"tst1": no_engine, "tst2": no_wing, "tst3": no_mtow},
        dragpolar={"tst1": TEST_POLAR, "tst2": TEST_POLAR, "tst3": TEST_POLAR},
    )
    provider = ParameterProvider(data_dir)

    drag = Drag("TST1", provider=provider)
    assert drag.clean(60000, 250, 10000) > 0
    expect_error(ConfigurationError, drag.nonclean, 60000, 160, 0, 20)
    explicit = Drag("TST1", engine_mount="wing", provider=provider)
    assert explicit.nonclean(60000, 160, 0, 20) > 0

    expect_error(ConfigurationError, Drag, "TST2", provider=provider)

    drag = Drag("TST3", provider=provider)
    assert drag.nonclean(60000, 160, 0, 20) > 0
    expect_error(ConfigurationError, drag.nonclean, 60000, 160, 0, 20, landing_gear=True)


def test_abstract_base():
    print("\n=== TEST: DragBase Is Abstract ===")
    expect_error(TypeError, DragBase, "A320")


if __name__ == "__main__":
    test_clean_drag_a320()
    test_drag_positive()
    test_nonclean_exceeds_clean()
    test_zero_flap_matches_clean()
    test_wave_drag()
    test_engine_mount()
    test_synonym()
    test_configuration_errors(Path(tempfile.mkdtemp()))
    test_abstract_base()
    print("\n" + "=" * 50)
    print("ALL DRAG TESTS PASSED!")
    print("=" * 50)
