# tests/records.py
"""Throw-away parameter records for tests that need a custom data folder."""

import os
import json

TEST_ENGINE = {
    "name": "TF-100", "bpr": 5.0, "max_thrust": 100000,
    "cruise_thrust": None, "cruise_sfc": None, "cruise_mach": None, "cruise_alt": None,
    "ff_to": 1.0, "ff_co": 0.8, "ff_app": 0.3, "ff_idl": 0.1,
    "ei_nox_to": 25.0, "ei_nox_co": 20.0, "ei_nox_app": 9.0, "ei_nox_idl": 4.0,
    "ei_co_to": 0.5, "ei_co_co": 0.5, "ei_co_app": 2.5, "ei_co_idl": 20.0,
    "ei_hc_to": 0.05, "ei_hc_co": 0.05, "ei_hc_app": 0.1, "ei_hc_idl": 2.0,
}

TEST_AIRCRAFT = {
    "aircraft": "Test Twin",
    "mtow": 70000,
    "oew": 40000,
    "mfc": 20000,
    "wing": {"area": 120.0, "span": 34.0, "sweep": 25},
    "cruise": {"height": 11000, "mach": 0.78, "range": 5000},
    "engine": {"type": "turbofan", "mount": "wing", "number": 2, "default": "TF-100", "options": ["TF-100"]},
}

TEST_POLAR = {
    "clean": {"cd0": 0.02, "k": 0.042},
    "flaps": {"lambda_f": 0.95, "cf/c": 0.3, "Sf/S": 0.6},
}

TEST_FUEL_MODELS = [
    {"typecode": "default", "engine_type": None, "c1": 2.0, "c2": 0.618, "c3": 0.115},
]


def _dump(path, data):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as f:
        if isinstance(data, str):
            f.write(data)
        else:
            json.dump(data, f)


def write_data_dir(root, aircraft=None, dragpolar=None, engines=None,
                   fuel_models=None, synonyms=None, wrap=None):
    """
    Write a data folder under root and return its path.

    aircraft, dragpolar and wrap map a type code to its record; a string
    record is written verbatim.
    """
    root = str(root)
    if aircraft is None:
        aircraft = {"tst1": TEST_AIRCRAFT}
    if dragpolar is None:
        dragpolar = {"tst1": TEST_POLAR}
    if engines is None:
        engines = [TEST_ENGINE]
    if fuel_models is None:
        fuel_models = TEST_FUEL_MODELS

    for code, record in aircraft.items():
        _dump(os.path.join(root, "aircraft", f"{code}.json"), record)
    for code, record in dragpolar.items():
        _dump(os.path.join(root, "dragpolar", f"{code}.json"), record)
    for code, record in (wrap or {}).items():
        _dump(os.path.join(root, "wrap", f"{code}.json"), record)
    for folder, table in (synonyms or {}).items():
        _dump(os.path.join(root, folder, "_synonym.json"), table)

    _dump(os.path.join(root, "engines.json"), engines)
    _dump(os.path.join(root, "fuel_models.json"), fuel_models)
    return root


def expect_error(error_class, func, *args, **kwargs):
    try:
        func(*args, **kwargs)
    except error_class as e:
        print(f"  raised {type(e).__name__}: {e}")
        return e
    raise AssertionError(f"{func.__name__} did not raise {error_class.__name__}")
