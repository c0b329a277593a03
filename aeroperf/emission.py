# aeroperf/emission.py

"""
Emission model.

CO2, H2O, soot and SOx scale with fuel flow through constant emission
factors. NOx, CO and HC use the Boeing Fuel Flow Method 2: the in-flight
fuel flow is corrected to sea level, the ICAO LTO emission-index table is
interpolated at that fuel flow, and the index is corrected back to
ambient conditions.

Fuel flow inputs are kg/s for all engines, outputs are g/s for all engines.
"""

import math

from . import aero
from .aircraft_loader import get_default_provider
from .constants import EI_CO2, EI_H2O, EI_SOOT, EI_SOX
from .exceptions import ConfigurationError


class Emission:
    """
    Emission model for one aircraft/engine combination.

    Args:
        ac: ICAO aircraft type code.
        eng: Engine name or prefix. Defaults to the aircraft's default engine.
        use_synonym: Allow one synonym hop for the aircraft record.
        provider: ParameterProvider to resolve records with.
    """

    def __init__(self, ac, eng=None, use_synonym=False, provider=None):
        provider = provider or get_default_provider()
        self.aircraft_code = ac.upper()
        self.aircraft = provider.aircraft(ac, use_synonym)

        installation = self.aircraft.engine
        self.n_eng = installation.number if installation else 1

        if not eng:
            eng = installation.default if installation else None
            if not eng:
                raise ConfigurationError(f"Default engine not specified for aircraft {self.aircraft_code}.")

        self.engine = provider.engine(eng)

    def _fl2sl(self, ffac, tas_kts, alt_ft):
        """
        Sea-level equivalent fuel flow per engine, and the theta^3.3/delta^1.02
        ambient ratio, for the flight state.
        """
        M = aero.tas_to_mach_kts(tas_kts, alt_ft)
        beta = math.exp(0.2 * M ** 2)
        theta = aero.compute_temperature(alt_ft * aero.FT) / 288.15 / beta
        delta = (1 - 0.0019812 * alt_ft / 288.15) ** 5.255876 / beta ** 3.5
        ratio = theta ** 3.3 / delta ** 1.02

        ff_sl = (ffac / self.n_eng) * theta ** 3.8 / delta * beta
        return ff_sl, ratio

    def co2(self, ffac):
        """CO2 emission (g/s) for fuel flow ffac (kg/s)."""
        return ffac * EI_CO2

    def h2o(self, ffac):
        """H2O emission (g/s) for fuel flow ffac (kg/s)."""
        return ffac * EI_H2O

    def soot(self, ffac):
        """Soot emission (g/s) for fuel flow ffac (kg/s)."""
        return ffac * EI_SOOT

    def sox(self, ffac):
        """SOx emission (g/s) for fuel flow ffac (kg/s)."""
        return ffac * EI_SOX

    def nox(self, ffac, tas_kts, alt_ft=0):
        """NOx emission (g/s), with the humidity correction of BFFM2."""
        ff_sl, ratio = self._fl2sl(ffac, tas_kts, alt_ft)
        nox_sl = aero.interpolate_table(ff_sl, self.engine.lto_fuel_flow, self.engine.ei_nox)

        omega = 1e-3 * math.exp(-0.0001426 * (alt_ft - 12900))
        nox_fl = nox_sl * math.sqrt(1 / ratio) * math.exp(-19 * (omega - 0.00634))

        # convert g/(kg fuel) to g/s for all engines
        return nox_fl * ffac

    def co(self, ffac, tas_kts, alt_ft=0):
        """CO emission (g/s)."""
        ff_sl, ratio = self._fl2sl(ffac, tas_kts, alt_ft)
        co_sl = aero.interpolate_table(ff_sl, self.engine.lto_fuel_flow, self.engine.ei_co)
        return co_sl * ratio * ffac

    def hc(self, ffac, tas_kts, alt_ft=0):
        """HC emission (g/s)."""
        ff_sl, ratio = self._fl2sl(ffac, tas_kts, alt_ft)
        hc_sl = aero.interpolate_table(ff_sl, self.engine.lto_fuel_flow, self.engine.ei_hc)
        return hc_sl * ratio * ffac
