# aeroperf/base.py

"""
Defines the abstract base classes (interfaces) for thrust and drag models.

Concrete models resolve their parameter records once at construction and
are read-only afterwards. Inputs are TAS in knots, altitude in feet and
vertical speed in ft/min; outputs are forces in Newtons for all engines.
"""

from abc import ABC, abstractmethod

from .constants import DESCENT_IDLE_FRACTION


class ThrustBase(ABC):
    """
    Abstract Base Class for an aircraft thrust model.
    """

    def __init__(self, ac):
        self.aircraft_code = ac.upper()

    @abstractmethod
    def takeoff(self, tas_kts, alt_ft):
        """Maximum take-off thrust (N)."""
        pass

    @abstractmethod
    def climb(self, tas_kts, alt_ft, roc_fpm):
        """Maximum climb thrust (N) at a given rate of climb."""
        pass

    def cruise(self, tas_kts, alt_ft):
        """Maximum cruise thrust (N), climb thrust at zero rate of climb."""
        return self.climb(tas_kts, alt_ft, 0.0)

    def descent_idle(self, tas_kts, alt_ft):
        """Idle thrust (N), a fixed fraction of take-off thrust at the same state."""
        return DESCENT_IDLE_FRACTION * self.takeoff(tas_kts, alt_ft)


class DragBase(ABC):
    """
    Abstract Base Class for an aircraft drag model.
    """

    def __init__(self, ac):
        self.aircraft_code = ac.upper()

    @abstractmethod
    def clean(self, mass_kg, tas_kts, alt_ft, vs_fpm=0):
        """Drag (N) in clean configuration."""
        pass

    @abstractmethod
    def nonclean(self, mass_kg, tas_kts, alt_ft, flap_angle_deg, vs_fpm=0, landing_gear=False):
        """Drag (N) with flaps and/or landing gear extended."""
        pass
