"""Physical constants in CGS and the table of code units."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


class CGSConstants:
    """Fundamental physical constants in CGS units."""

    G = 6.67430e-8  # g^-1 cm^3 s^-2
    Msun = 1.98841e33  # g
    AU = 1.49598e13  # cm
    year = 3.15576e7  # s
    c = 2.99792e10  # cm/s
    hbar = 1.05457e-27  # g cm^2 / s
    kB = 1.38065e-16  # g cm^2 / (K s^2)


@dataclass
class UnitsTable:
    """Code units expressed in CGS.

    The time unit follows from the length and mass units so that G = 1
    in code units.
    """

    udist: float = 1.0
    umass: float = 1.0
    utime: float = field(init=False)

    def __post_init__(self) -> None:
        if self.udist <= 0.0 or self.umass <= 0.0:
            raise ValueError(
                "Code units must be positive. "
                f"Received udist = {self.udist:f}, umass = {self.umass:f}"
            )
        self.udist = float(self.udist)
        self.umass = float(self.umass)
        self.utime = math.sqrt(self.udist**3 / (self.umass * CGSConstants.G))

    @classmethod
    def from_setup(cls, setup: Any) -> "UnitsTable":
        """Build the units from an object carrying ``udist`` and ``umass``."""
        return cls(setup.udist, setup.umass)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "UnitsTable":
        """Restore units stored in a parameter mapping.

        The stored ``udist``, ``utime`` and ``umass`` are taken as they are,
        without recomputing the time unit.
        """
        units = cls()
        units.udist = float(params["udist"])
        units.utime = float(params["utime"])
        units.umass = float(params["umass"])
        return units