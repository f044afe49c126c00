"""Particle setups: TOML setup files and initial-condition samplers."""

from __future__ import annotations

import math
import random
import tomllib
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

from .coordinates import Coordinates, sph2cart

_INDENT = 4
_KEY_WIDTH = 14
_EQ_POS = 18
_VAL_POS = 38
_COMMENT_POS = 50

# Inner cut-off radius of the isotropic radial profile, in code units.
_R_MIN = 1e-3

_SIMULATION_PARAMETERS: tuple[tuple[str, str], ...] = (
    ("N", "Number of particles"),
    ("udist", "Code unit of length in cgs"),
    ("umass", "Code unit of mass in cgs"),
)


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return f"{value:.4e}"
    return str(value)


def format_toml_line(key: str, value: Any, comment: str) -> str:
    """Format one aligned ``key = value  # comment`` line of a setup file.

    Strings are quoted, booleans written as ``true``/``false`` and floats in
    scientific notation with four decimals. The line has no trailing newline.
    """
    val_width = _VAL_POS - _EQ_POS
    line = (
        " " * _INDENT
        + key.ljust(_KEY_WIDTH)
        + " = "
        + _format_value(value).rjust(val_width)
    )
    if comment:
        current = _EQ_POS + val_width + 4
        line += " " * max(0, _COMMENT_POS - current) + "# " + comment
    return line


def _coerce(current: Any, raw: Any) -> Any:
    """Return ``raw`` if it fits the type of ``current``, else ``current``."""
    if isinstance(current, bool):
        return raw if isinstance(raw, bool) else current
    if isinstance(current, int):
        return raw if isinstance(raw, int) and not isinstance(raw, bool) else current
    if isinstance(current, float):
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return float(raw)
        return current
    if isinstance(current, str):
        return raw if isinstance(raw, str) else current
    return current


@dataclass
class SamplingFunctionsSet:
    """Samplers for phase-space coordinates and particle masses."""

    coorsampler: Callable[[], Coordinates]
    msampler: Callable[[], float]


class SetupFileCreated(Exception):
    """Raised when no setup file existed and a default one was written."""

    def __init__(self, filename: str | Path) -> None:
        self.filename = Path(filename)
        super().__init__(
            f"Setup file not found: {self.filename}\n"
            "A default setup file has been created at the same location.\n"
            "Please edit the file and re-run the program."
        )


@dataclass
class ParticlesSetup(ABC):
    """Common parameters of a particle setup."""

    MODE: ClassVar[str] = ""
    DESCRIPTION: ClassVar[str] = ""
    _INITIAL_CONDITIONS: ClassVar[tuple[tuple[str, str], ...]] = ()

    N: int = 10000
    udist: float = 3.08567758128e18
    umass: float = 1.989e33
    SimulationTag: str = ""

    @classmethod
    def from_tag(cls, simulation_tag: str) -> "ParticlesSetup":
        """Load ``<simulation_tag>.setup``.

        If the file does not exist a default one is written and
        ``SetupFileCreated`` is raised so it can be edited first.
        """
        setup = cls()
        path = Path(f"{simulation_tag}.setup")
        if not path.exists():
            setup.write_setup_file(simulation_tag)
            raise SetupFileCreated(path)
        print(f"Reading setup from {path}")
        setup.read_setup_file(path)
        return setup

    @abstractmethod
    def get_sampler(self, rng: random.Random | None = None) -> SamplingFunctionsSet:
        """Build the samplers that match this setup."""

    def write_setup_file(self, simulation_tag: str) -> Path:
        """Write this setup to ``<simulation_tag>.setup`` and return its path."""
        mode_name = self.MODE.capitalize()
        lines = [
            format_toml_line(
                "ICSetup",
                self.MODE,
                f"Initial Condition setup module: `{mode_name}` (DO NOT CHANGE THIS!!)",
            ),
            "[SimulationParameters]",
            format_toml_line(
                "SimulationTag",
                simulation_tag,
                "Tag of simulation (Formatting the output into `Tag_00XXX.h5`)",
            ),
            *(
                format_toml_line(name, getattr(self, name), comment)
                for name, comment in _SIMULATION_PARAMETERS
            ),
            "",
            "[InitialConditions]",
            f"# Initial Condition setup module: `{mode_name}` ({self.DESCRIPTION})",
            *(
                format_toml_line(name, getattr(self, name), comment)
                for name, comment in self._INITIAL_CONDITIONS
            ),
            "",
        ]
        path = Path(f"{simulation_tag}.setup")
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    def read_setup_file(self, filename: str | Path) -> None:
        """Update this setup from a TOML setup file.

        Missing keys, or keys of the wrong type, keep their current values.
        """
        try:
            with open(filename, "rb") as fin:
                config = tomllib.load(fin)
        except tomllib.TOMLDecodeError as err:
            raise ValueError(f"TOML parsing error: {err}") from err

        icsetup = config.get("ICSetup")
        if not isinstance(icsetup, str):
            raise ValueError("Setup file has no string value for 'ICSetup'")
        if icsetup != self.MODE:
            raise ValueError(
                "Wrong setup error: The setup file should be consistent with "
                f'"{self.MODE}", but got "{icsetup}"'
            )

        sim_names = [name for name, _ in _SIMULATION_PARAMETERS] + ["SimulationTag"]
        self._update_from(config.get("SimulationParameters"), sim_names)
        self._update_from(
            config.get("InitialConditions"),
            [name for name, _ in self._INITIAL_CONDITIONS],
        )

    def _update_from(self, section: Any, names: list[str]) -> None:
        if not isinstance(section, Mapping):
            return
        for name in names:
            if name in section:
                setattr(self, name, _coerce(getattr(self, name), section[name]))


@dataclass
class ParticlesSetupUniform(ParticlesSetup):
    """Particles uniform inside a box, with uniformly sampled velocities and masses."""

    MODE: ClassVar[str] = "uniform"
    DESCRIPTION: ClassVar[str] = (
        "Uniform box inside a given cube with given mass sampling range"
    )
    _INITIAL_CONDITIONS: ClassVar[tuple[tuple[str, str], ...]] = (
        ("xmin", "Minimum x-position sampling for particles IN CODE UNITS."),
        ("xmax", "Maximum x-position sampling for particles IN CODE UNITS."),
        ("ymin", "Minimum y-position sampling for particles IN CODE UNITS."),
        ("ymax", "Maximum y-position sampling for particles IN CODE UNITS."),
        ("zmin", "Minimum z-position sampling for particles IN CODE UNITS."),
        ("zmax", "Maximum z-position sampling for particles IN CODE UNITS."),
        ("vxmin", "Minimum vx-position sampling for particles IN CODE UNITS."),
        ("vxmax", "Maximum vx-position sampling for particles IN CODE UNITS."),
        ("vymin", "Minimum vy-position sampling for particles IN CODE UNITS."),
        ("vymax", "Maximum vy-position sampling for particles IN CODE UNITS."),
        ("vzmin", "Minimum vz-position sampling for particles IN CODE UNITS."),
        ("vzmax", "Maximum vz-position sampling for particles IN CODE UNITS."),
        ("mmin", "Minimum mass sampling for particles IN CODE UNITS."),
        ("mmax", "Maximum mass sampling for particles IN CODE UNITS."),
    )

    xmin: float = -1.0
    xmax: float = 1.0
    ymin: float = -1.0
    ymax: float = 1.0
    zmin: float = -1.0
    zmax: float = 1.0
    vxmin: float = -1.0
    vxmax: float = 1.0
    vymin: float = -1.0
    vymax: float = 1.0
    vzmin: float = -1.0
    vzmax: float = 1.0
    mmin: float = 1e-20
    mmax: float = 1.0

    def get_sampler(self, rng: random.Random | None = None) -> SamplingFunctionsSet:
        """Sample every coordinate and the mass uniformly in its range."""
        rng = rng if rng is not None else random.Random()
        ranges = (
            (self.xmin, self.xmax),
            (self.ymin, self.ymax),
            (self.zmin, self.zmax),
            (self.vxmin, self.vxmax),
            (self.vymin, self.vymax),
            (self.vzmin, self.vzmax),
        )

        def coorsampler() -> Coordinates:
            return tuple(rng.uniform(lo, hi) for lo, hi in ranges)  # type: ignore[return-value]

        def msampler() -> float:
            return rng.uniform(self.mmin, self.mmax)

        return SamplingFunctionsSet(coorsampler, msampler)


@dataclass
class ParticlesSetupIsotropic(ParticlesSetup):
    """An isotropic sphere with a power-law radial distribution."""

    MODE: ClassVar[str] = "isotropic"
    DESCRIPTION: ClassVar[str] = (
        "Isotropic sphere with power law distribution along spacial direction."
    )
    _INITIAL_CONDITIONS: ClassVar[tuple[tuple[str, str], ...]] = (
        ("rmax", "Maximum radius for particles IN CODE UNITS."),
        ("alpha", "Power law index r^-alpha"),
        ("rcx", "x-position of center of particles distribution IN CODE UNITS."),
        ("rcy", "y-position of center of particles distribution IN CODE UNITS."),
        ("rcz", "z-position of center of particles distribution IN CODE UNITS."),
        ("vrmin", "Minimum vr-position sampling for particles IN CODE UNITS."),
        ("vrmax", "Maximum vr-position sampling for particles IN CODE UNITS."),
        ("vphimin", "Minimum vphi-position sampling for particles IN CODE UNITS."),
        ("vphimax", "Maximum vphi-position sampling for particles IN CODE UNITS."),
        ("vthetamin", "Minimum vtheta-position sampling for particles IN CODE UNITS."),
        ("vthetamax", "Maximum vtheta-position sampling for particles IN CODE UNITS."),
        ("mmin", "Minimum mass sampling for particles IN CODE UNITS."),
        ("mmax", "Maximum mass sampling for particles IN CODE UNITS."),
    )

    rcx: float = 0.0
    rcy: float = 0.0
    rcz: float = 0.0
    rmax: float = 1.0
    alpha: float = -2.0
    vrmin: float = -1.0
    vrmax: float = 1.0
    vphimin: float = -1.0
    vphimax: float = 1.0
    vthetamin: float = -1.0
    vthetamax: float = 1.0
    mmin: float = 1e-20
    mmax: float = 1.0

    def get_sampler(self, rng: random.Random | None = None) -> SamplingFunctionsSet:
        """Sample positions on a sphere and velocities uniformly in spherical components.

        Radii follow a fixed rho(r) ~ r^-1 profile between 1e-3 and ``rmax``;
        ``alpha`` is kept in the setup but does not change the profile.
        """
        rng = rng if rng is not None else random.Random()
        exponent = -1.0 + 3.0
        r_floor = _R_MIN**exponent
        norm = self.rmax**exponent - r_floor

        def sample_r() -> float:
            return (rng.random() * norm + r_floor) ** (1.0 / exponent)

        def coorsampler() -> Coordinates:
            r = sample_r()
            phi = 2.0 * math.pi * rng.random()
            theta = math.acos(1.0 - 2.0 * rng.random())
            vr = rng.uniform(self.vrmin, self.vrmax)
            vphi = rng.uniform(self.vphimin, self.vphimax)
            vtheta = rng.uniform(self.vthetamin, self.vthetamax)
            x, y, z, vx, vy, vz = sph2cart((r, phi, theta, vr, vphi, vtheta))
            return (x + self.rcx, y + self.rcy, z + self.rcz, vx, vy, vz)

        def msampler() -> float:
            return rng.uniform(self.mmin, self.mmax)

        return SamplingFunctionsSet(coorsampler, msampler)