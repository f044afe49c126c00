"""Command that samples initial conditions and writes the first snapshot."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .initial_conditions import setup_initial_condition
from .particles_setup import (
    ParticlesSetup,
    ParticlesSetupIsotropic,
    ParticlesSetupUniform,
    SetupFileCreated,
)
from .units import CGSConstants, UnitsTable

_VERSION = "0.0.2"
_RULE = " ==============================================================="

_SETUPS: dict[str, type[ParticlesSetup]] = {
    cls.MODE: cls for cls in (ParticlesSetupUniform, ParticlesSetupIsotropic)
}


def _setup_class(mode: str) -> type[ParticlesSetup]:
    try:
        return _SETUPS[mode]
    except KeyError:
        raise ValueError(f"Unsupported setup mode: {mode}") from None


def load_setup(mode: str, simulation_tag: str) -> ParticlesSetup:
    """Load the setup of the given mode from ``<simulation_tag>.setup``."""
    return _setup_class(mode).from_tag(simulation_tag)


def main(argv: Sequence[str] | None = None) -> int:
    """Sample the initial condition and write ``<tag>_00000.h5``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        print("Usage: setup setup_mode SimulationTag", file=sys.stderr)
        return 1

    mode, simulation_tag = args[0], args[1]
    outputname = f"{simulation_tag}_00000.h5"

    print()
    print(" Initial Condition Sampler")
    print(f"     Version {_VERSION}")

    try:
        setup_cls = _setup_class(mode)
    except ValueError as err:
        print(err, file=sys.stderr)
        return 1

    print(f" Select Initial Condition mode: `{mode}`")
    print(f"     ({setup_cls.DESCRIPTION})\n")

    try:
        setup = load_setup(mode, simulation_tag)
    except SetupFileCreated as created:
        print(created, file=sys.stderr)
        return 0

    units = UnitsTable.from_setup(setup)
    pt = setup_initial_condition(setup, units)

    u = pt.unittable
    vcode = u.udist / u.utime
    ccode = CGSConstants.c / vcode
    print(f"\n{_RULE}\n")
    print(" End sampling:")
    print(f" Number of particles: {pt.N}\n")
    print("  Code units in cgs:")
    print(
        f" udist = {u.udist:.5e} cm, umass = {u.umass:.5e} g, "
        f"utime = {u.utime:.5e} s"
    )
    print(f"\n  with G = 1.0 (code units) and c = {ccode:.5e} (code units)")
    print(f"\n{_RULE}")

    pt.extract_particles_table(outputname)
    return 0


if __name__ == "__main__":
    sys.exit(main())