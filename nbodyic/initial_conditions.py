"""Sampling the initial particle table from a setup."""

from __future__ import annotations

import math
import random

from .particles import ParticlesTable
from .particles_setup import ParticlesSetup
from .units import UnitsTable


def setup_initial_condition(
    setup: ParticlesSetup,
    unit: UnitsTable,
    rng: random.Random | None = None,
) -> ParticlesTable:
    """Sample ``setup.N`` particles with the samplers of ``setup``.

    Particles are numbered from 1 and ``Mtot`` holds their total mass.
    """
    samplers = setup.get_sampler(rng)
    table = ParticlesTable(unit, setup.N)
    table.SimulationTag = setup.SimulationTag

    masses = []
    for i in range(table.N):
        table.particle_index[i] = i + 1
        (
            table.x[i],
            table.y[i],
            table.z[i],
            table.vx[i],
            table.vy[i],
            table.vz[i],
        ) = samplers.coorsampler()
        mass = samplers.msampler()
        table.m[i] = mass
        masses.append(mass)

    table.Mtot = math.fsum(masses)
    return table