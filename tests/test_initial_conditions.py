import math
import random

import numpy as np
import pytest

from nbodyic.initial_conditions import setup_initial_condition
from nbodyic.particles import ParticlesTable
from nbodyic.particles_setup import ParticlesSetupIsotropic, ParticlesSetupUniform
from nbodyic.units import UnitsTable


def test_uniform_initialization_and_write(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    ParticlesSetupUniform(N=200).write_setup_file("setup")
    setup = ParticlesSetupUniform.from_tag("setup")
    pt = setup_initial_condition(setup, UnitsTable(), random.Random(1))

    assert pt.N == 200
    assert pt.SimulationTag == "setup"
    pt.extract_particles_table(pt.SimulationTag + ".h5")
    rpt = ParticlesTable.read_particles_table("setup.h5")
    assert rpt.m.tolist() == pt.m.tolist()


def test_uniform_values_in_ranges():
    setup = ParticlesSetupUniform(N=300, xmin=2.0, xmax=3.0, mmin=0.5, mmax=1.0)
    pt = setup_initial_condition(setup, UnitsTable(), random.Random(7))
    assert pt.particle_index.tolist() == list(range(1, 301))
    assert np.all((pt.x >= 2.0) & (pt.x <= 3.0))
    assert np.all((pt.y >= -1.0) & (pt.y <= 1.0))
    assert np.all((pt.m >= 0.5) & (pt.m <= 1.0))
    assert pt.Mtot == pytest.approx(float(pt.m.sum(dtype=np.float64)), rel=1e-5)


def test_isotropic_within_sphere():
    setup = ParticlesSetupIsotropic(N=300, rmax=2.0, rcx=5.0, rcy=-1.0, rcz=0.5)
    pt = setup_initial_condition(setup, UnitsTable(), random.Random(3))
    r = np.sqrt(
        (pt.x.astype(np.float64) - 5.0) ** 2
        + (pt.y.astype(np.float64) + 1.0) ** 2
        + (pt.z.astype(np.float64) - 0.5) ** 2
    )
    assert np.all(r <= 2.0 + 1e-4)
    assert np.all(r >= 1e-3 - 1e-4)


def test_seeded_sampling_is_reproducible():
    setup = ParticlesSetupUniform(N=50)
    first = setup_initial_condition(setup, UnitsTable(), random.Random(11))
    second = setup_initial_condition(setup, UnitsTable(), random.Random(11))
    assert first.x.tolist() == second.x.tolist()
    assert first.m.tolist() == second.m.tolist()
    assert first.Mtot == second.Mtot


def test_empty_setup():
    pt = setup_initial_condition(ParticlesSetupUniform(N=0), UnitsTable())
    assert pt.N == 0
    assert pt.Mtot == 0.0
    assert math.isfinite(pt.Mtot)


def test_units_carried_over():
    unit = UnitsTable(2.0, 3.0)
    pt = setup_initial_condition(ParticlesSetupUniform(N=3), unit, random.Random(0))
    assert pt.unittable is unit