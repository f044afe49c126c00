import numpy as np
import pytest

from nbodyic.particles import ParticlesTable
from nbodyic.units import UnitsTable


def test_new_table_is_zeroed():
    pt = ParticlesTable(UnitsTable(), 5)
    assert pt.N == 5
    assert pt.t == 0.0
    for column in (pt.x, pt.y, pt.z, pt.vx, pt.vy, pt.vz, pt.m, pt.h, pt.dt):
        assert column.shape == (5,)
        assert not column.any()
    assert pt.particle_index.dtype == np.uint32
    assert pt.x.dtype == np.float32


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        ParticlesTable(UnitsTable(), -1)


def test_mass_survives_round_trip(tmp_path):
    pt = ParticlesTable(UnitsTable(), 10000)
    pt.m[:] = 1.0
    path = tmp_path / "TEST.hdf5"
    pt.extract_particles_table(path)
    rpt = ParticlesTable.read_particles_table(path)
    msum1 = float(pt.m.sum(dtype=np.float64))
    msum2 = float(rpt.m.sum(dtype=np.float64))
    assert abs(msum1 - msum2) < 1e-5
    assert rpt.N == 10000


def test_full_round_trip(tmp_path):
    unit = UnitsTable(3.08567758128e18, 1.989e33)
    pt = ParticlesTable(unit, 4)
    pt.particle_index[:] = [1, 2, 3, 4]
    pt.x[:] = [0.5, -1.0, 2.0, 3.5]
    pt.vz[:] = [1.0, 2.0, 3.0, 4.0]
    pt.t = 2.5
    pt.Mtot = 7.0
    pt.SimulationTag = "run"
    path = pt.extract_particles_table(tmp_path / "run_00000.h5")
    assert path.name == "run_00000.h5"
    assert path.exists()

    rpt = ParticlesTable.read_particles_table(path)
    assert rpt.particle_index.tolist() == [1, 2, 3, 4]
    assert rpt.x.tolist() == [0.5, -1.0, 2.0, 3.5]
    assert rpt.vz.tolist() == [1.0, 2.0, 3.0, 4.0]
    assert rpt.t == 2.5
    assert rpt.Mtot == 7.0
    assert rpt.SimulationTag == "run"
    assert rpt.unittable.udist == pytest.approx(unit.udist, rel=1e-6)
    assert rpt.unittable.umass == pytest.approx(unit.umass, rel=1e-6)
    assert rpt.unittable.utime == pytest.approx(unit.utime, rel=1e-6)


def test_empty_tag_round_trip(tmp_path):
    pt = ParticlesTable(UnitsTable(), 2)
    path = pt.extract_particles_table(tmp_path / "empty.h5")
    assert ParticlesTable.read_particles_table(path).SimulationTag == ""


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ParticlesTable.read_particles_table(tmp_path / "nothing.h5")


def test_missing_particle_count(tmp_path):
    path = tmp_path / "broken.h5"
    with open(path, "wb") as fout:
        np.savez(fout, **{"params/udist": np.float32(1.0)})
    with pytest.raises(ValueError, match="params/N"):
        ParticlesTable.read_particles_table(path)