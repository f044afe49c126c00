import pytest

from nbodyic.cli import load_setup, main
from nbodyic.particles import ParticlesTable
from nbodyic.particles_setup import (
    ParticlesSetupIsotropic,
    ParticlesSetupUniform,
    SetupFileCreated,
)


def test_usage_without_arguments(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_unsupported_mode(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["spiral", "run"]) == 1
    assert "Unsupported setup mode: spiral" in capsys.readouterr().err
    assert not (tmp_path / "run.setup").exists()


def test_load_setup_rejects_unknown_mode():
    with pytest.raises(ValueError, match="Unsupported setup mode"):
        load_setup("spiral", "run")


def test_load_setup_picks_class(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    ParticlesSetupIsotropic(N=12).write_setup_file("iso")
    setup = load_setup("isotropic", "iso")
    assert isinstance(setup, ParticlesSetupIsotropic)
    assert setup.N == 12


def test_load_setup_creates_default(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SetupFileCreated):
        load_setup("uniform", "fresh")
    assert (tmp_path / "fresh.setup").exists()


def test_first_run_writes_setup_only(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["uniform", "run"]) == 0
    err = capsys.readouterr().err
    assert "Setup file not found" in err
    assert (tmp_path / "run.setup").exists()
    assert not (tmp_path / "run_00000.h5").exists()


def test_run_writes_snapshot(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    ParticlesSetupUniform(N=50).write_setup_file("run")
    assert main(["uniform", "run"]) == 0
    out = capsys.readouterr().out
    assert "Number of particles: 50" in out
    assert "udist = 3.08568e+18 cm" in out

    pt = ParticlesTable.read_particles_table(tmp_path / "run_00000.h5")
    assert pt.N == 50
    assert pt.SimulationTag == "run"
    assert pt.particle_index.tolist() == list(range(1, 51))