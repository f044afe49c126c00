"""The particle table and its on-disk snapshot format."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from .units import UnitsTable

_FLOAT_COLUMNS: tuple[str, ...] = ("x", "y", "z", "vx", "vy", "vz", "h", "m", "dt")
_UNIT_NAMES: tuple[str, ...] = ("udist", "utime", "umass")


@dataclass
class SimulationSetup:
    """Run-time options of a simulation."""

    input_file: str = ""
    tmax: float = 0.0
    enable_adaptive_dt: bool = True
    max_adaptive_dt_substeps: int = 3
    OMP_NUM_THREADS: int = 1


class ParticlesTable:
    """Column-wise storage of particle data in code units.

    Snapshots are written as a zip archive of arrays with the entries
    ``params/<name>`` for scalars and ``Table/<name>`` for the columns.
    """

    def __init__(self, unittable: UnitsTable, n: int) -> None:
        n = int(n)
        if n < 0:
            raise ValueError(f"Number of particles must not be negative, got {n}")
        self.unittable = unittable
        self.N = n
        self.t = 0.0
        self.Mtot = 0.0
        self.SimulationTag = ""

        self.particle_index = np.zeros(n, dtype=np.uint32)
        self.x = np.zeros(n, dtype=np.float32)
        self.y = np.zeros(n, dtype=np.float32)
        self.z = np.zeros(n, dtype=np.float32)
        self.vx = np.zeros(n, dtype=np.float32)
        self.vy = np.zeros(n, dtype=np.float32)
        self.vz = np.zeros(n, dtype=np.float32)
        self.m = np.zeros(n, dtype=np.float32)
        self.h = np.zeros(n, dtype=np.float32)
        self.dt = np.zeros(n, dtype=np.float32)

        self._ax = np.zeros(n, dtype=np.float32)
        self._ay = np.zeros(n, dtype=np.float32)
        self._az = np.zeros(n, dtype=np.float32)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(N={self.N}, t={self.t}, "
            f"SimulationTag={self.SimulationTag!r})"
        )

    def _arrays(self) -> dict[str, Any]:
        arrays: dict[str, Any] = {
            f"params/{name}": np.float32(getattr(self.unittable, name))
            for name in _UNIT_NAMES
        }
        arrays["params/N"] = np.int32(self.N)
        arrays["params/t"] = np.float32(self.t)
        arrays["params/Mtot"] = np.float32(self.Mtot)
        arrays["params/SimulationTag"] = np.array(self.SimulationTag)
        arrays["Table/particle_index"] = np.asarray(self.particle_index, dtype=np.uint32)
        for name in _FLOAT_COLUMNS:
            arrays[f"Table/{name}"] = np.asarray(getattr(self, name), dtype=np.float32)
        return arrays

    def extract_particles_table(self, filename: str | Path) -> Path:
        """Write the whole table to ``filename`` and return its path."""
        path = Path(filename)
        with open(path, "wb") as fout:
            np.savez(fout, **self._arrays())
        return path

    @classmethod
    def read_particles_table(cls, filename: str | Path) -> "ParticlesTable":
        """Read a table written by ``extract_particles_table``."""
        path = Path(filename)
        if not path.is_file():
            raise FileNotFoundError(f"Failed to open particle file for reading: {path}")

        with np.load(path, allow_pickle=False) as data:
            entries = set(data.files)
            if "params/N" not in entries:
                raise ValueError(f"Missing /params/N in particle file {path}")
            n = int(data["params/N"].item())

            unit = UnitsTable.from_params(
                {name: data[f"params/{name}"].item() for name in _UNIT_NAMES}
            )
            table = cls(unit, n)

            if "params/t" in entries:
                table.t = float(data["params/t"].item())
            if "params/Mtot" in entries:
                table.Mtot = float(data["params/Mtot"].item())
            if "params/SimulationTag" in entries:
                table.SimulationTag = str(data["params/SimulationTag"].item())

            table.particle_index = _read_column(data, "particle_index", n, np.uint32)
            for name in _FLOAT_COLUMNS:
                setattr(table, name, _read_column(data, name, n, np.float32))
        return table


def _read_column(data: Any, name: str, n: int, dtype: Any) -> np.ndarray:
    key = f"Table/{name}"
    if key not in data.files:
        raise ValueError(f"Missing /{key} in particle file")
    column = np.asarray(data[key], dtype=dtype)
    if column.shape != (n,):
        raise ValueError(
            f"Column /{key} has shape {column.shape}, expected ({n},)"
        )
    return column.copy()