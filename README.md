# nbodyic

Samples initial conditions for N-body simulations. It reads a small TOML
setup file and draws particle positions, velocities and masses. It works out
code units in which G = 1, then writes the particle table to disk.

## Installation

```
pip install .
```

## Command line

```
nbodyic-setup MODE SIMULATION_TAG
```

`MODE` is `uniform` or `isotropic`:

- `uniform`: particles fill a box. Each position and velocity component,
  and each mass, is drawn uniformly from its own range.
- `isotropic`: particles fill a sphere around the centre `(rcx, rcy, rcz)`.
  Radii are drawn between 1e-3 and `rmax` from a fixed rho(r) ~ r^-1 profile.
  The `alpha` entry is kept in the setup file but does not change the profile.
  Directions are isotropic, and `vr`, `vphi` and `vtheta` are each drawn
  uniformly from their ranges.

The first run with a new tag writes a default setup file, `SIMULATION_TAG.setup`,
prints a notice and stops with exit status 0. Edit the file and run the same
command again. That run samples the particles and prints the code units in cgs,
together with the speed of light in code units. It then writes the table to
`SIMULATION_TAG_00000.h5`.

The setup file's `ICSetup` entry must match `MODE`. Missing entries keep their
defaults. An unknown mode, or fewer than two arguments, exits with status 1.

## Snapshot format

`ParticlesTable.extract_particles_table` writes a NumPy `.npz` zip archive,
whatever the file name says. The `.h5` suffix of the command's output is only
a name. Scalars are stored as `params/udist`, `params/utime`, `params/umass`,
`params/N`, `params/t`, `params/Mtot` and `params/SimulationTag`. The columns
are stored as `Table/particle_index`, `Table/x`, `Table/y`, `Table/z`,
`Table/vx`, `Table/vy`, `Table/vz`, `Table/h`, `Table/m` and `Table/dt`.
`ParticlesTable.read_particles_table` reads such a file back.

## Library use

```python
import random

from nbodyic.cli import load_setup
from nbodyic.initial_conditions import setup_initial_condition
from nbodyic.particles import ParticlesTable
from nbodyic.units import UnitsTable

setup = load_setup("uniform", "run1")          # reads run1.setup
units = UnitsTable.from_setup(setup)
table = setup_initial_condition(setup, units, random.Random(42))
table.extract_particles_table("run1_00000.h5")

restored = ParticlesTable.read_particles_table("run1_00000.h5")
```

The setup classes in `nbodyic.particles_setup` are `ParticlesSetupUniform` and
`ParticlesSetupIsotropic`. They are dataclasses, so they can also be built
directly. `write_setup_file(tag)` writes `<tag>.setup` and `read_setup_file(path)`
updates a setup from one. `from_tag(tag)` raises `SetupFileCreated` when it had
to write a default file.

`nbodyic.units` holds `CGSConstants` and `UnitsTable`. The time unit is derived
as sqrt(udist^3 / (umass * G)), and non-positive units raise `ValueError`.

For coordinate work, `nbodyic.coordinates` provides `sph2cart` and `cart2sph`.
They convert phase-space points between `(r, phi, theta, vr, vphi, vtheta)`
and `(x, y, z, vx, vy, vz)`.

## What it does not do

The package only produces initial conditions. It does not evolve them: there
is no force calculation and no time integration. `SimulationSetup` only holds
run options and nothing reads it. Snapshots are not HDF5 files and cannot be
opened with HDF5 tools.

## Tests

```
pip install .[test]
pytest
```