"""Initial condition sampling, code units and particle-table snapshots for N-body simulations."""

__version__ = "0.0.2"

__all__ = [
    "cli",
    "coordinates",
    "initial_conditions",
    "particles",
    "particles_setup",
    "units",
]