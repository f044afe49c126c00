[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nbodyic"
version = "0.0.2"
description = "Initial condition sampler for N-body simulations, with code units and particle-table snapshots"
requires-python = ">=3.11"
dependencies = [
    "numpy",
]
keywords = ["n-body", "initial conditions", "astrophysics", "simulation", "particles"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
nbodyic-setup = "nbodyic.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["nbodyic"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
