[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lorenzview"
version = "0.1.0"
description = "Interactive Lorenz attractor viewer with a skyline rectangle packer and a text-editing engine"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = [
    "lorenz",
    "attractor",
    "chaos",
    "runge-kutta",
    "visualization",
    "rectangle-packing",
    "text-editing",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
lorenzview = "lorenzview.app:main"

[tool.hatch.build.targets.wheel]
packages = ["lorenzview"]

[tool.pytest.ini_options]
addopts = "-ra"
