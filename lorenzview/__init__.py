"""Lorenz attractor viewer, skyline rectangle packer and text-editing engine."""

__version__ = "0.1.0"