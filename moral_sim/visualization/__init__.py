"""Visualization module - Spectrum and trajectory plots."""

from .plots import SpectrumPlotter

__all__ = ["SpectrumPlotter"]
