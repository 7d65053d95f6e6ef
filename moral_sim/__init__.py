"""
Moral Spectrum Simulator

A small generative narrative simulator. Fictional people accrue a moral
score over a simulated lifetime of events, and a community of them is
lined up on a red-to-green moral spectrum.
"""

__version__ = "0.1.0"
