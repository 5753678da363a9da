"""
fxcalc - Fee-aware currency conversion calculator

Computes converted amounts, fees and effective rates for currency pairs and
serves them over a small REST API.
"""

__version__ = "2.0.0"
