"""unitctl — unit conversion with step-by-step derivations."""

__version__ = "0.1.0"
