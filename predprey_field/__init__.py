"""Grid-based predator-prey population simulation."""

__version__ = "0.1.0"
