"""Linear assignment problem solver using the Jonker-Volgenant algorithm."""

__version__ = "0.2.1"