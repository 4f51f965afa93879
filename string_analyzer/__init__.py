"""String Analyzer Service: stores strings, computes their properties and filters them."""

__version__ = "1.0.0"
