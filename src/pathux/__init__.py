"""Path text utilities: component classification and ~-aware resolution."""

__version__ = "0.1.0"
