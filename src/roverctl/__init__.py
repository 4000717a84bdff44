"""roverctl — rover instruction runner for bounded two-dimensional surfaces."""

__version__ = "0.1.0"
