"""passkeep: a small personal credential vault served over HTTP."""

__version__ = "0.1.0"
