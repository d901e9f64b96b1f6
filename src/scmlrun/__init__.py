"""Run sctrace over every SCML file in a source tree."""

__version__ = "0.1.0"
