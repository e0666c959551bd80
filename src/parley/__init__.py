"""Parley: chat composer with pluggable input enhancers."""

__version__ = "0.1.0"
