"""Conditionally refresh a local git working copy."""

__version__ = "0.1.0"
