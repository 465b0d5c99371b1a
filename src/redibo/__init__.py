"""Presentation data engine for the redibo booking platform."""

__version__ = "0.1.0"
