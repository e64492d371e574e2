"""Flavor-specific google-services.json selection for Flutter Android builds."""

__version__ = "0.1.0"
