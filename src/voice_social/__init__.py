"""Voice Social: short voice clips, interactions and points."""

__version__ = "0.1.0"
