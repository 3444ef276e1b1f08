"""HTTP API for Voice Social."""
