"""HTTP API for the mentor relay."""
