"""HTTP API for the pronunciation engine."""
