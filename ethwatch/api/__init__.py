"""HTTP API for ethwatch."""
