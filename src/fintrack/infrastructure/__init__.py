"""Infrastructure adapters (HTTP API, file exports)."""
