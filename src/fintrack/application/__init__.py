"""Application layer: cache, mutations, validation and resource services."""
