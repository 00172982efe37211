"""Personal-finance domain: entities, metrics and category hierarchy."""
