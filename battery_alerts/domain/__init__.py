"""Domain layer: entities, error types and typed results."""
