"""Domain layer: entities, schemas and normalization services."""
