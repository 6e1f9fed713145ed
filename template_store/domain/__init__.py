"""Domain layer: entities, contracts and errors."""
