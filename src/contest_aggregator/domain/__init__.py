"""Domain layer: models, predicates and errors."""
