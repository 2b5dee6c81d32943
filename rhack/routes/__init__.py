"""HTTP blueprints for the level service."""
