"""Infrastructure layer: row model and SQL generation."""
