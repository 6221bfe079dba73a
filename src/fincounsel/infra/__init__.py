"""Infrastructure layer: SQLModel-backed repositories."""
