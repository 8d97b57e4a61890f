"""Data access layer: SQLModel tables, sessions and SQL repositories."""
