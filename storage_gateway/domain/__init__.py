"""Domain entities and exceptions."""
