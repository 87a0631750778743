"""Domain Layer: repository contracts, value objects and exceptions."""
