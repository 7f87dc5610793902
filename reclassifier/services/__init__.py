"""Classification and auto-reseed services."""
