"""Debug ID extraction."""
