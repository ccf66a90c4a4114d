"""Source map location and transformation."""
