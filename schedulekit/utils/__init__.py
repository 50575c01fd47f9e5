"""Small pure helpers shared across the engine."""
