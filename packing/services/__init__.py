"""Service layer: extraction, stats, filtering, update planning."""
